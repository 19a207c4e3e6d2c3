import functools
import logging
from typing import Callable, Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hr_training.schemas.response import ServiceResult

logger = logging.getLogger(__name__)

ERROR_CODES = {
    400: "BAD_REQUEST",
    404: "NOT_FOUND",
    409: "CONFLICT",
    422: "VALIDATION_ERROR",
    500: "INTERNAL_SERVER_ERROR",
    503: "STORE_ERROR",
}

CODE_STATUSES = {code: status_code for status_code, code in ERROR_CODES.items()}

def error_code_for(status_code: int) -> str:
    return ERROR_CODES.get(status_code, f"HTTP_{status_code}")

def status_for(code: Optional[str]) -> int:
    return CODE_STATUSES.get(code, 400)

def service_result(store_error_prefix: Optional[str] = None):
    """Wrap a service method so it always returns a ``ServiceResult``.

    ``HTTPException`` raised inside the method becomes a failure carrying its
    detail verbatim. ``SQLAlchemyError`` rolls the session back and becomes a
    ``STORE_ERROR`` failure; it is never retried here. Anything else is
    rolled back, logged with its traceback and returned as an
    ``INTERNAL_SERVER_ERROR`` failure.
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                data = func(*args, **kwargs)
            except HTTPException as exc:
                detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
                logger.warning(f"{func.__name__} rejected: {detail}")
                return ServiceResult.fail(detail, code=error_code_for(exc.status_code))
            except SQLAlchemyError as exc:
                db = _find_session(args, kwargs)
                if db is not None:
                    db.rollback()
                message = str(exc.orig) if getattr(exc, "orig", None) is not None else str(exc)
                if store_error_prefix:
                    message = f"{store_error_prefix}: {message}"
                logger.error(f"{func.__name__} store failure: {message}", exc_info=True)
                return ServiceResult.fail(message, code="STORE_ERROR")
            except Exception as exc:
                db = _find_session(args, kwargs)
                if db is not None:
                    db.rollback()
                logger.exception(f"{func.__name__} failed unexpectedly: {exc}")
                return ServiceResult.fail(str(exc), code="INTERNAL_SERVER_ERROR")
            if isinstance(data, ServiceResult):
                return data
            return ServiceResult.ok(data)
        return wrapper
    return decorator


def _find_session(args: tuple, kwargs: dict) -> Optional[Session]:
    db = kwargs.get("db")
    if isinstance(db, Session):
        return db
    return next((arg for arg in args if isinstance(arg, Session)), None)
