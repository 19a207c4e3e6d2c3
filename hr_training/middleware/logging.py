import logging
import time
import uuid
from typing import Any, Dict

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def _log_fields(request: Request, started: float, **extra: Any) -> Dict[str, Any]:
    fields = {
        "request_id": request.state.request_id,
        "method": request.method,
        "path": request.url.path,
        "duration_ms": round((time.perf_counter() - started) * 1000, 2),
    }
    # the learner a request acts for, when the route names one
    employee_id = request.path_params.get("employee_id") or request.query_params.get("employee_id")
    if employee_id:
        fields["employee_id"] = employee_id
    fields.update(extra)
    return fields


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tags every request with an id (the caller's, if sent) and logs its outcome."""

    async def dispatch(self, request: Request, call_next):
        request.state.request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            fields = _log_fields(request, started, error=str(exc))
            logger.error(f"[{fields['request_id']}] {request.method} {request.url.path} - ERROR", extra=fields)
            raise

        fields = _log_fields(request, started, status_code=response.status_code)
        logger.log(
            logging.WARNING if response.status_code >= 400 else logging.INFO,
            f"[{fields['request_id']}] {request.method} {request.url.path} - {response.status_code} "
            f"({fields['duration_ms']}ms)",
            extra=fields,
        )

        response.headers[REQUEST_ID_HEADER] = request.state.request_id
        return response
