from typing import Any

from fastapi import HTTPException
from sqlalchemy.orm import Session

from hr_training.core.database import SessionLocal
from hr_training.core.decorators import status_for
from hr_training.schemas.response import ServiceResult


def get_db():
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def unwrap(result: ServiceResult) -> Any:
    """Return the payload of a successful result, or raise the matching HTTP error."""
    if not result.success:
        raise HTTPException(status_code=status_for(result.code), detail=result.error)
    return result.data
