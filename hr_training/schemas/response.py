from pydantic import BaseModel, Field
from typing import Generic, TypeVar, Optional, Any, Dict

DataType = TypeVar("DataType")

class APIResponse(BaseModel, Generic[DataType]):
    """Generic API response model for consistent output."""
    message: str = Field(..., description="A human-readable message about the response.")
    data: Optional[DataType] = Field(None, description="The actual data returned by the API, if any.")

class ServiceResult(BaseModel, Generic[DataType]):
    """Uniform envelope returned by every training service operation.

    Expected failures (validation, not found) and store failures are both
    reported through ``success=False`` so callers never need a try/except
    to tell them apart.
    """
    success: bool = Field(..., description="Whether the operation succeeded.")
    data: Optional[DataType] = Field(None, description="Operation payload on success.")
    error: Optional[str] = Field(None, description="Human-readable failure message.")
    code: Optional[str] = Field(None, description="Machine-readable failure code.")

    @classmethod
    def ok(cls, data: Any = None) -> "ServiceResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, code: str = "BAD_REQUEST") -> "ServiceResult":
        return cls(success=False, error=error, code=code)

class ErrorDetail(BaseModel):
    """Standardized error detail model."""
    code: str = Field(..., description="Error code for client handling")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error context")

class ErrorResponse(BaseModel):
    """Standardized error response model."""
    error: ErrorDetail = Field(..., description="Error details")
    timestamp: str = Field(..., description="ISO 8601 timestamp of error")
    path: str = Field(..., description="Request path that caused the error")
    request_id: Optional[str] = Field(None, description="Unique request identifier for debugging")
