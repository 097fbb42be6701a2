from typing import Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Client-side error: ``{error}``"""
    error: str


class FailureResponse(BaseModel):
    """Server-side failure: ``{success: false, error[, details]}``"""
    success: bool = False
    error: str
    details: Optional[Any] = None
