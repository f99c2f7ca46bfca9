"""
Common response bodies shared by all endpoints.
"""

from typing import Optional
from pydantic import BaseModel


class MessageResponse(BaseModel):
    """
    Plain message body.

    Used for validation errors (400/404), generic downstream failures (500)
    and the delete-all success response.
    """
    message: str


class SuccessFlagResponse(BaseModel):
    """Body carrying a success flag and an optional message."""
    success: bool
    message: Optional[str] = None


class ErrorResponse(BaseModel):
    """Error body with free-text details."""
    error: str
    details: Optional[str] = None


class InternalErrorResponse(BaseModel):
    """Body returned by the global exception handler."""
    success: bool = False
    detail: str
