"""Common schema patterns."""
from typing import Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Structured failure: error kind plus human-readable message."""
    kind: str
    message: str
    detail: Optional[str] = None
