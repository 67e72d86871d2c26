"""
Common schema types used across the API.
"""

from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, Field


class ErrorItem(BaseModel):
    """One error entry of the envelope."""

    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    code: int
    detail: str


class ErrorEnvelope(BaseModel):
    """Standard error response: a list holding a single error item."""

    error: List[ErrorItem]

    @classmethod
    def of(cls, code: int, detail: str) -> "ErrorEnvelope":
        return cls(error=[ErrorItem(code=code, detail=detail)])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str
