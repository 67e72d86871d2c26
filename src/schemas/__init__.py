"""
Pydantic schemas for API request/response validation.
"""

from src.schemas.auth import (
    PhoneSpec,
    PhoneResponse,
    SignUpRequest,
    UserResponse,
    MASKED_PASSWORD,
)
from src.schemas.common import ErrorItem, ErrorEnvelope, HealthResponse

__all__ = [
    # Auth
    "PhoneSpec",
    "PhoneResponse",
    "SignUpRequest",
    "UserResponse",
    "MASKED_PASSWORD",
    # Common
    "ErrorItem",
    "ErrorEnvelope",
    "HealthResponse",
]
