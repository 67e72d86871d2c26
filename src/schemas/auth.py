"""
Authentication schemas.
"""

import re
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from src.kernel.models.user import User

# Returned in place of the hash whenever the password field is masked
MASKED_PASSWORD = "*****"

EMAIL_PATTERN = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 12


def validate_password_policy(v: str) -> str:
    """
    Enforce the password policy.

    8 to 12 characters, letters and digits only, exactly one uppercase
    letter and exactly two digits.
    """
    if not PASSWORD_MIN_LENGTH <= len(v) <= PASSWORD_MAX_LENGTH:
        raise ValueError("Password must be between 8 and 12 characters")
    if not all(c.isascii() and c.isalnum() for c in v):
        raise ValueError("Password may only contain letters and digits")
    if sum(1 for c in v if c.isupper()) != 1:
        raise ValueError("Password must contain exactly one uppercase letter")
    if sum(1 for c in v if c.isdigit()) != 2:
        raise ValueError("Password must contain exactly two digits")
    return v


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive values for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class PhoneSpec(BaseModel):
    """Phone attached at registration."""

    number: int = Field(..., ge=0)
    city_code: int = Field(
        ...,
        ge=0,
        validation_alias=AliasChoices("city_code", "citycode"),
    )
    country_code: str = Field(
        ...,
        min_length=1,
        max_length=8,
        validation_alias=AliasChoices("country_code", "countrycode"),
    )


class SignUpRequest(BaseModel):
    """User registration request."""

    name: Optional[str] = Field(None, max_length=255)
    email: str = Field(..., max_length=255)
    password: str
    phones: Optional[List[PhoneSpec]] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        if not EMAIL_PATTERN.fullmatch(v):
            raise ValueError("Email has an invalid format")
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return validate_password_policy(v)


class PhoneResponse(BaseModel):
    """Phone as returned to clients."""

    number: int
    city_code: int
    country_code: str

    model_config = ConfigDict(from_attributes=True)


class UserResponse(BaseModel):
    """User projection returned by sign-up and login."""

    id: uuid.UUID
    created: datetime
    last_login: datetime
    token: str
    is_active: bool
    name: Optional[str] = None
    email: str
    password: str
    phones: List[PhoneResponse] = Field(default_factory=list)

    @classmethod
    def from_user(cls, user: User, token: str, mask_password: bool) -> "UserResponse":
        return cls(
            id=user.id,
            created=_as_utc(user.created_at),
            last_login=_as_utc(user.last_login_at),
            token=token,
            is_active=bool(user.is_active),
            name=user.name,
            email=user.email,
            password=MASKED_PASSWORD if mask_password else user.password_hash,
            phones=[PhoneResponse.model_validate(p) for p in user.phones],
        )
