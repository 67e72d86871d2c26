"""Identity-level exceptions.

The identity service raises these to express credential and token failures.
The HTTP layer maps each one to its ``status_code`` and the error envelope.
"""

from typing import Optional

from fastapi import status


class IdentityError(Exception):
    """Base class for all identity errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    public_detail: str = "Internal server error"
    # When False, clients only ever see public_detail
    expose_detail: bool = False

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.public_detail
        super().__init__(self.detail)


class ValidationFailed(IdentityError):
    """Input violates a registration rule."""

    status_code = status.HTTP_400_BAD_REQUEST
    public_detail = "Invalid request"
    expose_detail = True


class DuplicateEmail(IdentityError):
    """A user with the same email already exists."""

    status_code = status.HTTP_409_CONFLICT
    public_detail = "User already exists"


class AuthenticationFailed(IdentityError):
    """
    Base for every login failure.

    All subclasses surface with the same status and detail so the response
    does not reveal which check rejected the request.
    """

    status_code = status.HTTP_401_UNAUTHORIZED
    public_detail = "Unauthorized"


class MissingBearerToken(AuthenticationFailed):
    """Authorization header absent or not of the form ``Bearer <token>``."""


class TokenInvalid(AuthenticationFailed):
    """Token is malformed or its signature does not verify."""


class TokenExpired(AuthenticationFailed):
    """Token signature is valid but its expiration has passed."""


class UserNotFound(AuthenticationFailed):
    """Token subject does not match any stored user."""


class StorageError(IdentityError):
    """The storage layer failed; fatal to the current operation."""


class InvalidHashFormat(IdentityError):
    """A stored password hash could not be parsed."""
