"""
Identity Core - credentials, session tokens and user registration.
"""

from src.kernel.identity.exceptions import (
    IdentityError,
    ValidationFailed,
    DuplicateEmail,
    AuthenticationFailed,
    MissingBearerToken,
    TokenInvalid,
    TokenExpired,
    UserNotFound,
    StorageError,
    InvalidHashFormat,
)
from src.kernel.identity.password import PasswordHasher, get_password_hasher
from src.kernel.identity.jwt import TokenIssuer, TokenClaims, get_token_issuer
from src.kernel.identity.user_directory import UserDirectory, SqlAlchemyUserDirectory
from src.kernel.identity.memory_directory import InMemoryUserDirectory
from src.kernel.identity.identity_service import IdentityService, extract_bearer_token

__all__ = [
    # Errors
    "IdentityError",
    "ValidationFailed",
    "DuplicateEmail",
    "AuthenticationFailed",
    "MissingBearerToken",
    "TokenInvalid",
    "TokenExpired",
    "UserNotFound",
    "StorageError",
    "InvalidHashFormat",
    # Components
    "PasswordHasher",
    "get_password_hasher",
    "TokenIssuer",
    "TokenClaims",
    "get_token_issuer",
    "UserDirectory",
    "SqlAlchemyUserDirectory",
    "InMemoryUserDirectory",
    "IdentityService",
    "extract_bearer_token",
]
