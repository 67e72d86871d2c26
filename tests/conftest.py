"""
Pytest fixtures for user service tests.
"""

from datetime import datetime, timezone
from typing import Callable

import pytest

from src.kernel.identity.identity_service import IdentityService
from src.kernel.identity.jwt import TokenIssuer
from src.kernel.identity.memory_directory import InMemoryUserDirectory
from src.kernel.identity.password import PasswordHasher
from src.schemas.auth import SignUpRequest


TEST_SECRET = "test-secret-key-for-testing-only"

# Lowest bcrypt cost keeps the suite fast
TEST_BCRYPT_ROUNDS = 4


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def token_issuer() -> TokenIssuer:
    """Create a token issuer for tests."""
    return TokenIssuer(
        secret_key=TEST_SECRET,
        algorithm="HS256",
        expiration_seconds=3600,
    )


@pytest.fixture
def directory() -> InMemoryUserDirectory:
    return InMemoryUserDirectory()


@pytest.fixture
def identity_service(
    directory: InMemoryUserDirectory,
    hasher: PasswordHasher,
    token_issuer: TokenIssuer,
) -> IdentityService:
    return IdentityService(
        directory=directory,
        hasher=hasher,
        token_issuer=token_issuer,
    )


@pytest.fixture
def make_sign_up() -> Callable[..., SignUpRequest]:
    """Factory for valid registration requests; keyword arguments override fields."""

    def _make(**overrides) -> SignUpRequest:
        data = {
            "name": "Federico Rosales",
            "email": "a@b.com",
            "password": "Abcdefg12",
            "phones": [
                {"number": 12345678, "city_code": 11, "country_code": "54"},
            ],
        }
        data.update(overrides)
        return SignUpRequest.model_validate(data)

    return _make
