"""
Identity service: sign-up and bearer-token login.
"""

import asyncio
from datetime import datetime, timezone
from typing import Optional

from src.kernel.identity.exceptions import DuplicateEmail, MissingBearerToken, UserNotFound
from src.kernel.identity.jwt import TokenIssuer
from src.kernel.identity.password import PasswordHasher
from src.kernel.identity.user_directory import UserDirectory
from src.kernel.models.base import generate_uuid
from src.kernel.models.user import User
from src.logging_config import get_logger
from src.schemas.auth import SignUpRequest, UserResponse

logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: Optional[str]) -> str:
    """
    Return the raw token from an ``Authorization`` header value.

    Raises:
        MissingBearerToken: If the value is absent or does not start with
            ``"Bearer "`` (one space)
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise MissingBearerToken("Authorization Bearer token required")
    return authorization[len(BEARER_PREFIX):]


class IdentityService:
    """
    Service for user identity operations.

    Handles registration and token-based login. Request shape (email syntax,
    password policy) is validated by ``SignUpRequest`` before this service
    runs; email uniqueness is enforced here and again by the directory.
    """

    def __init__(
        self,
        directory: UserDirectory,
        hasher: PasswordHasher,
        token_issuer: TokenIssuer,
        mask_password_on_login: bool = False,
    ):
        self.directory = directory
        self.hasher = hasher
        self.token_issuer = token_issuer
        self.mask_password_on_login = mask_password_on_login

    async def sign_up(
        self,
        request: SignUpRequest,
        now: Optional[datetime] = None,
    ) -> UserResponse:
        """
        Register a new user.

        Args:
            request: Validated registration request
            now: Creation time (defaults to the current time)

        Returns:
            The user projection with a fresh token and a masked password

        Raises:
            DuplicateEmail: If the email is already registered
            StorageError: If the directory fails
        """
        if await self.directory.exists_by_email(request.email):
            logger.info("Sign-up rejected: email already registered")
            raise DuplicateEmail()

        now = now or datetime.now(timezone.utc)

        # bcrypt is CPU-bound; keep it off the event loop
        password_hash = await asyncio.to_thread(self.hasher.hash, request.password)

        user = User(
            id=generate_uuid(),
            name=request.name,
            email=request.email,
            password_hash=password_hash,
            created_at=now,
            last_login_at=now,
            is_active=True,
            # Loaded up front so nothing lazy-loads after the flush
            phones=[],
        )
        for phone in request.phones or []:
            user.add_phone(
                number=phone.number,
                city_code=phone.city_code,
                country_code=phone.country_code,
            )

        # The directory converts a lost uniqueness race into DuplicateEmail
        user = await self.directory.save(user)

        token = self.token_issuer.issue(user.email, user.id, now)
        logger.info(
            "User signed up",
            extra={"user_id": str(user.id), "phone_count": len(user.phones)},
        )
        return UserResponse.from_user(user, token, mask_password=True)

    async def login(
        self,
        authorization: Optional[str],
        now: Optional[datetime] = None,
    ) -> UserResponse:
        """
        Continue a session from a bearer token.

        Args:
            authorization: Raw ``Authorization`` header value, may be None
            now: Login time (defaults to the current time)

        Returns:
            The user projection with a newly issued token

        Raises:
            MissingBearerToken: If the header is absent or malformed
            TokenInvalid: If the token signature does not verify
            TokenExpired: If the token has expired
            UserNotFound: If no user matches the token subject
            StorageError: If the directory fails
        """
        raw_token = extract_bearer_token(authorization)
        now = now or datetime.now(timezone.utc)
        claims = self.token_issuer.parse(raw_token, now)

        user = await self.directory.find_by_email(claims.email)
        if user is None:
            raise UserNotFound("No user for token subject")

        user.record_login(now)
        token = self.token_issuer.issue(user.email, user.id, now)
        user = await self.directory.save(user)

        logger.info("User logged in", extra={"user_id": str(user.id)})
        return UserResponse.from_user(
            user,
            token,
            mask_password=self.mask_password_on_login,
        )
