"""
JWT session tokens.

Tokens are stateless and self-verifying: there is no server-side session
store, and a fresh token issued on every login is the only way a session
is renewed.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from jose import JWTError, jwt
from pydantic import BaseModel

from src.config import get_settings
from src.kernel.identity.exceptions import TokenExpired, TokenInvalid

DEFAULT_EXPIRATION_SECONDS = 3600


class TokenClaims(BaseModel):
    """Verified claims carried by a session token."""

    email: str  # sub
    uid: str
    issued_at: datetime
    expires_at: datetime
    jti: str


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class TokenIssuer:
    """
    Signs and parses compact HS256 session tokens.

    Claims: ``sub`` (email), ``uid`` (user id as a string), ``iat``, ``exp``
    and a random ``jti`` so two tokens issued within the same second differ.
    """

    def __init__(
        self,
        secret_key: Optional[str] = None,
        algorithm: Optional[str] = None,
        expiration_seconds: Optional[int] = None,
    ):
        settings = get_settings()
        self.secret_key = secret_key or settings.jwt_secret
        self.algorithm = algorithm or settings.jwt_algorithm
        self.expiration_seconds = (
            expiration_seconds
            if expiration_seconds is not None
            else settings.jwt_expiration_seconds
        )

    def issue(
        self,
        subject_email: str,
        subject_id: Union[uuid.UUID, str],
        now: Optional[datetime] = None,
    ) -> str:
        """
        Create a signed token for a user.

        Args:
            subject_email: User's email, stored as the subject
            subject_id: User's unique identifier, stored as the ``uid`` claim
            now: Issue time (defaults to the current time)

        Returns:
            The compact token string

        Raises:
            ValueError: If the email is empty or the id is missing
        """
        if not subject_email:
            raise ValueError("subject_email must not be empty")
        if subject_id is None:
            raise ValueError("subject_id must not be None")

        issued_at = _to_utc(now or datetime.now(timezone.utc))
        expires_at = issued_at + timedelta(seconds=self.expiration_seconds)

        payload = {
            "sub": subject_email,
            "uid": str(subject_id),
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": str(uuid.uuid4()),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def parse(self, token: str, now: Optional[datetime] = None) -> TokenClaims:
        """
        Verify a token and return its claims.

        Expiration is checked against ``now`` (defaults to the current time);
        a token stays valid up to and including its ``exp`` second.

        Raises:
            TokenInvalid: If the token is malformed, its signature does not
                verify, or a required claim is missing
            TokenExpired: If the expiration time has passed
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except JWTError as e:
            raise TokenInvalid(str(e)) from e

        email = payload.get("sub")
        uid = payload.get("uid")
        exp = payload.get("exp")
        iat = payload.get("iat")
        if not email or not uid or not isinstance(exp, int) or not isinstance(iat, int):
            raise TokenInvalid("Token is missing required claims")

        current = _to_utc(now or datetime.now(timezone.utc))
        if current.timestamp() > exp:
            raise TokenExpired("Token has expired")

        return TokenClaims(
            email=email,
            uid=uid,
            issued_at=datetime.fromtimestamp(iat, tz=timezone.utc),
            expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
            jti=payload.get("jti", ""),
        )


_token_issuer: Optional[TokenIssuer] = None


def get_token_issuer() -> TokenIssuer:
    """Get or create the default token issuer."""
    global _token_issuer
    if _token_issuer is None:
        _token_issuer = TokenIssuer()
    return _token_issuer
