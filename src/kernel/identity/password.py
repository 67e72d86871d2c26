"""
Password hashing utilities using bcrypt.
"""

import re
from typing import Optional

import bcrypt

from src.config import get_settings
from src.kernel.identity.exceptions import InvalidHashFormat

# Number of rounds for bcrypt hashing (12 is secure default)
BCRYPT_ROUNDS = 12

# Modular crypt format: $2b$<cost>$<22 char salt><31 char digest>
_BCRYPT_HASH = re.compile(r"^\$2[abxy]?\$(\d{2})\$[./A-Za-z0-9]{53}$")


class PasswordHasher:
    """Salted, adaptive one-way password transform."""

    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        self.rounds = rounds

    @staticmethod
    def _truncate_password(password: str) -> bytes:
        """
        Truncate password to 72 bytes (bcrypt limit) and encode.

        bcrypt only uses the first 72 bytes of a password.
        """
        return password.encode("utf-8")[:72]

    @staticmethod
    def _cost_of(hashed_password: str) -> int:
        match = _BCRYPT_HASH.match(hashed_password or "")
        if not match:
            raise InvalidHashFormat("Stored password hash is not a bcrypt hash")
        return int(match.group(1))

    def hash(self, password: str) -> str:
        """
        Hash a password using bcrypt.

        Every call draws a fresh salt, so hashing the same password twice
        gives two different strings.
        """
        salt = bcrypt.gensalt(rounds=self.rounds)
        hashed = bcrypt.hashpw(self._truncate_password(password), salt)
        return hashed.decode("utf-8")

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verify a password against its hash.

        Returns:
            True if password matches, False otherwise

        Raises:
            InvalidHashFormat: If ``hashed_password`` is not a bcrypt hash
        """
        self._cost_of(hashed_password)
        try:
            return bcrypt.checkpw(
                self._truncate_password(plain_password),
                hashed_password.encode("utf-8"),
            )
        except ValueError as e:
            raise InvalidHashFormat(str(e)) from e

    def needs_rehash(self, hashed_password: str) -> bool:
        """
        Check if a password hash was produced with a different cost factor.

        Raises:
            InvalidHashFormat: If ``hashed_password`` is not a bcrypt hash
        """
        return self._cost_of(hashed_password) != self.rounds


_default_hasher: Optional[PasswordHasher] = None


def get_password_hasher() -> PasswordHasher:
    """Get or create the default hasher, using the configured cost."""
    global _default_hasher
    if _default_hasher is None:
        _default_hasher = PasswordHasher(rounds=get_settings().bcrypt_rounds)
    return _default_hasher
