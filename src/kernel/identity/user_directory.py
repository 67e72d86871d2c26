"""
User directory: the identity core's only view of persisted users.
"""

from typing import Optional, Protocol

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.kernel.identity.exceptions import DuplicateEmail, StorageError
from src.kernel.models.user import User
from src.logging_config import get_logger

logger = get_logger(__name__)


class UserDirectory(Protocol):
    """Protocol defining the interface for user record access."""

    async def exists_by_email(self, email: str) -> bool:
        """Return True if a user with exactly this email is stored."""
        ...

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email. Return User or None if not found."""
        ...

    async def save(self, user: User) -> User:
        """
        Insert or update a user together with its phones.

        Raises DuplicateEmail when the email is already taken by another
        user, StorageError on any other storage failure.
        """
        ...


class SqlAlchemyUserDirectory:
    """
    UserDirectory backed by one SQLAlchemy async session.

    ``save`` flushes immediately so the unique constraint on ``users.email``
    is enforced inside the call; the surrounding unit of work commits.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def exists_by_email(self, email: str) -> bool:
        try:
            result = await self.session.execute(
                select(exists().where(User.email == email))
            )
            return bool(result.scalar())
        except SQLAlchemyError as e:
            logger.error("User existence check failed", extra={"error": str(e)})
            raise StorageError(str(e)) from e

    async def find_by_email(self, email: str) -> Optional[User]:
        try:
            result = await self.session.execute(
                select(User).where(User.email == email)
            )
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("User lookup failed", extra={"error": str(e)})
            raise StorageError(str(e)) from e

    async def save(self, user: User) -> User:
        try:
            self.session.add(user)
            await self.session.flush()
            return user
        except IntegrityError as e:
            await self.session.rollback()
            if "email" in str(e.orig).lower():
                logger.warning(
                    "Email uniqueness constraint rejected insert",
                    extra={"user_id": str(user.id)},
                )
                raise DuplicateEmail() from e
            logger.error("Integrity error saving user", extra={"error": str(e.orig)})
            raise StorageError(str(e.orig)) from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Failed to save user", extra={"error": str(e)})
            raise StorageError(str(e)) from e
