"""
FastAPI dependencies for database sessions and the identity service.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.config import get_settings
from src.database import get_db
from src.kernel.identity.identity_service import IdentityService
from src.kernel.identity.jwt import TokenIssuer, get_token_issuer
from src.kernel.identity.password import PasswordHasher, get_password_hasher
from src.kernel.identity.user_directory import SqlAlchemyUserDirectory


DbSession = Annotated[AsyncSession, Depends(get_db)]
Hasher = Annotated[PasswordHasher, Depends(get_password_hasher)]
Issuer = Annotated[TokenIssuer, Depends(get_token_issuer)]


def get_identity_service(db: DbSession, hasher: Hasher, issuer: Issuer) -> IdentityService:
    """Build the identity service for one request's unit of work."""
    return IdentityService(
        directory=SqlAlchemyUserDirectory(db),
        hasher=hasher,
        token_issuer=issuer,
        mask_password_on_login=get_settings().mask_password_on_login,
    )


Identity = Annotated[IdentityService, Depends(get_identity_service)]
