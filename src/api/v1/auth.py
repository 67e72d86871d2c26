"""
Authentication endpoints.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Header, status

from src.api.deps import Identity
from src.schemas.auth import SignUpRequest, UserResponse
from src.schemas.common import ErrorEnvelope

router = APIRouter()


@router.post(
    "/sign-up",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorEnvelope},
        status.HTTP_409_CONFLICT: {"model": ErrorEnvelope},
    },
)
async def sign_up(data: SignUpRequest, identity: Identity):
    """
    Register a new user account.

    Returns the user with a session token; the password field is masked.
    """
    return await identity.sign_up(data)


@router.get(
    "/login",
    response_model=UserResponse,
    responses={status.HTTP_401_UNAUTHORIZED: {"model": ErrorEnvelope}},
)
async def login(
    identity: Identity,
    authorization: Annotated[Optional[str], Header()] = None,
):
    """
    Continue a session from a bearer token and issue a fresh one.
    """
    return await identity.login(authorization)
