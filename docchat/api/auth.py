"""Login and registration endpoints backed by the in-memory user store."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from docchat.auth.user_store import (
    InvalidCredentialsError,
    UserExistsError,
    UserStore,
    get_user_store,
)
from docchat.models.schemas import LoginRequest, PublicUser, RegisterRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=PublicUser)
async def login(
    payload: LoginRequest,
    users: UserStore = Depends(get_user_store),
) -> PublicUser:
    """Check credentials and return the user without its password."""
    if not payload.email or not payload.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email and password are required",
        )

    try:
        return users.authenticate(payload.email, payload.password)
    except InvalidCredentialsError as e:
        logger.info(f"Failed login for {payload.email.lower()}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        ) from e


@router.post("/register", response_model=PublicUser, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    users: UserStore = Depends(get_user_store),
) -> PublicUser:
    """Create a user and return it without its password."""
    if not payload.name or not payload.email or not payload.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Name, email, and password are required",
        )

    try:
        return users.register(payload.name, payload.email, payload.password)
    except UserExistsError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        ) from e
