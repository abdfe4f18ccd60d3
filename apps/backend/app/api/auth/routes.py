"""Auth API routes."""

import logging
from uuid import UUID

from fastapi import APIRouter, HTTPException, Request, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.constants import REFRESH_TOKEN_COOKIE
from app.core.cookies import clear_auth_cookies, set_auth_cookies
from app.core.dependencies import AsyncSessionDep, CurrentUser
from app.core.security import (
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    verify_password,
)
from app.models.user import User
from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RefreshRequest,
    RefreshResponse,
    RegisterRequest,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(
    payload: LoginRequest,
    response: Response,
    session: AsyncSessionDep,
) -> LoginResponse:
    """
    Authenticate user, set the auth cookies and return the access token.

    Raises:
        HTTPException 401: If credentials are invalid.
    """
    result = await session.execute(
        select(User).where(User.email == payload.email)
    )
    user = result.scalar_one_or_none()

    # Identity provider accounts have no local password
    if (
        user is None
        or user.hashed_password is None
        or not verify_password(payload.password, user.hashed_password)
    ):
        logger.info(f"Failed login for {payload.email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = create_access_token(subject=str(user.id))
    refresh_token = create_refresh_token(subject=str(user.id))
    set_auth_cookies(response, access_token, refresh_token)

    return LoginResponse(
        user=UserResponse.model_validate(user),
        access_token=access_token,
    )


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    session: AsyncSessionDep,
) -> User:
    """
    Register a new local user.

    Raises:
        HTTPException 400: If email already exists.
    """
    result = await session.execute(
        select(User).where(User.email == payload.email)
    )
    if result.scalar_one_or_none() is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )

    user = User(
        email=payload.email,
        name=payload.name,
        username=payload.username or payload.email.split("@")[0],
        hashed_password=hash_password(payload.password),
    )
    session.add(user)
    await session.flush()
    await session.refresh(user)

    logger.info(f"Registered user {user.id}")
    return user


@router.post("/refresh", response_model=RefreshResponse)
async def refresh(
    request: Request,
    response: Response,
    session: AsyncSessionDep,
    payload: RefreshRequest | None = None,
) -> RefreshResponse:
    """
    Rotate the token pair from a refresh token (body or cookie).

    A missing or invalid token is answered with 200 and null fields, and the
    auth cookies are cleared, so clients do not loop on 401s.
    """
    candidates = [
        payload.refresh_token if payload is not None else None,
        request.cookies.get(REFRESH_TOKEN_COOKIE),
    ]
    user = None
    for token in filter(None, candidates):
        user = await _refresh_token_user(session, token)
        if user is not None:
            break

    if user is None:
        if any(candidates):
            logger.info("Rejected refresh token")
            clear_auth_cookies(response)
        return RefreshResponse()

    access_token = create_access_token(subject=str(user.id))
    set_auth_cookies(response, access_token, create_refresh_token(subject=str(user.id)))
    return RefreshResponse(
        user=UserResponse.model_validate(user),
        access_token=access_token,
    )


async def _refresh_token_user(session: AsyncSession, token: str) -> User | None:
    claims = decode_token(token, REFRESH_TOKEN_TYPE)
    if claims is None:
        return None
    try:
        return await session.get(User, UUID(claims.get("sub") or ""))
    except ValueError:
        return None


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response) -> MessageResponse:
    """Clear every auth cookie."""
    clear_auth_cookies(response)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: CurrentUser,
) -> User:
    """Get current authenticated user info."""
    return current_user
