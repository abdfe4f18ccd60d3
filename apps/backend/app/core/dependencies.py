"""FastAPI dependencies for authentication, database and the workflow engine."""

from typing import Annotated
from uuid import UUID

import httpx
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import KeycloakSettings, Settings, get_keycloak_settings, get_settings
from app.core.constants import (
    ACCESS_TOKEN_COOKIE,
    CAMUNDA_AUTH_HEADER,
    KEYCLOAK_TOKEN_COOKIE,
)
from app.core.security import decode_access_token
from app.db.session import get_async_session
from app.models.user import User
from packages.camunda import CamundaClient, resolve_auth_header

# Bearer is optional: browsers authenticate with the access token cookie
security = HTTPBearer(auto_error=False)


def _user_id_from_token(token: str | None) -> UUID | None:
    if not token:
        return None
    payload = decode_access_token(token)
    if payload is None:
        return None
    try:
        return UUID(payload.get("sub") or "")
    except ValueError:
        return None


async def get_optional_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> User | None:
    """
    Dependency resolving the signed-in user, or None.

    Checks the Bearer token first, then the access token cookie. A Bearer
    header that is not one of our tokens (e.g. an identity provider token
    meant for the workflow engine) falls through to the cookie.
    """
    bearer = credentials.credentials if credentials else None
    user_id = _user_id_from_token(bearer) or _user_id_from_token(
        request.cookies.get(ACCESS_TOKEN_COOKIE)
    )
    if user_id is None:
        return None

    result = await session.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_current_user(
    user: Annotated[User | None, Depends(get_optional_user)],
) -> User:
    """
    Dependency to get the current authenticated user.

    Raises:
        HTTPException 401: If no valid token is present or the user is gone.
    """
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_camunda_client(request: Request) -> CamundaClient:
    """The application-wide engine client created at startup."""
    return request.app.state.camunda_client


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Shared client for identity provider calls."""
    return request.app.state.http_client


def get_engine_auth_header(
    request: Request,
    keycloak: Annotated[KeycloakSettings, Depends(get_keycloak_settings)],
) -> str | None:
    """Authorization header to forward to the workflow engine for this request."""
    session_token = (
        request.cookies.get(KEYCLOAK_TOKEN_COOKIE) if keycloak.use_keycloak else None
    )
    return resolve_auth_header(
        session_token=session_token,
        authorization=request.headers.get("Authorization"),
        camunda_auth=request.headers.get(CAMUNDA_AUTH_HEADER),
    )


# Type aliases for convenience
CurrentUser = Annotated[User, Depends(get_current_user)]
OptionalUser = Annotated[User | None, Depends(get_optional_user)]
AsyncSessionDep = Annotated[AsyncSession, Depends(get_async_session)]
CamundaClientDep = Annotated[CamundaClient, Depends(get_camunda_client)]
EngineAuthDep = Annotated[str | None, Depends(get_engine_auth_header)]
HttpClientDep = Annotated[httpx.AsyncClient, Depends(get_http_client)]
SettingsDep = Annotated[Settings, Depends(get_settings)]
KeycloakSettingsDep = Annotated[KeycloakSettings, Depends(get_keycloak_settings)]
