"""Auth cookie helpers."""

from fastapi import Response

from app.core.config import get_settings
from app.core.constants import (
    ACCESS_TOKEN_COOKIE,
    KEYCLOAK_TOKEN_COOKIE,
    REFRESH_TOKEN_COOKIE,
)

settings = get_settings()


def _set(response: Response, key: str, value: str, max_age: int) -> None:
    response.set_cookie(
        key,
        value,
        max_age=max_age,
        path="/",
        httponly=True,
        secure=settings.secure_cookies,
        samesite="lax",
    )


def set_auth_cookies(response: Response, access_token: str, refresh_token: str) -> None:
    _set(response, ACCESS_TOKEN_COOKIE, access_token, settings.access_token_expire_minutes * 60)
    _set(
        response,
        REFRESH_TOKEN_COOKIE,
        refresh_token,
        settings.refresh_token_expire_minutes * 60,
    )


def set_identity_cookie(response: Response, token: str, expires_in: int) -> None:
    """Store the identity provider access token for forwarding to the engine."""
    _set(response, KEYCLOAK_TOKEN_COOKIE, token, expires_in)


def clear_auth_cookies(response: Response) -> None:
    for key in (ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE, KEYCLOAK_TOKEN_COOKIE):
        response.delete_cookie(
            key,
            path="/",
            httponly=True,
            secure=settings.secure_cookies,
            samesite="lax",
        )
