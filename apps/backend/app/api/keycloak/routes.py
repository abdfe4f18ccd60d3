"""Identity provider redirect pages."""

import logging

import httpx
from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import RedirectResponse

from app.core.cookies import clear_auth_cookies, set_auth_cookies, set_identity_cookie
from app.core.dependencies import (
    AsyncSessionDep,
    HttpClientDep,
    KeycloakSettingsDep,
    SettingsDep,
)
from app.core.exceptions import AccountConflict
from app.core.security import create_access_token, create_refresh_token, decode_state_token
from app.services.keycloak_service import (
    build_local_login_url,
    build_signin_url,
    build_signout_url,
    exchange_code,
    fetch_userinfo,
    provision_user,
    safe_callback_url,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# Fallback lifetime when the token response omits expires_in
DEFAULT_TOKEN_LIFETIME_SECONDS = 300


@router.get("/keycloak-signin")
async def keycloak_signin(
    settings: SettingsDep,
    keycloak: KeycloakSettingsDep,
    callback_url: str | None = Query(default=None, alias="callbackUrl"),
) -> RedirectResponse:
    """Send the browser straight to the identity provider, keeping ``callbackUrl``."""
    target = safe_callback_url(callback_url)
    if not keycloak.use_keycloak:
        return RedirectResponse(
            build_local_login_url(settings, target),
            status_code=status.HTTP_302_FOUND,
        )
    return RedirectResponse(
        build_signin_url(keycloak, settings, target),
        status_code=status.HTTP_302_FOUND,
    )


@router.get("/keycloak-signout")
async def keycloak_signout(
    settings: SettingsDep,
    keycloak: KeycloakSettingsDep,
) -> RedirectResponse:
    """Drop the local session and end the identity provider session."""
    url = build_signout_url(keycloak, settings) if keycloak.use_keycloak else "/"
    response = RedirectResponse(url, status_code=status.HTTP_302_FOUND)
    clear_auth_cookies(response)
    return response


@router.get("/keycloak/callback")
async def keycloak_callback(
    session: AsyncSessionDep,
    http_client: HttpClientDep,
    settings: SettingsDep,
    keycloak: KeycloakSettingsDep,
    code: str = Query(...),
    state: str = Query(...),
) -> RedirectResponse:
    """
    Finish sign-in: exchange the code, provision the user, set cookies.

    Raises:
        HTTPException 404: If the identity provider is disabled.
        HTTPException 400: If ``state`` is invalid or expired.
        HTTPException 502: If the identity provider rejects the exchange.
        HTTPException 409: If the email belongs to an account linked elsewhere.
    """
    if not keycloak.use_keycloak:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")

    callback_url = decode_state_token(state)
    if callback_url is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid or expired sign-in state",
        )

    try:
        tokens = await exchange_code(http_client, keycloak, settings, code)
        access_token = tokens["access_token"]
        claims = await fetch_userinfo(http_client, keycloak, access_token)
    except (httpx.HTTPError, KeyError, ValueError) as e:
        logger.error(f"Identity provider sign-in failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Identity provider sign-in failed",
        )

    try:
        user = await provision_user(session, claims)
    except AccountConflict as e:
        logger.warning(f"Identity provider sign-in refused: {e}")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email is already linked to another account",
        )

    response = RedirectResponse(
        safe_callback_url(callback_url),
        status_code=status.HTTP_302_FOUND,
    )
    set_auth_cookies(
        response,
        create_access_token(subject=str(user.id)),
        create_refresh_token(subject=str(user.id)),
    )
    set_identity_cookie(
        response,
        access_token,
        int(tokens.get("expires_in") or DEFAULT_TOKEN_LIFETIME_SECONDS),
    )
    return response
