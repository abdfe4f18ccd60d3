"""
Identity provider (Keycloak) sign-in and sign-out flows.

Sign-in uses the OpenID Connect authorization code flow. The URL to return to
after sign-in travels in the ``state`` parameter as a short-lived signed token,
so the callback needs no server-side session.
"""

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import KeycloakSettings, Settings
from app.core.exceptions import AccountConflict
from app.core.security import create_state_token
from app.models.user import User

logger = logging.getLogger(__name__)

CALLBACK_PATH = "/auth/keycloak/callback"
SCOPES = "openid email profile"


def safe_callback_url(url: str | None) -> str:
    """Only same-site paths are allowed as post sign-in targets."""
    if not url:
        return "/"
    # Browsers drop tabs and newlines and read a backslash as a slash
    normalized = re.sub(r"[\t\r\n]", "", url).replace("\\", "/")
    if not normalized.startswith("/") or normalized.startswith("//"):
        return "/"
    return url


def callback_redirect_uri(settings: Settings) -> str:
    return f"{settings.public_base_url.rstrip('/')}{CALLBACK_PATH}"


def build_signin_url(
    keycloak: KeycloakSettings,
    settings: Settings,
    callback_url: str,
) -> str:
    """Authorization endpoint URL that starts sign-in and returns to ``callback_url``."""
    state = create_state_token(
        callback_url,
        timedelta(minutes=keycloak.keycloak_state_ttl_minutes),
    )
    url = httpx.URL(
        keycloak.authorization_endpoint,
        params={
            "client_id": keycloak.keycloak_client_id,
            "response_type": "code",
            "scope": SCOPES,
            "redirect_uri": callback_redirect_uri(settings),
            "state": state,
        },
    )
    return str(url)


def build_local_login_url(settings: Settings, callback_url: str) -> str:
    """Login page used when the identity provider is switched off."""
    return str(httpx.URL(settings.login_url, params={"returnUrl": callback_url}))


def build_signout_url(keycloak: KeycloakSettings, settings: Settings) -> str:
    """End-session endpoint URL returning to the application root."""
    url = httpx.URL(
        keycloak.end_session_endpoint,
        params={
            "client_id": keycloak.keycloak_client_id,
            "post_logout_redirect_uri": f"{settings.public_base_url.rstrip('/')}/",
        },
    )
    return str(url)


async def exchange_code(
    http_client: httpx.AsyncClient,
    keycloak: KeycloakSettings,
    settings: Settings,
    code: str,
) -> dict[str, Any]:
    """
    Exchange an authorization code for tokens.

    Raises:
        httpx.HTTPStatusError: If the identity provider rejects the code.
        httpx.HTTPError: On transport failures.
    """
    data = {
        "grant_type": "authorization_code",
        "code": code,
        "redirect_uri": callback_redirect_uri(settings),
        "client_id": keycloak.keycloak_client_id,
    }
    if keycloak.keycloak_client_secret:
        data["client_secret"] = keycloak.keycloak_client_secret

    response = await http_client.post(keycloak.token_endpoint, data=data)
    response.raise_for_status()
    return response.json()


async def fetch_userinfo(
    http_client: httpx.AsyncClient,
    keycloak: KeycloakSettings,
    access_token: str,
) -> dict[str, Any]:
    """Profile claims (``sub``, ``email``, ``name``, ``preferred_username``)."""
    response = await http_client.get(
        keycloak.userinfo_endpoint,
        headers={"Authorization": f"Bearer {access_token}"},
    )
    response.raise_for_status()
    return response.json()


def _display_name(claims: dict[str, Any]) -> str | None:
    return claims.get("name") or claims.get("preferred_username")


async def provision_user(session: AsyncSession, claims: dict[str, Any]) -> User:
    """
    Find or create the local user for identity provider ``claims``.

    Matches on the provider subject first, then links a local account with the
    same email that no other subject has claimed. Existing users get their name
    refreshed, and their email unless another account already owns it.

    Raises:
        AccountConflict: If the email belongs to an account linked to another subject.
    """
    subject = claims["sub"]
    email = claims.get("email") or ""

    conditions = [User.keycloak_id == subject]
    if email:
        conditions.append(User.email == email)
    result = await session.execute(select(User).where(or_(*conditions)))
    candidates = result.scalars().all()
    user = next((u for u in candidates if u.keycloak_id == subject), None)
    email_owner = next((u for u in candidates if email and u.email == email), None)

    if user is None and email_owner is not None:
        if email_owner.keycloak_id is not None:
            raise AccountConflict(f"{email} is linked to another identity")
        user = email_owner

    if user is None:
        preferred = claims.get("preferred_username")
        timestamp = int(datetime.now(timezone.utc).timestamp() * 1000)
        user = User(
            keycloak_id=subject,
            email=email,
            name=_display_name(claims) or "Unknown User",
            username=preferred or (email.split("@")[0] if email else f"user_{timestamp}"),
        )
        session.add(user)
        await session.flush()
        logger.info(f"Provisioned user {user.id} from identity provider")
        return user

    user.keycloak_id = subject
    if email_owner is None or email_owner is user:
        user.email = email or user.email
    else:
        logger.warning(f"Keeping email of user {user.id}: {email} belongs to {email_owner.id}")
    user.name = _display_name(claims) or user.name
    await session.flush()
    return user
