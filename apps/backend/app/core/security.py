"""JWT and password security utilities."""

from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt

from app.core.config import get_settings

settings = get_settings()

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"
STATE_TOKEN_TYPE = "oidc_state"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return bcrypt.checkpw(
        plain_password.encode("utf-8"),
        hashed_password.encode("utf-8"),
    )


def hash_password(password: str) -> str:
    """Hash a password for storage."""
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def _encode(claims: dict, token_type: str, expires_delta: timedelta) -> str:
    now = datetime.now(timezone.utc)
    to_encode = {
        **claims,
        "type": token_type,
        "exp": now + expires_delta,
        "iat": now,
    }
    return jwt.encode(
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def create_access_token(
    subject: str,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a JWT access token.

    Args:
        subject: The subject of the token (typically user_id).
        expires_delta: Optional custom expiry time.

    Returns:
        Encoded JWT token string.
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    return _encode({"sub": subject}, ACCESS_TOKEN_TYPE, expires_delta)


def create_refresh_token(
    subject: str,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a long-lived JWT refresh token for ``subject``."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.refresh_token_expire_minutes)
    return _encode({"sub": subject}, REFRESH_TOKEN_TYPE, expires_delta)


def decode_token(token: str, expected_type: str = ACCESS_TOKEN_TYPE) -> dict | None:
    """
    Decode and validate a JWT issued by this application.

    Args:
        token: The JWT token string.
        expected_type: Required value of the ``type`` claim.

    Returns:
        Decoded payload dict, or None if invalid, expired or of another type.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None

    if payload.get("type") != expected_type:
        return None
    return payload


def decode_access_token(token: str) -> dict | None:
    """Decode an access token, returning None when it is not valid."""
    return decode_token(token, ACCESS_TOKEN_TYPE)


def create_state_token(callback_url: str, expires_delta: timedelta) -> str:
    """Sign the sign-in callback URL into an OpenID Connect ``state`` value."""
    return _encode({"callback_url": callback_url}, STATE_TOKEN_TYPE, expires_delta)


def decode_state_token(state: str) -> str | None:
    """Return the callback URL carried by a ``state`` token, or None."""
    payload = decode_token(state, STATE_TOKEN_TYPE)
    if payload is None:
        return None
    return payload.get("callback_url")
