"""Credential helpers for engine requests."""

from __future__ import annotations

import base64


def decode_basic_username(encoded: str) -> str:
    """
    Return the username part of a base64 ``username:password`` value.

    The username is everything before the first colon.

    Raises:
        binascii.Error: If ``encoded`` is not valid base64.
        UnicodeDecodeError: If the decoded bytes are not UTF-8.
    """
    decoded = base64.b64decode(encoded).decode("utf-8")
    return decoded.split(":")[0]


def resolve_auth_header(
    *,
    session_token: str | None = None,
    authorization: str | None = None,
    camunda_auth: str | None = None,
) -> str | None:
    """
    Pick the Authorization header to forward to the engine.

    Preference order: identity provider session token (as Bearer), the
    caller's own Authorization header, then Basic credentials from
    ``X-Camunda-Auth``. Returns None when nothing is available.
    """
    if session_token:
        return f"Bearer {session_token}"
    if authorization:
        return authorization
    if camunda_auth:
        return f"Basic {camunda_auth}"
    return None


def describe_auth_header(auth_header: str | None) -> str:
    """Short label for logs; never includes the credential itself."""
    if not auth_header:
        return "none"
    return "OAuth" if auth_header.startswith("Bearer") else "Basic"
