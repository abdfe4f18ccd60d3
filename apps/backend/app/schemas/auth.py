"""Authentication schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import EmailStr, Field

from app.schemas.base import CamelModel


class LoginRequest(CamelModel):
    """Request schema for login."""

    email: EmailStr
    password: str = Field(min_length=6)


class RegisterRequest(CamelModel):
    """Request schema for user registration."""

    email: EmailStr
    password: str = Field(min_length=6)
    name: str = ""
    username: str | None = None


class RefreshRequest(CamelModel):
    """Refresh token supplied in the body; tried before the cookie."""

    refresh_token: str | None = None


class UserResponse(CamelModel):
    """Response schema for user info."""

    id: UUID
    email: str
    name: str
    username: str
    current_domain_id: str | None = None
    created_at: datetime


class LoginResponse(CamelModel):
    """Response schema for successful login."""

    user: UserResponse
    access_token: str
    token_type: str = "bearer"


class RefreshResponse(CamelModel):
    """Both fields are null when the refresh token was missing or invalid."""

    user: UserResponse | None = None
    access_token: str | None = None


class MessageResponse(CamelModel):
    message: str
