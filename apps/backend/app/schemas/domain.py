"""Domain, role and membership schemas."""

from datetime import datetime
from typing import Any

from pydantic import Field

from app.schemas.base import CamelModel


class RoleResponse(CamelModel):
    """A role a member can select when joining a domain."""

    id: str
    name: str
    description: str = ""
    price: str
    is_default: bool = False
    benefits: list[str] = Field(default_factory=list)


class DomainResponse(CamelModel):
    """Public domain card."""

    id: str
    slug: str
    icon: str
    name: str
    tagline: str
    description: str
    cta: str
    region: str
    color: str
    gradient: str
    has_existing_members: bool
    member_count: int
    join_details: dict[str, Any]
    roles: list[RoleResponse]
    available_roles: list[RoleResponse]


class DomainListResponse(CamelModel):
    domains: list[DomainResponse]
    success: bool = True


class MembershipResponse(CamelModel):
    domain_id: str
    role: str | None = Field(default=None, validation_alias="role_id")
    joined_at: datetime


class UserDomainsResponse(CamelModel):
    domains: list[MembershipResponse]
    current_domain_id: str | None = None


class JoinDomainRequest(CamelModel):
    """Both fields are checked by the handler to return the documented error."""

    domain_id: str | None = None
    role_id: str | None = None


class JoinDomainResponse(CamelModel):
    success: bool = True
    domains: list[MembershipResponse]


class CurrentDomainRequest(CamelModel):
    current_domain_id: str | None = None


class CurrentDomainResponse(CamelModel):
    success: bool = True
    current_domain_id: str | None = None
