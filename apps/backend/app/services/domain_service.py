"""Domain lookups, membership changes and API shaping."""

import logging
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.constants import DEFAULT_NAVIGATION, DEFAULT_REGION, DEFAULT_ROLE_ID
from app.models.domain import Domain
from app.models.user import DomainMembership, User
from app.schemas.domain import DomainResponse, RoleResponse

logger = logging.getLogger(__name__)


async def list_active_domains(session: AsyncSession) -> Sequence[Domain]:
    """Active domains ordered by their public identifier."""
    result = await session.execute(
        select(Domain).where(Domain.active.is_(True)).order_by(Domain.domain_id)
    )
    return result.scalars().all()


async def get_domain_by_slug(session: AsyncSession, slug: str) -> Domain | None:
    result = await session.execute(
        select(Domain).where(Domain.slug == slug.lower(), Domain.active.is_(True))
    )
    return result.scalar_one_or_none()


async def get_domain_by_domain_id(session: AsyncSession, domain_id: str) -> Domain | None:
    result = await session.execute(select(Domain).where(Domain.domain_id == domain_id))
    return result.scalar_one_or_none()


# ──────────────────────────────────────────────────────────────────────
# Shaping
# ──────────────────────────────────────────────────────────────────────


def format_role_price(monthly_fee: Any) -> str:
    """``10`` and ``10.0`` both read ``"10 USD"``."""
    if isinstance(monthly_fee, float) and monthly_fee.is_integer():
        monthly_fee = int(monthly_fee)
    if monthly_fee is None:
        monthly_fee = 0
    return f"{monthly_fee} USD"


def to_role_response(role: dict[str, Any]) -> RoleResponse:
    return RoleResponse(
        id=role["id"],
        name=role.get("name", role["id"]),
        description=role.get("description", ""),
        price=format_role_price(role.get("monthlyFee")),
        is_default=role["id"] == DEFAULT_ROLE_ID,
        benefits=role.get("benefits") or [],
    )


def to_domain_response(domain: Domain) -> DomainResponse:
    """Domain card with display defaults filled in."""
    roles = [to_role_response(role) for role in domain.available_roles or []]
    return DomainResponse(
        id=domain.domain_id,
        slug=domain.slug,
        icon=domain.icon,
        name=domain.name,
        tagline=domain.tagline or "",
        description=domain.description,
        cta=domain.cta or f"Join {domain.name}",
        region=domain.region or DEFAULT_REGION,
        color=domain.color,
        gradient=domain.gradient or f"from-{domain.color}-600 to-{domain.color}-400",
        has_existing_members=domain.member_count > 0,
        member_count=domain.member_count,
        join_details=domain.join_details or {},
        roles=roles,
        available_roles=list(roles),
    )


def get_navigation(domain: Domain) -> list[dict[str, Any]]:
    """Navigation entries for the domain shell."""
    if domain.navigation:
        return domain.navigation
    return [
        {**item, "href": item["href"].format(slug=domain.slug)}
        for item in DEFAULT_NAVIGATION
    ]


# ──────────────────────────────────────────────────────────────────────
# Membership
# ──────────────────────────────────────────────────────────────────────


def has_access(user: User, domain: Domain) -> bool:
    return user.get_membership(domain.domain_id) is not None


async def join_domain(
    session: AsyncSession,
    user: User,
    domain: Domain,
    role_id: str,
) -> DomainMembership:
    """
    Add ``user`` to ``domain`` under ``role_id``.

    An existing member changes role instead; the join date is reset either way.
    """
    now = datetime.now(timezone.utc)
    membership = user.get_membership(domain.domain_id)

    if membership is None:
        membership = DomainMembership(
            domain_id=domain.domain_id,
            role_id=role_id,
            joined_at=now,
        )
        user.memberships.append(membership)
        logger.info(f"User {user.id} joined domain {domain.domain_id} as {role_id}")
    else:
        membership.role_id = role_id
        membership.joined_at = now
        logger.info(f"User {user.id} changed role in {domain.domain_id} to {role_id}")

    await session.flush()
    return membership


async def set_current_domain(
    session: AsyncSession,
    user: User,
    domain_id: str | None,
) -> None:
    user.current_domain_id = domain_id
    await session.flush()
