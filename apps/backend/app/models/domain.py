"""Domain model: the tenant workspace."""

from datetime import datetime
from typing import Any
from uuid import uuid4

from sqlalchemy import Boolean, DateTime, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class Domain(Base):
    """
    Domain represents a tenant workspace.

    Members join a domain under one of its ``available_roles``. Tasks and
    pages are scoped to a domain through its public ``domain_id``.
    """

    __tablename__ = "domains"

    id: Mapped[UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    domain_id: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
        index=True,
        comment="Public identifier referenced by memberships and tasks",
    )
    slug: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    tagline: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # ── Display ──────────────────────────────
    icon: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    color: Mapped[str] = mapped_column(String(50), nullable=False, default="gray")
    gradient: Mapped[str | None] = mapped_column(String(255), nullable=True)
    cta: Mapped[str | None] = mapped_column(String(255), nullable=True)
    region: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # ── Membership ───────────────────────────
    join_details: Mapped[dict[str, Any] | None] = mapped_column(JSONB, nullable=True)
    member_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    available_roles: Mapped[list[dict[str, Any]]] = mapped_column(
        JSONB,
        nullable=False,
        default=list,
        comment="[{id, name, description, monthlyFee, benefits}]",
    )
    navigation: Mapped[list[dict[str, Any]] | None] = mapped_column(
        JSONB,
        nullable=True,
        comment="[{id, name, href, icon, badge}]",
    )

    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    # Relationships
    memberships: Mapped[list["DomainMembership"]] = relationship(
        "DomainMembership",
        back_populates="domain",
        cascade="all, delete-orphan",
    )

    def get_role(self, role_id: str) -> dict[str, Any] | None:
        """Return the role definition with ``role_id``, if the domain offers it."""
        for role in self.available_roles or []:
            if role.get("id") == role_id:
                return role
        return None

    def __repr__(self) -> str:
        return f"<Domain {self.slug}>"
