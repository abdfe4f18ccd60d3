"""User and domain membership models."""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class User(Base):
    """User account, local or provisioned from the identity provider."""

    __tablename__ = "users"

    id: Mapped[UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    username: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    # Identity provider users have no local password
    hashed_password: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    keycloak_id: Mapped[str | None] = mapped_column(
        String(255),
        unique=True,
        nullable=True,
        index=True,
    )
    current_domain_id: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    # Relationships
    memberships: Mapped[list["DomainMembership"]] = relationship(
        "DomainMembership",
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def get_membership(self, domain_id: str) -> "DomainMembership | None":
        for membership in self.memberships:
            if membership.domain_id == domain_id:
                return membership
        return None

    def __repr__(self) -> str:
        return f"<User {self.email}>"


class DomainMembership(Base):
    """A user's membership of a domain, with the role they selected."""

    __tablename__ = "domain_memberships"
    __table_args__ = (
        UniqueConstraint("user_id", "domain_id", name="uq_domain_memberships_user_domain"),
    )

    id: Mapped[UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    user_id: Mapped[UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    domain_id: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("domains.domain_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # None until the member picks a role
    role_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    user: Mapped["User"] = relationship("User", back_populates="memberships")
    domain: Mapped["Domain"] = relationship("Domain", back_populates="memberships")

    def __repr__(self) -> str:
        return f"<DomainMembership {self.domain_id}:{self.role_id}>"
