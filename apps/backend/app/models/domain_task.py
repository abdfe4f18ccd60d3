"""Domain task model: a task adopted by a domain."""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import Boolean, DateTime, String, Text, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class DomainTask(Base):
    """
    Snapshot of a master task adopted by a domain.

    Created and mutated by the adoption tooling; request handlers only read it.
    """

    __tablename__ = "domain_tasks"

    id: Mapped[UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    master_task_id: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
    )

    # ── Ownership ────────────────────────────
    domain: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
        comment="domains.domain_id of the adopting domain",
    )
    adopted_by: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    adopted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    # ── Content ──────────────────────────────
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    category: Mapped[str] = mapped_column(String(50), nullable=False, default="operational")
    task_type: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        default="task",
        index=True,
    )
    priority: Mapped[str] = mapped_column(String(20), nullable=False, default="normal")

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

    def __repr__(self) -> str:
        return f"<DomainTask {self.domain}:{self.name}>"
