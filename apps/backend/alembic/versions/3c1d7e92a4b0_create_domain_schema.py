"""create_domain_schema

Revision ID: 3c1d7e92a4b0
Revises:
Create Date: 2026-10-19 10:20:00.000000

Adds:
- domains table (tenant workspaces, roles and navigation as JSONB)
- users table (local and identity provider accounts)
- domain_memberships table (user <-> domain with the selected role)
- domain_tasks table (tasks adopted by a domain)
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "3c1d7e92a4b0"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamp(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        server_default=sa.text("now()"),
        nullable=False,
    )


def upgrade() -> None:
    """Create the domain, user and task tables."""

    # ── domains ───────────────────────────────────────────────────────
    op.create_table(
        "domains",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column(
            "domain_id",
            sa.String(length=100),
            nullable=False,
            comment="Public identifier referenced by memberships and tasks",
        ),
        sa.Column("slug", sa.String(length=100), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("tagline", sa.String(length=255), nullable=True),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("icon", sa.String(length=50), nullable=False),
        sa.Column("color", sa.String(length=50), nullable=False),
        sa.Column("gradient", sa.String(length=255), nullable=True),
        sa.Column("cta", sa.String(length=255), nullable=True),
        sa.Column("region", sa.String(length=100), nullable=True),
        sa.Column("join_details", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("member_count", sa.Integer(), nullable=False),
        sa.Column(
            "available_roles",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            comment="[{id, name, description, monthlyFee, benefits}]",
        ),
        sa.Column(
            "navigation",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=True,
            comment="[{id, name, href, icon, badge}]",
        ),
        sa.Column("active", sa.Boolean(), nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_domains_domain_id"), "domains", ["domain_id"], unique=True)
    op.create_index(op.f("ix_domains_slug"), "domains", ["slug"], unique=True)

    # ── users ─────────────────────────────────────────────────────────
    op.create_table(
        "users",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("username", sa.String(length=255), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=True),
        sa.Column("keycloak_id", sa.String(length=255), nullable=True),
        sa.Column("current_domain_id", sa.String(length=100), nullable=True),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)
    op.create_index(op.f("ix_users_keycloak_id"), "users", ["keycloak_id"], unique=True)

    # ── domain_memberships ────────────────────────────────────────────
    op.create_table(
        "domain_memberships",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("domain_id", sa.String(length=100), nullable=False),
        sa.Column("role_id", sa.String(length=100), nullable=True),
        _timestamp("joined_at"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["domain_id"], ["domains.domain_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "domain_id", name="uq_domain_memberships_user_domain"),
    )
    op.create_index(
        op.f("ix_domain_memberships_user_id"), "domain_memberships", ["user_id"], unique=False
    )
    op.create_index(
        op.f("ix_domain_memberships_domain_id"), "domain_memberships", ["domain_id"], unique=False
    )

    # ── domain_tasks ──────────────────────────────────────────────────
    op.create_table(
        "domain_tasks",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("master_task_id", sa.String(length=100), nullable=False),
        sa.Column(
            "domain",
            sa.String(length=100),
            nullable=False,
            comment="domains.domain_id of the adopting domain",
        ),
        sa.Column("adopted_by", sa.String(length=100), nullable=False),
        _timestamp("adopted_at"),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category", sa.String(length=50), nullable=False),
        sa.Column("task_type", sa.String(length=100), nullable=False),
        sa.Column("priority", sa.String(length=20), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_domain_tasks_master_task_id"), "domain_tasks", ["master_task_id"], unique=False
    )
    op.create_index(op.f("ix_domain_tasks_domain"), "domain_tasks", ["domain"], unique=False)
    op.create_index(op.f("ix_domain_tasks_task_type"), "domain_tasks", ["task_type"], unique=False)


def downgrade() -> None:
    """Drop the domain, user and task tables."""
    op.drop_index(op.f("ix_domain_tasks_task_type"), table_name="domain_tasks")
    op.drop_index(op.f("ix_domain_tasks_domain"), table_name="domain_tasks")
    op.drop_index(op.f("ix_domain_tasks_master_task_id"), table_name="domain_tasks")
    op.drop_table("domain_tasks")

    op.drop_index(op.f("ix_domain_memberships_domain_id"), table_name="domain_memberships")
    op.drop_index(op.f("ix_domain_memberships_user_id"), table_name="domain_memberships")
    op.drop_table("domain_memberships")

    op.drop_index(op.f("ix_users_keycloak_id"), table_name="users")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_table("users")

    op.drop_index(op.f("ix_domains_slug"), table_name="domains")
    op.drop_index(op.f("ix_domains_domain_id"), table_name="domains")
    op.drop_table("domains")
