"""Domain task reads."""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.domain_task import DomainTask


async def list_tasks_by_type(session: AsyncSession, task_type: str) -> Sequence[DomainTask]:
    """Every stored task of ``task_type``, active or not."""
    result = await session.execute(select(DomainTask).where(DomainTask.task_type == task_type))
    return result.scalars().all()


async def list_domain_tasks(
    session: AsyncSession,
    domain_ids: Sequence[str],
) -> Sequence[DomainTask]:
    """Active tasks adopted by any of ``domain_ids``, newest adoption first."""
    if not domain_ids:
        return []
    result = await session.execute(
        select(DomainTask)
        .where(DomainTask.domain.in_(domain_ids), DomainTask.active.is_(True))
        .order_by(DomainTask.adopted_at.desc())
    )
    return result.scalars().all()


def json_type_name(value: Any) -> str:
    """Type name of ``value`` as a JSON client sees it; arrays count as objects."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return "object"


def to_debug_projection(task: DomainTask) -> dict[str, Any]:
    return {
        "id": str(task.id),
        "domain": task.domain,
        "domainType": json_type_name(task.domain),
        "name": task.name,
    }
