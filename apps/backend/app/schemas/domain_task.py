"""Domain task schemas."""

from datetime import datetime
from uuid import UUID

from app.schemas.base import CamelModel


class DomainTaskResponse(CamelModel):
    id: UUID
    master_task_id: str
    domain: str
    name: str
    description: str
    category: str
    task_type: str
    priority: str
    adopted_at: datetime


class DomainTaskListResponse(CamelModel):
    tasks: list[DomainTaskResponse]
