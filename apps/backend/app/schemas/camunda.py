"""Request bodies for the workflow engine proxy routes."""

from typing import Any

from pydantic import Field

from app.schemas.base import CamelModel


class TaskFilters(CamelModel):
    assignee: str | None = None
    process_definition: str | None = None
    search_term: str | None = None


class TaskQueryRequest(CamelModel):
    """Task list / count query from the task list UI."""

    filters: TaskFilters | None = None
    current_user: str | None = None


class ClaimTaskRequest(CamelModel):
    user_id: str | None = None


class CompleteTaskRequest(CamelModel):
    variables: dict[str, Any] = Field(default_factory=dict)


class Pagination(CamelModel):
    page: int = Field(default=1, ge=1)
    size: int = Field(default=20, ge=1)


class Sorting(CamelModel):
    field: str | None = None
    order: str | None = None


class FilterTasksRequest(CamelModel):
    pagination: Pagination | None = None
    sorting: Sorting | None = None
