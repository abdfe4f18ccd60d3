"""Pure helpers that shape engine queries and results."""

from __future__ import annotations

from typing import Any

DEFAULT_FILTER_PRIORITY = 999

# UI sort field -> engine sortBy
SORT_FIELD_MAP = {
    "created": "created",
    "due": "dueDate",
    "followUp": "followUpDate",
    "priority": "priority",
    "name": "name",
    "assignee": "assignee",
}

FILTER_TASK_FIELDS = (
    "id",
    "name",
    "assignee",
    "created",
    "due",
    "followUp",
    "priority",
    "processDefinitionId",
    "processDefinitionName",
    "processInstanceId",
    "taskDefinitionKey",
    "description",
)


def build_task_query_params(
    *,
    assignee: str | None = None,
    process_definition: str | None = None,
    search_term: str | None = None,
    current_user: str | None = None,
    sorted_by_created: bool = True,
) -> dict[str, str]:
    """
    Build ``/task`` query parameters for the task list filters.

    Args:
        assignee: ``"me"`` (tasks of ``current_user``), ``"unassigned"`` or
            anything else for no assignee restriction.
        process_definition: Process definition key; ``"all"`` or empty
            means every definition.
        search_term: Substring matched against task names.
        current_user: Engine user id used when ``assignee == "me"``.
        sorted_by_created: Newest first ordering (not valid for ``/task/count``).
    """
    params = {"active": "true"}
    if sorted_by_created:
        params["sortBy"] = "created"
        params["sortOrder"] = "desc"

    if assignee == "me" and current_user:
        params["assignee"] = current_user
    elif assignee == "unassigned":
        params["unassigned"] = "true"

    if process_definition and process_definition != "all":
        params["processDefinitionKey"] = process_definition

    if search_term:
        params["nameLike"] = f"%{search_term}%"

    return params


def build_filter_list_body(
    pagination: dict[str, Any] | None = None,
    sorting: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Translate UI pagination/sorting into a ``/filter/{id}/list`` body."""
    body: dict[str, Any] = {}

    if pagination:
        size = pagination["size"]
        body["firstResult"] = (pagination["page"] - 1) * size
        body["maxResults"] = size

    if sorting:
        body["sorting"] = [
            {
                "sortBy": SORT_FIELD_MAP.get(sorting.get("field"), "created"),
                "sortOrder": sorting.get("order") or "desc",
            }
        ]

    return body


def unique_process_definitions(definitions: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Collapse definition versions to one ``{key, name}`` entry per key."""
    seen: set[str] = set()
    unique = []
    for definition in definitions:
        key = definition.get("key")
        if key in seen:
            continue
        seen.add(key)
        unique.append({"key": key, "name": definition.get("name") or key})
    return unique


def filter_priority(task_filter: dict[str, Any]) -> int:
    properties = task_filter.get("properties") or {}
    return properties.get("priority") or DEFAULT_FILTER_PRIORITY


def sort_task_filters(filters: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Keep only task filters, ordered by their configured priority."""
    task_filters = [f for f in filters if f.get("resourceType") == "Task"]
    return sorted(task_filters, key=filter_priority)


def extract_filter_tasks(result: Any) -> list[dict[str, Any]]:
    """Filter results come back as a plain list or as a HAL document."""
    if isinstance(result, list):
        return result
    if isinstance(result, dict):
        return (result.get("_embedded") or {}).get("task") or []
    return []


def project_filter_task(task: dict[str, Any]) -> dict[str, Any]:
    """Reduce an engine task to the fields the task list renders."""
    return {field: task.get(field) for field in FILTER_TASK_FIELDS}
