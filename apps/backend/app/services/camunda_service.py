"""Workflow engine lookups shared by the proxy routes."""

import asyncio
import logging
from collections.abc import Awaitable, Iterable
from typing import Any, TypeVar

import httpx

from packages.camunda import CamundaClient, CamundaError, project_filter_task

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Failures of secondary lookups; the primary request still succeeds
LOOKUP_ERRORS = (CamundaError, httpx.HTTPError, ValueError)


async def _optional(awaitable: Awaitable[T], default: T, what: str) -> T:
    try:
        return await awaitable
    except LOOKUP_ERRORS as e:
        logger.warning(f"Ignoring failed {what} lookup: {e}")
        return default


async def resolve_process_definitions(
    client: CamundaClient,
    definition_ids: Iterable[str | None],
    auth_header: str | None,
) -> dict[str, dict[str, Any] | None]:
    """
    Fetch each distinct process definition once, concurrently.

    Returns:
        Mapping of definition id to the definition, or None when the lookup failed.
    """
    unique_ids = list(dict.fromkeys(d for d in definition_ids if d))
    definitions = await asyncio.gather(
        *(
            _optional(
                client.get_process_definition(definition_id, auth_header),
                None,
                f"process definition {definition_id}",
            )
            for definition_id in unique_ids
        )
    )
    return dict(zip(unique_ids, definitions))


async def with_process_definition_names(
    client: CamundaClient,
    tasks: list[dict[str, Any]],
    auth_header: str | None,
) -> list[dict[str, Any]]:
    """Copy each task adding ``processDefinitionName`` (falls back to the definition id)."""
    definitions = await resolve_process_definitions(
        client, (task.get("processDefinitionId") for task in tasks), auth_header
    )

    enhanced = []
    for task in tasks:
        definition_id = task.get("processDefinitionId")
        definition = definitions.get(definition_id) or {}
        enhanced.append(
            {**task, "processDefinitionName": definition.get("name") or definition_id}
        )
    return enhanced


async def project_filter_tasks(
    client: CamundaClient,
    tasks: list[dict[str, Any]],
    auth_header: str | None,
) -> list[dict[str, Any]]:
    """Project filter results, filling in definition names the engine left out."""
    missing = [
        task.get("processDefinitionId")
        for task in tasks
        if not task.get("processDefinitionName")
    ]
    definitions = await resolve_process_definitions(client, missing, auth_header)

    projected = []
    for task in tasks:
        task = dict(task)
        definition = definitions.get(task.get("processDefinitionId"))
        if not task.get("processDefinitionName") and definition:
            task["processDefinitionName"] = definition.get("name") or definition.get("key")
        projected.append(project_filter_task(task))
    return projected


async def get_task_details(
    client: CamundaClient,
    task_id: str,
    auth_header: str | None,
) -> dict[str, Any]:
    """
    Load a task with its variables, form and process instance.

    Only the task lookup is required; the rest degrade to ``{}`` / ``None``.

    Raises:
        CamundaError: If the task itself cannot be loaded.
        httpx.HTTPError: On transport failures loading the task.
    """
    task = await client.get_task(task_id, auth_header)

    instance_id = task.get("processInstanceId")
    variables, form, process_instance = await asyncio.gather(
        _optional(client.get_task_variables(task_id, auth_header), {}, "task variables"),
        _optional(client.get_task_form(task_id, auth_header), None, "task form"),
        _optional(
            client.get_process_instance(instance_id, auth_header),
            None,
            "process instance",
        )
        if instance_id
        else asyncio.sleep(0, result=None),
    )

    return {
        "task": task,
        "variables": variables,
        "form": form,
        "processInstance": process_instance,
    }
