"""
Workflow engine proxy routes.

Each handler forwards the caller's engine credentials (see
``get_engine_auth_header``) to the Camunda REST API and reshapes the answer
for the task list UI. Upstream failures map to fixed ``{"error": ...}`` bodies.
"""

import logging
from typing import Annotated, Any

import httpx
from fastapi import APIRouter, Header, status
from fastapi.responses import JSONResponse

from app.core.constants import CAMUNDA_AUTH_HEADER
from app.core.dependencies import CamundaClientDep, CurrentUser, EngineAuthDep
from app.schemas.camunda import (
    ClaimTaskRequest,
    CompleteTaskRequest,
    FilterTasksRequest,
    TaskQueryRequest,
)
from app.services.camunda_service import (
    get_task_details,
    project_filter_tasks,
    with_process_definition_names,
)
from packages.camunda import (
    CamundaError,
    build_filter_list_body,
    build_task_query_params,
    decode_basic_username,
    describe_auth_header,
    extract_filter_tasks,
    sort_task_filters,
    unique_process_definitions,
)

logger = logging.getLogger(__name__)

router = APIRouter()

ENGINE_AUTH_FAILED = "Camunda authentication failed. Please select a user."

CamundaAuthHeader = Annotated[str | None, Header(alias=CAMUNDA_AUTH_HEADER)]


def _error(message: str, status_code: int, **extra: Any) -> JSONResponse:
    return JSONResponse({"error": message, **extra}, status_code=status_code)


def _query_params(payload: TaskQueryRequest, *, sorted_by_created: bool) -> dict[str, str]:
    filters = payload.filters
    return build_task_query_params(
        assignee=filters.assignee if filters else None,
        process_definition=filters.process_definition if filters else None,
        search_term=filters.search_term if filters else None,
        current_user=payload.current_user,
        sorted_by_created=sorted_by_created,
    )


# ──────────────────────────────────────────────────────────────────────
# Credentials
# ──────────────────────────────────────────────────────────────────────


@router.get("/test-auth")
async def camunda_test_auth(
    client: CamundaClientDep,
    camunda_auth: CamundaAuthHeader = None,
) -> dict:
    """
    Forward ``X-Camunda-Auth`` as Basic credentials and echo the engine's answer.

    No error handling: an unreachable engine or a malformed header fails the
    request.
    """
    if not camunda_auth:
        return {
            "authReceived": False,
            "message": "No X-Camunda-Auth header found",
        }

    username = decode_basic_username(camunda_auth)
    response = await client.request(
        "GET",
        "/task",
        auth_header=f"Basic {camunda_auth}",
        params={"active": "true"},
    )
    tasks = response.json()

    return {
        "authReceived": True,
        "username": username,
        "camundaStatus": response.status_code,
        "taskCount": len(tasks) if isinstance(tasks, list) else 0,
        "tasks": tasks,
    }


@router.post("/auth/verify")
async def verify_auth(
    client: CamundaClientDep,
    camunda_auth: CamundaAuthHeader = None,
):
    """Check Basic credentials against a cheap authenticated engine call."""
    if not camunda_auth:
        return _error("No authentication provided", status.HTTP_401_UNAUTHORIZED)

    try:
        count = await client.count_tasks(auth_header=f"Basic {camunda_auth}")
    except CamundaError as e:
        if e.is_unauthorized:
            return JSONResponse(
                {"authenticated": False, "error": "Invalid credentials"},
                status_code=status.HTTP_401_UNAUTHORIZED,
            )
        return JSONResponse(
            {"authenticated": False, "error": "Authentication check failed"},
            status_code=e.status_code,
        )
    except (httpx.HTTPError, ValueError, KeyError) as e:
        logger.error(f"Auth verification error: {e}", exc_info=True)
        return JSONResponse(
            {"authenticated": False, "error": "Failed to verify authentication"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return {"authenticated": True, "count": count}


# ──────────────────────────────────────────────────────────────────────
# Tasks
# ──────────────────────────────────────────────────────────────────────


@router.post("/tasks")
async def search_tasks(
    payload: TaskQueryRequest,
    client: CamundaClientDep,
    auth_header: EngineAuthDep,
):
    """Active tasks matching the UI filters, newest first, with definition names."""
    try:
        tasks = await client.list_tasks(
            _query_params(payload, sorted_by_created=True), auth_header
        )
        return await with_process_definition_names(client, tasks, auth_header)
    except CamundaError as e:
        if e.is_unauthorized:
            return _error(ENGINE_AUTH_FAILED, status.HTTP_401_UNAUTHORIZED)
        # Empty list keeps the task list rendering
        logger.error(f"Camunda API error: {e.message}")
        return []
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Error fetching tasks: {e}", exc_info=True)
        return _error("Failed to fetch tasks", status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.get("/tasks")
async def list_process_definitions(
    client: CamundaClientDep,
    auth_header: EngineAuthDep,
):
    """Process definitions for the filter dropdown, one per key."""
    try:
        definitions = await client.list_process_definitions(auth_header)
    except CamundaError as e:
        logger.error(f"Camunda API error: {e.message}")
        return []
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Error fetching process definitions: {e}", exc_info=True)
        return _error(
            "Failed to fetch process definitions", status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    return unique_process_definitions(definitions)


@router.post("/tasks/count")
async def count_tasks(
    payload: TaskQueryRequest,
    client: CamundaClientDep,
    auth_header: EngineAuthDep,
):
    """Number of active tasks matching the UI filters."""
    try:
        count = await client.count_tasks(
            _query_params(payload, sorted_by_created=False), auth_header
        )
    except CamundaError as e:
        if e.is_unauthorized:
            return _error(ENGINE_AUTH_FAILED, status.HTTP_401_UNAUTHORIZED)
        logger.error(f"Camunda API error: {e.message}")
        return {"count": 0}
    except (httpx.HTTPError, ValueError, KeyError) as e:
        logger.error(f"Error in task count API: {e}", exc_info=True)
        return _error("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)

    return {"count": count}


@router.get("/tasks/{task_id}")
async def get_task(
    task_id: str,
    current_user: CurrentUser,
    client: CamundaClientDep,
    auth_header: EngineAuthDep,
):
    """Task with its variables, form and process instance."""
    try:
        return await get_task_details(client, task_id, auth_header)
    except (CamundaError, httpx.HTTPError, ValueError) as e:
        logger.error(f"Error fetching task {task_id}: {e}")
        return _error("Failed to fetch task details", status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.post("/tasks/{task_id}/claim")
async def claim_task(
    task_id: str,
    payload: ClaimTaskRequest,
    current_user: CurrentUser,
    client: CamundaClientDep,
    auth_header: EngineAuthDep,
):
    if not payload.user_id:
        return _error("User ID is required", status.HTTP_400_BAD_REQUEST)

    try:
        await client.claim_task(task_id, payload.user_id, auth_header)
    except (CamundaError, httpx.HTTPError) as e:
        logger.error(f"Error claiming task {task_id}: {e}")
        return _error("Failed to claim task", status.HTTP_500_INTERNAL_SERVER_ERROR)

    logger.info(f"Task {task_id} claimed for {payload.user_id}")
    return {"success": True}


@router.delete("/tasks/{task_id}/claim")
async def unclaim_task(
    task_id: str,
    current_user: CurrentUser,
    client: CamundaClientDep,
    auth_header: EngineAuthDep,
):
    try:
        await client.unclaim_task(task_id, auth_header)
    except (CamundaError, httpx.HTTPError) as e:
        logger.error(f"Error unclaiming task {task_id}: {e}")
        return _error("Failed to unclaim task", status.HTTP_500_INTERNAL_SERVER_ERROR)

    return {"success": True}


@router.post("/tasks/{task_id}/complete")
async def complete_task(
    task_id: str,
    payload: CompleteTaskRequest,
    current_user: CurrentUser,
    client: CamundaClientDep,
    auth_header: EngineAuthDep,
):
    try:
        await client.complete_task(task_id, payload.variables, auth_header)
    except (CamundaError, httpx.HTTPError, ValueError) as e:
        logger.error(f"Error completing task {task_id}: {e}")
        return _error("Failed to complete task", status.HTTP_500_INTERNAL_SERVER_ERROR)

    logger.info(f"Task {task_id} completed by user {current_user.id}")
    return {"success": True}


# ──────────────────────────────────────────────────────────────────────
# Filters
# ──────────────────────────────────────────────────────────────────────


@router.get("/filters")
async def list_filters(
    client: CamundaClientDep,
    auth_header: EngineAuthDep,
):
    """Saved task filters ordered by priority."""
    logger.debug(f"Filters API auth type: {describe_auth_header(auth_header)}")
    try:
        filters = await client.list_filters(auth_header)
    except CamundaError as e:
        if e.is_unauthorized:
            return _error(ENGINE_AUTH_FAILED, status.HTTP_401_UNAUTHORIZED)
        logger.error(f"Camunda API error: {e.message}")
        return []
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Error in filters API: {e}", exc_info=True)
        return _error("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)

    return sort_task_filters(filters)


@router.post("/filters/{filter_id}/tasks")
async def filter_tasks(
    filter_id: str,
    payload: FilterTasksRequest,
    client: CamundaClientDep,
    auth_header: EngineAuthDep,
):
    """One page of a saved filter's tasks."""
    body = build_filter_list_body(
        payload.pagination.model_dump() if payload.pagination else None,
        payload.sorting.model_dump() if payload.sorting else None,
    )
    try:
        result = await client.execute_filter(filter_id, body, auth_header)
        return await project_filter_tasks(client, extract_filter_tasks(result), auth_header)
    except CamundaError as e:
        if e.is_unauthorized:
            return _error(ENGINE_AUTH_FAILED, status.HTTP_401_UNAUTHORIZED)
        logger.error(f"Filter {filter_id} tasks error response: {e.body}")
        return _error("Failed to fetch tasks", e.status_code)
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Error in filter tasks API: {e}", exc_info=True)
        return _error(
            "Internal server error",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            message=str(e),
        )


@router.get("/filters/{filter_id}/count")
async def filter_count(
    filter_id: str,
    client: CamundaClientDep,
    auth_header: EngineAuthDep,
):
    """Task count of a saved filter; zero on anything but an auth failure."""
    try:
        return await client.count_filter(filter_id, auth_header)
    except CamundaError as e:
        if e.is_unauthorized:
            return _error(ENGINE_AUTH_FAILED, status.HTTP_401_UNAUTHORIZED)
        logger.error(f"Filter {filter_id} count error response: {e.body}")
        return {"count": 0}
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Error in filter count API: {e}")
        return {"count": 0}
