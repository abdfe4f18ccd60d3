"""Debug routes for inspecting stored data."""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.core.constants import WORKSTREAM_TASK_TYPE
from app.core.dependencies import AsyncSessionDep
from app.services.domain_task_service import list_tasks_by_type, to_debug_projection

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/simple-test")
async def simple_test(session: AsyncSessionDep):
    """
    List workstream tasks with the runtime type of their ``domain`` value.

    Any failure is reported as ``{"error": "Failed", "message": ...}`` with 500.
    """
    try:
        tasks = await list_tasks_by_type(session, WORKSTREAM_TASK_TYPE)
        return {
            "success": True,
            "count": len(tasks),
            "tasks": [to_debug_projection(task) for task in tasks],
        }
    except Exception as e:
        logger.error(f"Debug task listing failed: {e}", exc_info=True)
        return JSONResponse(
            {"error": "Failed", "message": str(e) or "Unknown error"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
