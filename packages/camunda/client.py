"""
Async HTTP client for the Camunda 7 engine REST API.

The client is a thin wrapper around ``httpx.AsyncClient``: it knows the engine
base URL and how to attach the caller's Authorization header, nothing more.
Callers decide how upstream failures map onto their own responses.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class CamundaError(Exception):
    """Raised when the engine answers with a non-2xx status."""

    def __init__(self, status_code: int, message: str, body: str = "") -> None:
        detail = f"Camunda API error: {message}"
        if body:
            detail = f"{detail} - {body}"
        super().__init__(detail)
        self.status_code = status_code
        self.message = message
        self.body = body

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401


class CamundaClient:
    """Engine REST client bound to one base URL."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float | None = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> CamundaClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Low level
    # ------------------------------------------------------------------

    async def request(
        self,
        method: str,
        path: str,
        *,
        auth_header: str | None = None,
        params: dict[str, str] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        """
        Send a request and return the raw response, whatever its status.

        Args:
            method: HTTP method.
            path: Path relative to the engine base URL, e.g. ``/task``.
            auth_header: Value for the Authorization header, omitted when empty.
            params: Query string parameters.
            json: JSON body.

        Raises:
            httpx.HTTPError: On transport failures.
        """
        headers = {"Content-Type": "application/json"}
        if auth_header:
            headers["Authorization"] = auth_header

        response = await self._client.request(
            method,
            path,
            headers=headers,
            params=params,
            json=json,
        )
        logger.debug(f"Camunda {method} {path} -> {response.status_code}")
        return response

    async def request_json(
        self,
        method: str,
        path: str,
        *,
        auth_header: str | None = None,
        params: dict[str, str] | None = None,
        json: Any = None,
    ) -> Any:
        """
        Send a request and decode its JSON body.

        Returns:
            The decoded body, or None for empty (204) responses.

        Raises:
            CamundaError: If the engine answers with a non-2xx status.
        """
        response = await self.request(
            method, path, auth_header=auth_header, params=params, json=json
        )
        if not response.is_success:
            raise CamundaError(
                response.status_code,
                response.reason_phrase,
                response.text,
            )
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------

    async def list_tasks(
        self, params: dict[str, str], auth_header: str | None = None
    ) -> list[dict[str, Any]]:
        return await self.request_json("GET", "/task", auth_header=auth_header, params=params)

    async def count_tasks(
        self, params: dict[str, str] | None = None, auth_header: str | None = None
    ) -> int:
        data = await self.request_json(
            "GET", "/task/count", auth_header=auth_header, params=params
        )
        return data["count"]

    async def get_task(self, task_id: str, auth_header: str | None = None) -> dict[str, Any]:
        return await self.request_json("GET", f"/task/{task_id}", auth_header=auth_header)

    async def get_task_variables(
        self, task_id: str, auth_header: str | None = None
    ) -> dict[str, Any]:
        return await self.request_json(
            "GET", f"/task/{task_id}/variables", auth_header=auth_header
        )

    async def get_task_form(self, task_id: str, auth_header: str | None = None) -> dict[str, Any]:
        return await self.request_json("GET", f"/task/{task_id}/form", auth_header=auth_header)

    async def claim_task(
        self, task_id: str, user_id: str, auth_header: str | None = None
    ) -> None:
        await self.request_json(
            "POST", f"/task/{task_id}/claim", auth_header=auth_header, json={"userId": user_id}
        )

    async def unclaim_task(self, task_id: str, auth_header: str | None = None) -> None:
        await self.request_json("POST", f"/task/{task_id}/unclaim", auth_header=auth_header)

    async def complete_task(
        self,
        task_id: str,
        variables: dict[str, Any],
        auth_header: str | None = None,
    ) -> Any:
        return await self.request_json(
            "POST",
            f"/task/{task_id}/complete",
            auth_header=auth_header,
            json={"variables": variables},
        )

    # ------------------------------------------------------------------
    # Process definitions & instances
    # ------------------------------------------------------------------

    async def list_process_definitions(
        self, auth_header: str | None = None
    ) -> list[dict[str, Any]]:
        return await self.request_json("GET", "/process-definition", auth_header=auth_header)

    async def get_process_definition(
        self, definition_id: str, auth_header: str | None = None
    ) -> dict[str, Any]:
        return await self.request_json(
            "GET", f"/process-definition/{definition_id}", auth_header=auth_header
        )

    async def get_process_instance(
        self, instance_id: str, auth_header: str | None = None
    ) -> dict[str, Any]:
        return await self.request_json(
            "GET", f"/process-instance/{instance_id}", auth_header=auth_header
        )

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------

    async def list_filters(self, auth_header: str | None = None) -> list[dict[str, Any]]:
        return await self.request_json("GET", "/filter", auth_header=auth_header)

    async def execute_filter(
        self,
        filter_id: str,
        body: dict[str, Any],
        auth_header: str | None = None,
    ) -> Any:
        return await self.request_json(
            "POST", f"/filter/{filter_id}/list", auth_header=auth_header, json=body
        )

    async def count_filter(self, filter_id: str, auth_header: str | None = None) -> dict[str, Any]:
        return await self.request_json(
            "GET", f"/filter/{filter_id}/count", auth_header=auth_header
        )
