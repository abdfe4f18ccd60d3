"""
Tests for the workflow engine proxy routes.

The engine is an ``httpx.MockTransport`` behind a real ``CamundaClient``;
each test registers the engine replies it needs by (method, path).
"""

import json
from types import SimpleNamespace

import httpx
import pytest

from app.api.camunda.routes import ENGINE_AUTH_FAILED
from app.core.config import KeycloakSettings, get_keycloak_settings
from app.core.dependencies import get_camunda_client, get_current_user
from packages.camunda import CamundaClient

BASE_URL = "http://engine.test/engine-rest"
DEMO_AUTH = "ZGVtbzpkZW1v"  # demo:demo


@pytest.fixture
def engine(app):
    """Fake engine; set ``engine.replies[(method, path)]`` to a Response or a callable."""
    calls: list[httpx.Request] = []
    replies: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        path = request.url.path.removeprefix("/engine-rest")
        reply = replies.get((request.method, path))
        if reply is None:
            return httpx.Response(404, json={"message": f"No reply for {path}"})
        if callable(reply):
            return reply(request)
        return reply

    camunda = CamundaClient(BASE_URL, transport=httpx.MockTransport(handler))
    app.dependency_overrides[get_camunda_client] = lambda: camunda
    app.dependency_overrides[get_keycloak_settings] = lambda: KeycloakSettings(
        use_keycloak=False
    )
    return SimpleNamespace(calls=calls, replies=replies)


@pytest.fixture
def signed_in(app, make_user):
    user = make_user()
    app.dependency_overrides[get_current_user] = lambda: user
    return user


class TestCamundaTestAuth:
    """Tests for GET /api/camunda/test-auth."""

    @pytest.mark.asyncio
    async def test_no_header(self, client, engine) -> None:
        response = await client.get("/api/camunda/test-auth")

        assert response.status_code == 200
        assert response.json() == {
            "authReceived": False,
            "message": "No X-Camunda-Auth header found",
        }
        assert engine.calls == []

    @pytest.mark.asyncio
    async def test_forwards_basic_credentials(self, client, engine) -> None:
        tasks = [{"id": "t1", "name": "Review"}, {"id": "t2", "name": "Approve"}]
        engine.replies[("GET", "/task")] = httpx.Response(200, json=tasks)

        response = await client.get(
            "/api/camunda/test-auth", headers={"X-Camunda-Auth": DEMO_AUTH}
        )

        assert response.json() == {
            "authReceived": True,
            "username": "demo",
            "camundaStatus": 200,
            "taskCount": 2,
            "tasks": tasks,
        }
        forwarded = engine.calls[0]
        assert forwarded.headers["Authorization"] == f"Basic {DEMO_AUTH}"
        assert forwarded.url.params["active"] == "true"

    @pytest.mark.asyncio
    async def test_upstream_status_passed_through(self, client, engine) -> None:
        body = {"type": "AuthenticationException", "message": "Unauthorized"}
        engine.replies[("GET", "/task")] = httpx.Response(401, json=body)

        response = await client.get(
            "/api/camunda/test-auth", headers={"X-Camunda-Auth": DEMO_AUTH}
        )

        data = response.json()
        assert response.status_code == 200
        assert data["camundaStatus"] == 401
        assert data["taskCount"] == 0
        assert data["tasks"] == body

    @pytest.mark.asyncio
    async def test_unreachable_engine_is_not_handled(self, client, engine) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        engine.replies[("GET", "/task")] = refuse

        with pytest.raises(httpx.ConnectError):
            await client.get("/api/camunda/test-auth", headers={"X-Camunda-Auth": DEMO_AUTH})


class TestVerifyAuth:
    """Tests for POST /api/camunda/auth/verify."""

    @pytest.mark.asyncio
    async def test_missing_header(self, client, engine) -> None:
        response = await client.post("/api/camunda/auth/verify")
        assert response.status_code == 401
        assert response.json() == {"error": "No authentication provided"}

    @pytest.mark.asyncio
    async def test_valid_credentials(self, client, engine) -> None:
        engine.replies[("GET", "/task/count")] = httpx.Response(200, json={"count": 3})

        response = await client.post(
            "/api/camunda/auth/verify", headers={"X-Camunda-Auth": DEMO_AUTH}
        )

        assert response.json() == {"authenticated": True, "count": 3}

    @pytest.mark.asyncio
    async def test_invalid_credentials(self, client, engine) -> None:
        engine.replies[("GET", "/task/count")] = httpx.Response(401, text="Unauthorized")

        response = await client.post(
            "/api/camunda/auth/verify", headers={"X-Camunda-Auth": DEMO_AUTH}
        )

        assert response.status_code == 401
        assert response.json() == {"authenticated": False, "error": "Invalid credentials"}


class TestTasks:
    """Tests for the task list routes."""

    @pytest.mark.asyncio
    async def test_search_adds_definition_names(self, client, engine) -> None:
        engine.replies[("GET", "/task")] = httpx.Response(
            200,
            json=[
                {"id": "t1", "processDefinitionId": "invoice:1"},
                {"id": "t2", "processDefinitionId": "invoice:1"},
                {"id": "t3", "processDefinitionId": "gone:1"},
            ],
        )
        engine.replies[("GET", "/process-definition/invoice:1")] = httpx.Response(
            200, json={"id": "invoice:1", "name": "Invoice"}
        )

        response = await client.post(
            "/api/camunda/tasks",
            json={"filters": {"assignee": "me", "searchTerm": "rev"}, "currentUser": "demo"},
            headers={"X-Camunda-Auth": DEMO_AUTH},
        )

        names = [t["processDefinitionName"] for t in response.json()]
        assert names == ["Invoice", "Invoice", "gone:1"]
        params = engine.calls[0].url.params
        assert params["assignee"] == "demo"
        assert params["nameLike"] == "%rev%"
        definition_calls = [c for c in engine.calls if "process-definition" in c.url.path]
        assert len(definition_calls) == 2

    @pytest.mark.asyncio
    async def test_search_unauthorized(self, client, engine) -> None:
        engine.replies[("GET", "/task")] = httpx.Response(401)

        response = await client.post("/api/camunda/tasks", json={})

        assert response.status_code == 401
        assert response.json() == {"error": ENGINE_AUTH_FAILED}

    @pytest.mark.asyncio
    async def test_search_engine_error_is_empty_list(self, client, engine) -> None:
        engine.replies[("GET", "/task")] = httpx.Response(500, text="boom")

        response = await client.post("/api/camunda/tasks", json={})

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_process_definitions_deduplicated(self, client, engine) -> None:
        engine.replies[("GET", "/process-definition")] = httpx.Response(
            200,
            json=[
                {"key": "invoice", "name": "Invoice"},
                {"key": "invoice", "name": "Invoice (old)"},
            ],
        )

        response = await client.get("/api/camunda/tasks")

        assert response.json() == [{"key": "invoice", "name": "Invoice"}]

    @pytest.mark.asyncio
    async def test_count(self, client, engine) -> None:
        engine.replies[("GET", "/task/count")] = httpx.Response(200, json={"count": 7})

        response = await client.post(
            "/api/camunda/tasks/count", json={"filters": {"assignee": "unassigned"}}
        )

        assert response.json() == {"count": 7}
        params = engine.calls[0].url.params
        assert params["unassigned"] == "true"
        assert "sortBy" not in params

    @pytest.mark.asyncio
    async def test_task_details_require_sign_in(self, client, engine) -> None:
        response = await client.get("/api/camunda/tasks/t1")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_task_details(self, client, engine, signed_in) -> None:
        engine.replies[("GET", "/task/t1")] = httpx.Response(
            200, json={"id": "t1", "processInstanceId": "pi-1"}
        )
        engine.replies[("GET", "/task/t1/variables")] = httpx.Response(
            200, json={"amount": {"value": 10, "type": "Integer"}}
        )
        engine.replies[("GET", "/process-instance/pi-1")] = httpx.Response(
            200, json={"id": "pi-1"}
        )

        response = await client.get("/api/camunda/tasks/t1")

        assert response.json() == {
            "task": {"id": "t1", "processInstanceId": "pi-1"},
            "variables": {"amount": {"value": 10, "type": "Integer"}},
            "form": None,
            "processInstance": {"id": "pi-1"},
        }

    @pytest.mark.asyncio
    async def test_claim_requires_user_id(self, client, engine, signed_in) -> None:
        response = await client.post("/api/camunda/tasks/t1/claim", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "User ID is required"}

    @pytest.mark.asyncio
    async def test_claim(self, client, engine, signed_in) -> None:
        engine.replies[("POST", "/task/t1/claim")] = httpx.Response(204)

        response = await client.post("/api/camunda/tasks/t1/claim", json={"userId": "demo"})

        assert response.json() == {"success": True}
        assert json.loads(engine.calls[0].content) == {"userId": "demo"}

    @pytest.mark.asyncio
    async def test_unclaim_failure(self, client, engine, signed_in) -> None:
        engine.replies[("POST", "/task/t1/unclaim")] = httpx.Response(500)

        response = await client.delete("/api/camunda/tasks/t1/claim")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to unclaim task"}

    @pytest.mark.asyncio
    async def test_complete(self, client, engine, signed_in) -> None:
        engine.replies[("POST", "/task/t1/complete")] = httpx.Response(204)

        response = await client.post(
            "/api/camunda/tasks/t1/complete",
            json={"variables": {"approved": {"value": True}}},
        )

        assert response.json() == {"success": True}
        assert json.loads(engine.calls[0].content) == {
            "variables": {"approved": {"value": True}}
        }


class TestFilters:
    """Tests for the saved filter routes."""

    @pytest.mark.asyncio
    async def test_filters_sorted(self, client, engine) -> None:
        engine.replies[("GET", "/filter")] = httpx.Response(
            200,
            json=[
                {"id": "b", "resourceType": "Task", "properties": {"priority": 2}},
                {"id": "a", "resourceType": "Task", "properties": {"priority": 1}},
                {"id": "p", "resourceType": "ProcessInstance"},
            ],
        )

        response = await client.get("/api/camunda/filters")

        assert [f["id"] for f in response.json()] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_filter_tasks(self, client, engine) -> None:
        engine.replies[("POST", "/filter/f1/list")] = httpx.Response(
            200,
            json={
                "_embedded": {
                    "task": [
                        {"id": "t1", "name": "Review", "processDefinitionId": "invoice:1"},
                    ]
                }
            },
        )
        engine.replies[("GET", "/process-definition/invoice:1")] = httpx.Response(
            200, json={"key": "invoice", "name": None}
        )

        response = await client.post(
            "/api/camunda/filters/f1/tasks",
            json={"pagination": {"page": 2, "size": 10}, "sorting": {"field": "due"}},
        )

        task = response.json()[0]
        assert task["id"] == "t1"
        assert task["processDefinitionName"] == "invoice"
        assert json.loads(engine.calls[0].content) == {
            "firstResult": 10,
            "maxResults": 10,
            "sorting": [{"sortBy": "dueDate", "sortOrder": "desc"}],
        }

    @pytest.mark.asyncio
    async def test_filter_tasks_engine_error(self, client, engine) -> None:
        engine.replies[("POST", "/filter/f1/list")] = httpx.Response(404, text="missing")

        response = await client.post("/api/camunda/filters/f1/tasks", json={})

        assert response.status_code == 404
        assert response.json() == {"error": "Failed to fetch tasks"}

    @pytest.mark.asyncio
    async def test_filter_count_degrades_to_zero(self, client, engine) -> None:
        engine.replies[("GET", "/filter/f1/count")] = httpx.Response(500)

        response = await client.get("/api/camunda/filters/f1/count")

        assert response.json() == {"count": 0}


class TestEngineAuthForwarding:
    """Tests for which credentials reach the engine."""

    @pytest.mark.asyncio
    async def test_identity_cookie_ignored_when_disabled(self, client, engine) -> None:
        engine.replies[("GET", "/filter")] = httpx.Response(200, json=[])
        client.cookies.set("kcAccessToken", "kc-token")

        await client.get("/api/camunda/filters", headers={"X-Camunda-Auth": DEMO_AUTH})

        assert engine.calls[0].headers["Authorization"] == f"Basic {DEMO_AUTH}"

    @pytest.mark.asyncio
    async def test_identity_cookie_used_when_enabled(self, app, client, engine) -> None:
        app.dependency_overrides[get_keycloak_settings] = lambda: KeycloakSettings(
            use_keycloak=True
        )
        engine.replies[("GET", "/filter")] = httpx.Response(200, json=[])
        client.cookies.set("kcAccessToken", "kc-token")

        await client.get("/api/camunda/filters", headers={"X-Camunda-Auth": DEMO_AUTH})

        assert engine.calls[0].headers["Authorization"] == "Bearer kc-token"
