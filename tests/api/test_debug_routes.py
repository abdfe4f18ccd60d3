"""Tests for GET /api/debug/simple-test."""

import pytest
from sqlalchemy.exc import OperationalError

from conftest import query_result


class TestSimpleTest:
    """Tests for the workstream task listing."""

    @pytest.mark.asyncio
    async def test_lists_projected_tasks(self, client, fake_session, make_task) -> None:
        tasks = [make_task(name="Plan"), make_task(domain="bemnet", name="Lend")]
        fake_session.execute.return_value = query_result(tasks)

        response = await client.get("/api/debug/simple-test")

        data = response.json()
        assert response.status_code == 200
        assert data["success"] is True
        assert data["count"] == 2
        assert data["tasks"][1] == {
            "id": str(tasks[1].id),
            "domain": "bemnet",
            "domainType": "string",
            "name": "Lend",
        }
        for item in data["tasks"]:
            assert set(item) == {"id", "domain", "domainType", "name"}

    @pytest.mark.asyncio
    async def test_empty(self, client, fake_session) -> None:
        response = await client.get("/api/debug/simple-test")
        assert response.json() == {"success": True, "count": 0, "tasks": []}

    @pytest.mark.asyncio
    async def test_storage_failure(self, client, fake_session) -> None:
        fake_session.execute.side_effect = OperationalError(
            "SELECT", {}, Exception("connection refused")
        )

        response = await client.get("/api/debug/simple-test")

        data = response.json()
        assert response.status_code == 500
        assert data["error"] == "Failed"
        assert "connection refused" in data["message"]
