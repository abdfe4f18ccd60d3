"""Tests for the domain, membership and domain task API."""

import pytest
from sqlalchemy.exc import OperationalError

from app.core.dependencies import get_current_user
from conftest import query_result


@pytest.fixture
def member(app, make_user):
    user = make_user({"maven-hub": "visitor"})
    app.dependency_overrides[get_current_user] = lambda: user
    return user


class TestListDomains:
    """Tests for GET /api/domains."""

    @pytest.mark.asyncio
    async def test_public_cards(self, client, fake_session, make_domain) -> None:
        fake_session.execute.return_value = query_result(
            [make_domain(), make_domain(domain_id="bemnet", slug="bemnet", name="Bemnet")]
        )

        response = await client.get("/api/domains")

        data = response.json()
        assert data["success"] is True
        assert [d["id"] for d in data["domains"]] == ["maven-hub", "bemnet"]
        first = data["domains"][0]
        assert first["cta"] == "Join Maven Hub"
        assert first["roles"][0] == {
            "id": "visitor",
            "name": "Visitor",
            "description": "Browse the domain",
            "price": "10 USD",
            "isDefault": True,
            "benefits": ["30-day access"],
        }

    @pytest.mark.asyncio
    async def test_database_error(self, client, fake_session) -> None:
        fake_session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))

        response = await client.get("/api/domains")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch domains", "success": False}

    @pytest.mark.asyncio
    async def test_malformed_role(self, client, fake_session, make_domain) -> None:
        fake_session.execute.return_value = query_result(
            [make_domain(available_roles=[{"name": "No id"}])]
        )

        response = await client.get("/api/domains")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch domains", "success": False}


class TestUserDomains:
    """Tests for /api/user/domains."""

    @pytest.mark.asyncio
    async def test_requires_sign_in(self, client) -> None:
        response = await client.get("/api/user/domains")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_memberships(self, client, member) -> None:
        member.current_domain_id = "maven-hub"

        response = await client.get("/api/user/domains")

        data = response.json()
        assert data["currentDomainId"] == "maven-hub"
        assert data["domains"][0]["domainId"] == "maven-hub"
        assert data["domains"][0]["role"] == "visitor"

    @pytest.mark.asyncio
    async def test_join_requires_domain_and_role(self, client, member) -> None:
        response = await client.post("/api/user/domains", json={"domainId": "bemnet"})

        assert response.status_code == 400
        assert response.json() == {"error": "domainId and roleId are required"}

    @pytest.mark.asyncio
    async def test_join_unknown_domain(self, client, member, fake_session) -> None:
        fake_session.execute.return_value = query_result(one=None)

        response = await client.post(
            "/api/user/domains", json={"domainId": "nowhere", "roleId": "visitor"}
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_join_unknown_role(self, client, member, fake_session, make_domain) -> None:
        fake_session.execute.return_value = query_result(one=make_domain())

        response = await client.post(
            "/api/user/domains", json={"domainId": "maven-hub", "roleId": "captain"}
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_join(self, client, member, fake_session, make_domain) -> None:
        fake_session.execute.return_value = query_result(
            one=make_domain(domain_id="bemnet", slug="bemnet", name="Bemnet")
        )

        response = await client.post(
            "/api/user/domains", json={"domainId": "bemnet", "roleId": "maven"}
        )

        data = response.json()
        assert response.status_code == 200
        assert {d["domainId"]: d["role"] for d in data["domains"]} == {
            "maven-hub": "visitor",
            "bemnet": "maven",
        }

    @pytest.mark.asyncio
    async def test_set_current_domain(self, client, member) -> None:
        response = await client.put("/api/user/domains", json={"currentDomainId": "maven-hub"})

        assert response.json() == {"success": True, "currentDomainId": "maven-hub"}
        assert member.current_domain_id == "maven-hub"


class TestDomainTasks:
    """Tests for GET /api/domain-tasks."""

    @pytest.mark.asyncio
    async def test_not_a_member(self, client, member) -> None:
        response = await client.get("/api/domain-tasks", params={"domain": "bemnet"})
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_member_tasks(self, client, member, fake_session, make_task) -> None:
        fake_session.execute.return_value = query_result([make_task(name="Plan")])

        response = await client.get("/api/domain-tasks", params={"domain": "maven-hub"})

        tasks = response.json()["tasks"]
        assert [t["name"] for t in tasks] == ["Plan"]
