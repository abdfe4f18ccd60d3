"""Shared fixtures: model factories and a stand-in database session."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import httpx
import pytest
import pytest_asyncio

from app.models.domain import Domain
from app.models.domain_task import DomainTask
from app.models.user import DomainMembership, User

MAVEN_ROLES = [
    {
        "id": "visitor",
        "name": "Visitor",
        "description": "Browse the domain",
        "monthlyFee": 10,
        "benefits": ["30-day access"],
    },
    {
        "id": "maven",
        "name": "Maven",
        "description": "Investor member",
        "monthlyFee": 1000.0,
        "benefits": [],
    },
]


@pytest.fixture
def make_domain():
    """Factory for transient Domain rows with every column filled in."""

    def _make(**overrides) -> Domain:
        values = {
            "id": uuid4(),
            "domain_id": "maven-hub",
            "slug": "maven-hub",
            "name": "Maven Hub",
            "tagline": None,
            "description": "Investors funding ventures",
            "icon": "💎",
            "color": "purple",
            "gradient": None,
            "cta": None,
            "region": None,
            "join_details": None,
            "member_count": 0,
            "available_roles": list(MAVEN_ROLES),
            "navigation": None,
            "active": True,
        }
        values.update(overrides)
        return Domain(**values)

    return _make


@pytest.fixture
def make_user():
    """Factory for transient users; ``domains`` maps domain_id -> role_id."""

    def _make(domains: dict[str, str | None] | None = None, **overrides) -> User:
        values = {
            "id": uuid4(),
            "email": "ada@example.com",
            "name": "Ada",
            "username": "ada",
            "hashed_password": None,
            "current_domain_id": None,
            "created_at": datetime(2026, 1, 5, tzinfo=timezone.utc),
        }
        values.update(overrides)
        user = User(**values)
        for domain_id, role_id in (domains or {}).items():
            user.memberships.append(
                DomainMembership(
                    domain_id=domain_id,
                    role_id=role_id,
                    joined_at=datetime(2026, 1, 6, tzinfo=timezone.utc),
                )
            )
        return user

    return _make


@pytest.fixture
def make_task():
    """Factory for transient DomainTask rows."""

    def _make(**overrides) -> DomainTask:
        values = {
            "id": uuid4(),
            "master_task_id": "mt-1",
            "domain": "maven-hub",
            "adopted_by": "ada",
            "adopted_at": datetime(2026, 2, 1, tzinfo=timezone.utc),
            "name": "Quarterly review",
            "description": "",
            "category": "operational",
            "task_type": "workstream_basic",
            "priority": "normal",
            "active": True,
            "created_at": datetime(2026, 2, 1, tzinfo=timezone.utc),
            "updated_at": datetime(2026, 2, 1, tzinfo=timezone.utc),
        }
        values.update(overrides)
        return DomainTask(**values)

    return _make


def query_result(rows=None, one=None) -> MagicMock:
    """Mimic the Result returned by ``AsyncSession.execute``."""
    result = MagicMock()
    result.scalars.return_value.all.return_value = list(rows or [])
    result.scalar_one_or_none.return_value = one
    return result


@pytest.fixture
def fake_session() -> AsyncMock:
    """
    AsyncSession stand-in.

    Tests set ``fake_session.execute.return_value = query_result(...)`` or a
    ``side_effect`` for sequences of queries.
    """
    session = AsyncMock()
    session.add = MagicMock()
    session.execute.return_value = query_result()
    return session


@pytest.fixture
def app(fake_session):
    """The application with the database session replaced by ``fake_session``."""
    from app.db.session import get_async_session
    from app.main import app as application

    async def override_session():
        yield fake_session

    application.dependency_overrides[get_async_session] = override_session
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app):
    """HTTP client talking to the app in-process; redirects are not followed."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        yield http
