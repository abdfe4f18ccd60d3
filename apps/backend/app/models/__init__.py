"""SQLAlchemy models."""

from app.models.domain import Domain
from app.models.user import DomainMembership, User
from app.models.domain_task import DomainTask

__all__ = [
    "Domain",
    "DomainMembership",
    "DomainTask",
    "User",
]
