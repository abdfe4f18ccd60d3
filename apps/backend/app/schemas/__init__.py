"""Pydantic schemas."""

from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RefreshRequest,
    RefreshResponse,
    RegisterRequest,
    UserResponse,
)
from app.schemas.camunda import (
    ClaimTaskRequest,
    CompleteTaskRequest,
    FilterTasksRequest,
    TaskQueryRequest,
)
from app.schemas.domain import (
    CurrentDomainRequest,
    CurrentDomainResponse,
    DomainListResponse,
    DomainResponse,
    JoinDomainRequest,
    JoinDomainResponse,
    MembershipResponse,
    RoleResponse,
    UserDomainsResponse,
)
from app.schemas.domain_task import DomainTaskListResponse, DomainTaskResponse

__all__ = [
    # Auth
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "RefreshRequest",
    "RefreshResponse",
    "RegisterRequest",
    "UserResponse",
    # Workflow engine
    "ClaimTaskRequest",
    "CompleteTaskRequest",
    "FilterTasksRequest",
    "TaskQueryRequest",
    # Domains
    "CurrentDomainRequest",
    "CurrentDomainResponse",
    "DomainListResponse",
    "DomainResponse",
    "JoinDomainRequest",
    "JoinDomainResponse",
    "MembershipResponse",
    "RoleResponse",
    "UserDomainsResponse",
    # Domain tasks
    "DomainTaskListResponse",
    "DomainTaskResponse",
]
