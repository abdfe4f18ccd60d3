"""Domain, membership and domain task API routes."""

import logging

from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import JSONResponse

from app.core.dependencies import AsyncSessionDep, CurrentUser
from app.schemas.domain import (
    CurrentDomainRequest,
    CurrentDomainResponse,
    DomainListResponse,
    JoinDomainRequest,
    JoinDomainResponse,
    MembershipResponse,
    UserDomainsResponse,
)
from app.schemas.domain_task import DomainTaskListResponse, DomainTaskResponse
from app.services.domain_service import (
    get_domain_by_domain_id,
    join_domain,
    list_active_domains,
    set_current_domain,
    to_domain_response,
)
from app.services.domain_task_service import list_domain_tasks

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/domains", response_model=DomainListResponse)
async def list_domains(session: AsyncSessionDep):
    """
    List active domains as public cards.

    No authentication required: the list is shown before sign-up.
    """
    try:
        domains = await list_active_domains(session)
        logger.debug(f"Found {len(domains)} domains")
        return DomainListResponse(domains=[to_domain_response(d) for d in domains])
    except Exception as e:
        logger.error(f"Error fetching domains: {e}", exc_info=True)
        return JSONResponse(
            {"error": "Failed to fetch domains", "success": False},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


@router.get("/user/domains", response_model=UserDomainsResponse)
async def get_user_domains(current_user: CurrentUser) -> UserDomainsResponse:
    """Memberships of the signed-in user."""
    return UserDomainsResponse(
        domains=[MembershipResponse.model_validate(m) for m in current_user.memberships],
        current_domain_id=current_user.current_domain_id,
    )


@router.post("/user/domains", response_model=JoinDomainResponse)
async def join_user_domain(
    payload: JoinDomainRequest,
    current_user: CurrentUser,
    session: AsyncSessionDep,
):
    """
    Join a domain under a role, or change role in a domain already joined.

    Raises:
        HTTPException 404: If the domain does not exist.
        HTTPException 400: If the domain does not offer the role.
    """
    if not payload.domain_id or not payload.role_id:
        return JSONResponse(
            {"error": "domainId and roleId are required"},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    domain = await get_domain_by_domain_id(session, payload.domain_id)
    if domain is None or not domain.active:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Domain not found",
        )
    if domain.get_role(payload.role_id) is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Role '{payload.role_id}' is not available in {domain.name}",
        )

    await join_domain(session, current_user, domain, payload.role_id)

    return JoinDomainResponse(
        domains=[MembershipResponse.model_validate(m) for m in current_user.memberships],
    )


@router.put("/user/domains", response_model=CurrentDomainResponse)
async def update_current_domain(
    payload: CurrentDomainRequest,
    current_user: CurrentUser,
    session: AsyncSessionDep,
) -> CurrentDomainResponse:
    """Remember which domain the user last worked in."""
    await set_current_domain(session, current_user, payload.current_domain_id)
    return CurrentDomainResponse(current_domain_id=current_user.current_domain_id)


@router.get("/domain-tasks", response_model=DomainTaskListResponse)
async def get_domain_tasks(
    current_user: CurrentUser,
    session: AsyncSessionDep,
    domain: str | None = Query(default=None, description="Domain id; all memberships when omitted"),
) -> DomainTaskListResponse:
    """
    Active tasks of one of the user's domains, or of all of them.

    Raises:
        HTTPException 403: If the user is not a member of ``domain``.
    """
    member_of = [m.domain_id for m in current_user.memberships]
    if domain is not None:
        if domain not in member_of:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not a member of this domain",
            )
        member_of = [domain]

    tasks = await list_domain_tasks(session, member_of)
    return DomainTaskListResponse(
        tasks=[DomainTaskResponse.model_validate(t) for t in tasks],
    )
