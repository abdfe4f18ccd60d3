"""Server-rendered pages: navigation shell, placeholders and domain cards."""

from pathlib import Path
from typing import Any

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from app.api.pages.domain_context import CurrentDomain, PageUser
from app.core.dependencies import AsyncSessionDep, OptionalUser
from app.models.domain import Domain
from app.models.user import User
from app.services.domain_service import (
    get_domain_by_domain_id,
    get_navigation,
    list_active_domains,
    to_domain_response,
)
from app.services.page_content import DOMAIN_PAGES, GLOBAL_PAGES, EmptyState, domain_page

TEMPLATES_DIR = Path(__file__).resolve().parent.parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

GLOBAL_NAVIGATION = [
    {"id": "domains", "name": "Domains", "href": "/domains", "icon": "globe"},
    {"id": "dashboards", "name": "Dashboards", "href": "/dashboards", "icon": "dashboards"},
    {"id": "teams", "name": "Teams", "href": "/teams", "icon": "teams"},
    {"id": "organogram", "name": "Organogram", "href": "/organogram", "icon": "organogram"},
    {"id": "workstreams", "name": "Workstreams", "href": "/workstreams", "icon": "workstreams"},
]

router = APIRouter(default_response_class=HTMLResponse)


def _render_empty_state(
    request: Request,
    state: EmptyState,
    user: User,
    navigation: list[dict[str, Any]],
    domain: Domain | None = None,
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "empty_state.html",
        {
            "state": state,
            "user": user,
            "navigation": navigation,
            "domain": domain,
            "active_path": request.url.path,
        },
    )


@router.get("/")
async def home(user: OptionalUser, session: AsyncSessionDep) -> RedirectResponse:
    """Open the user's current domain, or the domain list."""
    if user is not None and user.current_domain_id:
        domain = await get_domain_by_domain_id(session, user.current_domain_id)
        if domain is not None and domain.active:
            return RedirectResponse(f"/{domain.slug}", status_code=status.HTTP_302_FOUND)
    return RedirectResponse("/domains", status_code=status.HTTP_302_FOUND)


@router.get("/domains")
async def domains_page(request: Request, user: OptionalUser, session: AsyncSessionDep):
    """Public list of domains and the roles they offer."""
    domains = await list_active_domains(session)
    selected = {}
    if user is not None:
        selected = {m.domain_id: m.role_id for m in user.memberships}

    return templates.TemplateResponse(
        request,
        "domains.html",
        {
            "domains": [to_domain_response(d) for d in domains],
            "selected_roles": selected,
            "user": user,
            "navigation": GLOBAL_NAVIGATION,
            "active_path": request.url.path,
        },
    )


@router.get("/dashboards")
async def dashboards_page(request: Request, user: PageUser):
    return _render_empty_state(request, GLOBAL_PAGES["dashboards"], user, GLOBAL_NAVIGATION)


@router.get("/teams")
async def teams_page(request: Request, user: PageUser):
    return _render_empty_state(request, GLOBAL_PAGES["teams"], user, GLOBAL_NAVIGATION)


@router.get("/organogram")
async def organogram_page(request: Request, user: PageUser):
    return _render_empty_state(request, GLOBAL_PAGES["organogram"], user, GLOBAL_NAVIGATION)


@router.get("/workstreams")
async def workstreams_page(request: Request, user: PageUser):
    return _render_empty_state(request, GLOBAL_PAGES["workstreams"], user, GLOBAL_NAVIGATION)


@router.get("/{domain}")
async def domain_home(request: Request, current: CurrentDomain, user: PageUser):
    """Domain overview with its role cards; the member's role is selected."""
    membership = user.get_membership(current.domain_id)
    return templates.TemplateResponse(
        request,
        "domain_home.html",
        {
            "domain": current,
            "card": to_domain_response(current),
            "selected_role": membership.role_id if membership else None,
            "user": user,
            "navigation": get_navigation(current),
            "active_path": request.url.path,
        },
    )


@router.get("/{domain}/{page}")
async def domain_placeholder_page(
    request: Request,
    page: str,
    current: CurrentDomain,
    user: PageUser,
):
    """Placeholder page of a domain (dashboards, teams, organogram, workstreams)."""
    if page not in DOMAIN_PAGES:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Page not found")

    return _render_empty_state(
        request,
        domain_page(page, current.name),
        user,
        get_navigation(current),
        domain=current,
    )
