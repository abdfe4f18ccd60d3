"""Resolve the current domain for domain-scoped pages."""

from typing import Annotated

import httpx
from fastapi import Depends, HTTPException, Request, status

from app.core.dependencies import AsyncSessionDep, OptionalUser
from app.core.exceptions import PageRedirect
from app.models.domain import Domain
from app.models.user import User
from app.services.domain_service import get_domain_by_slug, has_access

SIGNIN_PATH = "/auth/keycloak-signin"
DOMAINS_PATH = "/domains"


def signin_redirect(request: Request) -> PageRedirect:
    """Redirect to sign-in, coming back to the page that was requested."""
    callback = request.url.path
    if request.url.query:
        callback = f"{callback}?{request.url.query}"
    return PageRedirect(str(httpx.URL(SIGNIN_PATH, params={"callbackUrl": callback})))


async def require_page_user(request: Request, user: OptionalUser) -> User:
    if user is None:
        raise signin_redirect(request)
    return user


PageUser = Annotated[User, Depends(require_page_user)]


async def get_current_domain(
    domain: str,
    user: PageUser,
    session: AsyncSessionDep,
) -> Domain:
    """
    The domain named by the ``{domain}`` path segment.

    Users without any membership, or without access to this domain, are sent
    to the domain list to join one.

    Raises:
        PageRedirect: To sign-in or to the domain list.
        HTTPException 404: If no active domain has this slug.
    """
    if not user.memberships:
        raise PageRedirect(DOMAINS_PATH)

    current = await get_domain_by_slug(session, domain)
    if current is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Domain not found")

    if not has_access(user, current):
        raise PageRedirect(DOMAINS_PATH)

    return current


CurrentDomain = Annotated[Domain, Depends(get_current_domain)]
