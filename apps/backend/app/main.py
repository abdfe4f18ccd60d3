"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from app.api.auth.routes import router as auth_router
from app.api.camunda.routes import router as camunda_router
from app.api.debug.routes import router as debug_router
from app.api.domains.routes import router as domains_router
from app.api.keycloak.routes import router as keycloak_router
from app.api.pages.routes import router as pages_router
from app.core.config import get_camunda_settings, get_settings
from app.core.exceptions import PageRedirect
from app.db.session import dispose_engine
from packages.camunda import CamundaClient

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    camunda_settings = get_camunda_settings()
    app.state.camunda_client = CamundaClient(
        camunda_settings.camunda_base_url,
        timeout=camunda_settings.camunda_timeout_seconds,
    )
    app.state.http_client = httpx.AsyncClient(timeout=camunda_settings.camunda_timeout_seconds)
    logger.info(f"Workflow engine at {camunda_settings.camunda_base_url}")
    yield
    # Shutdown
    await app.state.camunda_client.aclose()
    await app.state.http_client.aclose()
    await dispose_engine()


app = FastAPI(
    title=f"{settings.app_name} API",
    version="0.1.0",
    description="Multi-domain workspace with workflow engine integration",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PageRedirect)
async def page_redirect_handler(request: Request, exc: PageRedirect) -> RedirectResponse:
    return RedirectResponse(exc.url, status_code=status.HTTP_302_FOUND)


@app.get("/healthz")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok", "environment": settings.environment}


# Include routers; pages last so their catch-all paths do not shadow the API
app.include_router(auth_router, prefix="/api/auth", tags=["Authentication"])
app.include_router(camunda_router, prefix="/api/camunda", tags=["Camunda"])
app.include_router(debug_router, prefix="/api/debug", tags=["Debug"])
app.include_router(domains_router, prefix="/api", tags=["Domains"])
app.include_router(keycloak_router, prefix="/auth", tags=["Identity Provider"])
app.include_router(pages_router, tags=["Pages"])
