"""
main.py
-------
FastAPI application factory and entry point.

Application lifecycle:
  1. App is created by create_application().
  2. lifespan context manager runs on startup / shutdown.
  3. Routers are registered; every entity router carries its ScopeMode.
  4. Exception handlers map ScopeError subclasses to their status codes
     and normalise unexpected errors.

Run with:
    uvicorn main:app --reload              # development
    uvicorn main:app --workers 4           # production (no --reload)
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bizdesk.api.routes import ai, auth, dashboard, tenants
from bizdesk.api.routes.entities import build_entity_routers
from bizdesk.core.config import settings
from bizdesk.core.errors import ScopeError
from bizdesk.core.logging import configure_logging, get_logger
from bizdesk.db.session import AsyncSessionLocal, engine
from bizdesk.services.session_service import SessionBinder

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Startup / shutdown lifecycle hook.

    Startup:
      - Configure structured logging
      - Drop sessions that expired while the service was down

    Shutdown:
      - Dispose the async engine (graceful connection pool drain)
    """
    configure_logging()
    logger.info(
        "Starting up",
        app=settings.APP_NAME,
        env=settings.APP_ENV,
        root_domain=settings.ROOT_DOMAIN,
        unknown_slug_policy=settings.UNKNOWN_SLUG_POLICY,
    )
    async with AsyncSessionLocal() as db:
        purged = await SessionBinder.purge_expired(db)
        await db.commit()
    logger.info("Expired sessions purged", count=purged)
    yield
    logger.info("Shutting down, disposing DB engine")
    await engine.dispose()


def create_application() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        description=(
            "Multi-tenant business backend: subdomain tenant resolution, "
            "server-side sessions, and scoped, role-filtered data access."
        ),
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── CORS ─────────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Routers ───────────────────────────────────────────────────────────────
    app.include_router(auth.router)
    app.include_router(tenants.router)
    app.include_router(ai.router)
    app.include_router(dashboard.router)
    for router in build_entity_routers():
        app.include_router(router)

    # ── Exception Handlers ────────────────────────────────────────────────────

    @app.exception_handler(ScopeError)
    async def scope_error_handler(request: Request, exc: ScopeError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.error(
            "Unhandled exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    # ── Health Check ──────────────────────────────────────────────────────────

    @app.get("/health", tags=["Health"], summary="Service health check")
    async def health() -> dict:
        return {"status": "ok", "app": settings.APP_NAME, "env": settings.APP_ENV}

    return app


app = create_application()
