from __future__ import annotations

import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from usg_api.api.errors import register_exception_handlers
from usg_api.api.middleware import register_middleware
from usg_api.api.routes.announcements import router as announcements_router
from usg_api.api.routes.auth import router as auth_router
from usg_api.api.routes.committees import router as committees_router
from usg_api.api.routes.feedback import router as feedback_router
from usg_api.api.routes.financial_transactions import router as financial_transactions_router
from usg_api.api.routes.governance_documents import router as governance_documents_router
from usg_api.api.routes.health import router as health_router
from usg_api.api.routes.issuances import router as issuances_router
from usg_api.api.routes.notifications import router as notifications_router
from usg_api.api.routes.officers import router as officers_router
from usg_api.api.routes.organizations import router as organizations_router
from usg_api.api.routes.page_content import router as page_content_router
from usg_api.api.routes.site_content import router as site_content_router
from usg_api.api.routes.stats import router as stats_router
from usg_api.core.config import Settings, load_settings, validate_environment
from usg_api.core.database import DatabaseClient
from usg_api.core.exceptions import ConfigError
from usg_api.core.http_client import HttpClient
from usg_api.core.logging import get_logger, setup_logging
from usg_api.core.rate_limiter import RateLimiterFactory
from usg_api.services.auth import AuthService
from usg_api.services.datastore import Datastore

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle for the FastAPI application."""

    # -- Startup -------------------------------------------------------------
    settings: Settings = app.state.settings
    setup_logging(log_dir=settings.log_dir, level=settings.log_level)
    logger.info(
        "Starting usg_api (environment=%s, database=%s)",
        settings.environment,
        settings.db_type,
    )

    validate_environment(settings)

    db = await DatabaseClient.connect(settings)
    datastore = Datastore(db)

    http_client = HttpClient()
    await http_client.start()
    auth_service = AuthService(settings, http_client)

    rate_limiters = RateLimiterFactory.create_all()

    # -- Bind all to app.state -------------------------------------------------
    app.state.db = db
    app.state.datastore = datastore
    app.state.http_client = http_client
    app.state.auth_service = auth_service
    app.state.rate_limiters = rate_limiters

    logger.info("Startup complete")
    yield

    # -- Shutdown ------------------------------------------------------------
    logger.info("Shutting down usg_api")
    await http_client.close()
    await db.close()
    logger.info("Shutdown complete")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()

    app = FastAPI(
        title="USG API",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Custom middleware (all resolve dependencies lazily from app.state)
    register_middleware(app)

    # CORS (outermost middleware -- added last so it wraps everything)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_exception_handlers(app)

    # -- Routers -------------------------------------------------------------
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(feedback_router)
    app.include_router(announcements_router)
    app.include_router(officers_router)
    app.include_router(organizations_router)
    app.include_router(committees_router)
    app.include_router(governance_documents_router)
    app.include_router(issuances_router)
    app.include_router(financial_transactions_router)
    app.include_router(site_content_router)
    app.include_router(page_content_router)
    app.include_router(stats_router)
    app.include_router(notifications_router)

    return app


def run() -> None:
    """Console entry point: validate the environment, then serve."""
    settings = load_settings()
    setup_logging(log_dir=settings.log_dir, level=settings.log_level)
    try:
        validate_environment(settings)
    except ConfigError as exc:
        logger.error("%s", exc.message)
        sys.exit(1)

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
