"""FastAPI application factory.

Learn: App factory pattern — create_app() returns a configured FastAPI
instance. Lifespan manages startup/shutdown (schema bootstrap, engine
disposal). Middleware, exception handlers and routers are registered here.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from talentflow import __version__
from talentflow.api import api_router
from talentflow.api.errors import register_exception_handlers
from talentflow.config import settings
from talentflow.db.engine import engine
from talentflow.db.models import Base
from talentflow.logging_config import configure_logging
from talentflow.middleware.authentication import AuthenticationMiddleware
from talentflow.middleware.request_id import RequestIdMiddleware
from talentflow.middleware.security import SecurityHeadersMiddleware

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Learn: Anything before `yield` runs at startup, after `yield` runs at
    shutdown. Schema creation is opt-in (TALENTFLOW_AUTO_CREATE_SCHEMA);
    real deployments run alembic migrations instead.
    """
    logger.info(
        "talentflow.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    if settings.auto_create_schema:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("talentflow.schema_created")

    yield

    logger.info("talentflow.shutdown")
    await engine.dispose()


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    configure_logging()

    app = FastAPI(
        title="TalentFlow",
        description="Job board API — accounts, job postings and applications",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Middleware stack ──────────────────────────────────────
    # Starlette runs middleware in reverse order of registration.
    # Request flow: RequestId → SecurityHeaders → Authentication → CORS → handler
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(AuthenticationMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIdMiddleware)

    register_exception_handlers(app)
    app.include_router(api_router)

    return app


# Default app instance (used by uvicorn: talentflow.main:app)
app = create_app()
