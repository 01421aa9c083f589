from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from fastapi import FastAPI

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

from ethics_engine import __version__
from ethics_engine.api.routes import ethics, health, policy
from ethics_engine.config.settings import Settings
from ethics_engine.engine.factory import build_engine, build_lookup
from ethics_engine.log_config import configure_logging

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    logger.info("api_startup")
    yield
    close = getattr(app.state.lookup, "close", None)
    if close is not None:
        await close()
    logger.info("api_shutdown")


def create_app(settings: Settings | None = None) -> FastAPI:
    app = FastAPI(
        title="Ethics Engine",
        description="Policy-aware risk aggregation for cross-border cases",
        version=__version__,
        lifespan=lifespan,
    )

    settings = settings or Settings()
    configure_logging(settings.log_level)
    app.state.settings = settings
    app.state.lookup = build_lookup(settings)
    app.state.engine = build_engine(settings, lookup=app.state.lookup)

    app.include_router(health.router, tags=["health"])
    app.include_router(ethics.router, prefix="/api/v1", tags=["ethics"])
    app.include_router(policy.router, prefix="/api/v1", tags=["policy"])

    return app
