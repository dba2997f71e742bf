"""FastAPI application with lifespan and router mounting."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from retireplan.api.errors import register_exception_handlers
from retireplan.api.routes import health, limits
from retireplan.core.config import AppSettings
from retireplan.core.logging_setup import configure_logging
from retireplan.core.protocols import ILimitCatalog
from retireplan.persistence import create_persistence
from retireplan.services.limits_service import ContributionLimitsService
from retireplan.services.resolver import LimitResolver


def create_app(settings: AppSettings | None = None,
               catalog: ILimitCatalog | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    A ``catalog`` passed in skips backend construction from settings.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Initialize and tear down application resources."""
        app_settings = settings or AppSettings()
        configure_logging(app_settings.log_level)
        limit_catalog = catalog
        if limit_catalog is None:
            limit_catalog, _ = create_persistence(app_settings)
        app.state.settings = app_settings
        app.state.limits_service = ContributionLimitsService(limit_catalog)
        app.state.resolver = LimitResolver(limit_catalog)
        yield

    app = FastAPI(
        title="RetirePlan Contribution Limits API",
        version="0.1.0",
        lifespan=lifespan,
    )
    register_exception_handlers(app)
    app.include_router(health.router)
    app.include_router(limits.router, prefix="/api/v1/limits")
    return app
