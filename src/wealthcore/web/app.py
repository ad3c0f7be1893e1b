"""FastAPI application factory for the wealthcore API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wealthcore.config import Settings

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: initialize and cleanup resources."""
    settings = app.state.settings
    logger.info("Starting wealthcore API...")

    from wealthcore.web.cache import CacheService

    app.state.cache = await CacheService.create(settings.redis_url, settings.cache_ttl)

    logger.info("wealthcore API ready")
    yield

    if app.state.cache:
        await app.state.cache.close()
    logger.info("wealthcore API shutdown complete")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="wealthcore API",
        description="Wealth analytics - loan amortization, performance, IFI/income tax, Monte Carlo projections",
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "Accept"],
    )

    _register_routers(app)

    return app


def _register_routers(app: FastAPI):
    """Register all API routers."""
    from wealthcore.web.routers.loans import router as loans_router
    from wealthcore.web.routers.performance import router as performance_router
    from wealthcore.web.routers.tax import router as tax_router
    from wealthcore.web.routers.predictions import router as predictions_router
    from wealthcore.web.routers.system import router as system_router

    app.include_router(loans_router, prefix="/api/v1")
    app.include_router(performance_router, prefix="/api/v1")
    app.include_router(tax_router, prefix="/api/v1")
    app.include_router(predictions_router, prefix="/api/v1")
    app.include_router(system_router, prefix="/api/v1")
