"""FastAPI application entrypoint for the gym management API.

Every entity router is mounted in-process under ``/api/v1``.
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from libs.common.config import get_settings
from libs.common.error_handler import add_exception_handlers
from libs.common.logging import get_logger
from libs.common.middleware import add_observability_middleware
from libs.db.session import create_all
from services.attendance_service.router import router as attendance_router
from services.classes_service.router import router as classes_router
from services.dashboard_service.router import router as dashboard_router
from services.members_service.router import router as members_router
from services.packages_service.router import router as packages_router
from services.payments_service.router import router as payments_router
from services.trainers_service.router import router as trainers_router
from services.users_service.router import router as users_router

API_PREFIX = "/api/v1"

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_all()
    logger.info("Storage collections ready")
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance."""
    settings = get_settings()
    app = FastAPI(
        title="Gym Management API",
        version="0.1.0",
        description="Members, packages, trainers, classes, attendance and payments.",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Structured logging + request tracing
    add_observability_middleware(app)

    # Consistent JSON bodies for domain errors
    add_exception_handlers(app)

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Simple readiness endpoint."""
        return {"status": "ok"}

    app.include_router(users_router, prefix=API_PREFIX)
    app.include_router(members_router, prefix=API_PREFIX)
    app.include_router(packages_router, prefix=API_PREFIX)
    app.include_router(trainers_router, prefix=API_PREFIX)
    app.include_router(classes_router, prefix=API_PREFIX)
    app.include_router(attendance_router, prefix=API_PREFIX)
    app.include_router(payments_router, prefix=API_PREFIX)
    app.include_router(dashboard_router, prefix=API_PREFIX)

    return app


app = create_app()
