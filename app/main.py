# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the CareLink API gateway.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:create_app --factory --reload
#   python -m app.main
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.auth import get_current_user
from app.auth import routes as auth_routes
from app.config import Settings, get_settings
from app.dependencies import GatewayContext
from app.exceptions import (
    GatewayException,
    gateway_exception_handler,
    http_exception_handler,
    store_exception_handler,
    unexpected_exception_handler,
    validation_exception_handler,
)
from app.routers import appointments, directory, inventory, prescriptions
from lib.supabase_client import StoreError, SupabaseStore

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def create_app(
    settings: Settings | None = None,
    store: SupabaseStore | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use (default: loaded from the environment)
        store: Store adapter to use (default: a Supabase store built from settings)

    Returns:
        FastAPI: The configured application
    """
    settings = settings or get_settings()
    configure_logging(settings)
    context = GatewayContext.from_settings(settings, store=store)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Log startup/shutdown; all state is already in app.state.context."""
        logger.info(
            f"CareLink API running in {settings.ENVIRONMENT} mode on "
            f"http://{settings.API_HOST}:{settings.API_PORT}"
        )
        logger.info(f"CORS origins: {settings.cors_origins_list}")
        logger.info(f"Prescription bucket: {settings.PRESCRIPTIONS_BUCKET}")
        yield
        logger.info("Shutting down CareLink API")

    app = FastAPI(
        title="CareLink API",
        description=(
            "REST gateway for patients, doctors, ASHA workers and pharmacies. "
            "Authenticates users by role and proxies records and prescription "
            "files to Supabase."
        ),
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Auth", "description": "Signup, login and the current identity"},
            {"name": "Directory", "description": "Patient, doctor, ASHA and pharmacy listings"},
            {"name": "Appointments", "description": "Appointment booking"},
            {"name": "Inventory", "description": "Pharmacy inventory"},
            {"name": "Prescriptions", "description": "Prescription file uploads"},
        ],
    )
    app.state.context = context

    # =========================================================================
    # Middleware
    # =========================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    app.add_exception_handler(GatewayException, gateway_exception_handler)
    app.add_exception_handler(StoreError, store_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unexpected_exception_handler)

    # =========================================================================
    # Routers
    # =========================================================================

    # Public: signup/login (me declares its own auth dependency)
    app.include_router(auth_routes.router, prefix=API_PREFIX)

    # Protected: every route below runs get_current_user first
    protected = [Depends(get_current_user)]

    app.include_router(
        directory.router, prefix=API_PREFIX, tags=["Directory"], dependencies=protected
    )
    app.include_router(
        appointments.router, prefix=API_PREFIX, tags=["Appointments"], dependencies=protected
    )
    app.include_router(
        inventory.router, prefix=API_PREFIX, tags=["Inventory"], dependencies=protected
    )
    app.include_router(
        prescriptions.router, prefix=API_PREFIX, tags=["Prescriptions"], dependencies=protected
    )

    return app


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(create_app(_settings), host=_settings.API_HOST, port=_settings.API_PORT)
