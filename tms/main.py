# /tms/main.py

# --- Core FastAPI Imports ---
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# --- Application-specific Imports ---
from .config import Settings, get_settings
from .logging_config import configure_logging
from .routers import dashboard_router

APP_VERSION = "1.0.0"

logger = structlog.get_logger(__name__)


def create_app(settings: Settings = None) -> FastAPI:
    """Creates and configures the FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings)

    # --- Application Lifecycle Management ---
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "api_startup",
            version=APP_VERSION,
            activity_feed_overfetch=settings.activity_feed_overfetch,
        )
        yield
        logger.info("api_shutdown")

    app = FastAPI(
        title="TMS Dashboard API",
        description="Role-scoped dashboard statistics and activity feeds for the driving-school management system.",
        version=APP_VERSION,
        lifespan=lifespan,
    )

    # --- Middleware Configuration ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- API Router Inclusion ---
    app.include_router(dashboard_router.router, prefix="/api/dashboard", tags=["Dashboard"])

    # --- Root / Health Check Endpoint ---
    @app.get("/", tags=["Health Check"])
    async def read_root():
        """A simple health check endpoint to confirm the API is online."""
        return {"status": "TMS Dashboard API is running!", "version": app.version}

    return app


app = create_app()
