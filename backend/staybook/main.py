"""StayBook — FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from staybook.api.errors import register_exception_handlers
from staybook.api.v1.bookings import router as bookings_router
from staybook.api.v1.dev import router as dev_router
from staybook.api.v1.notifications import router as notifications_router
from staybook.api.v1.properties import router as properties_router
from staybook.config import Settings, settings
from staybook.repositories import Repositories, build_repositories
from staybook.services.notifications import HostNotifier
from staybook.services.reservations import ReservationService

# Configure root logger so all staybook.* loggers output to stderr.
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def create_app(config: Settings = settings, repositories: Repositories | None = None) -> FastAPI:
    """Build the application and wire its storage backend.

    The backend is selected here, once; ``repositories`` may be passed in to
    share stores with a caller (tests, seed script).
    """
    if repositories is None:
        repositories = build_repositories(config)
    notifier = HostNotifier(repositories.notifications)
    reservations = ReservationService(
        repositories,
        notifier,
        host_dashboard_link=config.host_dashboard_link,
        serialize_per_property=config.serialize_bookings_per_property,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Application lifespan handler for startup and shutdown events."""
        # Startup
        if config.database_create_tables:
            await repositories.create_tables()
        yield
        # Shutdown: flush pending notifications, dispose engine connections
        await notifier.drain()
        await repositories.close()

    app = FastAPI(
        title=config.app_name,
        version=config.app_version,
        description="Reservation engine for a property-rental marketplace.",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.repositories = repositories
    app.state.notifier = notifier
    app.state.reservations = reservations

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    # Routers
    app.include_router(properties_router)
    app.include_router(bookings_router)
    app.include_router(notifications_router)
    if config.environment != "production":
        app.include_router(dev_router)

    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy", "service": config.app_name, "storage": repositories.backend}

    @app.get("/", tags=["root"])
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {
            "service": config.app_name,
            "version": config.app_version,
            "docs": "/docs",
        }

    return app


app = create_app()
