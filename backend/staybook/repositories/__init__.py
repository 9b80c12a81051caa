"""Storage backend selection.

The backend is chosen exactly once, when the application is built, and the
resulting repositories are injected into the services. Nothing downstream
branches on which backend is active.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine

from staybook.config import Settings
from staybook.database import create_all_tables, create_engine, create_session_factory
from staybook.repositories.base import BookingRepository, NotificationRepository, PropertyRepository
from staybook.repositories.memory import (
    InMemoryBookingRepository,
    InMemoryNotificationRepository,
    InMemoryPropertyRepository,
)
from staybook.repositories.sql import SqlBookingRepository, SqlNotificationRepository, SqlPropertyRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Repositories:
    """The set of stores one process works against."""

    backend: str  # memory, database
    bookings: BookingRepository
    properties: PropertyRepository
    notifications: NotificationRepository
    engine: AsyncEngine | None = None

    async def create_tables(self) -> None:
        if self.engine is not None:
            await create_all_tables(self.engine)

    async def close(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()

    def reset(self) -> None:
        """Empty the in-memory stores (dev seeding and tests). No-op for the database."""
        for repo in (self.bookings, self.properties, self.notifications):
            reset = getattr(repo, "reset", None)
            if reset is not None:
                reset()


def build_memory_repositories() -> Repositories:
    return Repositories(
        backend="memory",
        bookings=InMemoryBookingRepository(),
        properties=InMemoryPropertyRepository(),
        notifications=InMemoryNotificationRepository(),
    )


def build_sql_repositories(database_url: str, echo: bool = False) -> Repositories:
    engine = create_engine(database_url, echo=echo)
    session_factory = create_session_factory(engine)
    return Repositories(
        backend="database",
        bookings=SqlBookingRepository(session_factory),
        properties=SqlPropertyRepository(session_factory),
        notifications=SqlNotificationRepository(session_factory),
        engine=engine,
    )


def build_repositories(settings: Settings) -> Repositories:
    """Build the repositories for the backend named in ``settings``."""
    if settings.uses_memory:
        logger.info("Storage backend: in-memory (data is lost on restart)")
        return build_memory_repositories()
    logger.info("Storage backend: database")
    return build_sql_repositories(settings.async_database_url, echo=settings.debug)


__all__ = [
    "BookingRepository",
    "NotificationRepository",
    "PropertyRepository",
    "Repositories",
    "build_memory_repositories",
    "build_repositories",
    "build_sql_repositories",
]
