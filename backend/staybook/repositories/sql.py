"""SQLAlchemy (async) repository implementations for the durable backend."""

import logging
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from decimal import Decimal

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from staybook.database import utcnow
from staybook.models.booking import Booking as BookingRow
from staybook.models.notification import Notification as NotificationRow
from staybook.models.property import Property as PropertyRow
from staybook.repositories.base import BookingRepository, NotificationRepository, PropertyRepository
from staybook.reservations.errors import PersistenceError
from staybook.reservations.types import Booking, NewBooking, Notification, PropertyInfo

logger = logging.getLogger(__name__)


def _to_uuid(value: str) -> uuid.UUID | None:
    """Parse an id; malformed ids behave like unknown ones."""
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None


def _to_booking(row: BookingRow) -> Booking:
    return Booking(
        id=str(row.id),
        property_id=str(row.property_id),
        user_id=row.user_id,
        check_in=row.check_in,
        check_out=row.check_out,
        guests=row.guests,
        total_price=Decimal(row.total_price),
        status=row.status,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _to_property(row: PropertyRow) -> PropertyInfo:
    return PropertyInfo(
        id=str(row.id),
        host_id=row.host_id,
        title=row.title,
        price_per_night=Decimal(row.price_per_night),
        max_guests=row.max_guests,
        description=row.description,
        location=row.location,
    )


def _to_notification(row: NotificationRow) -> Notification:
    return Notification(
        id=str(row.id),
        user_id=row.user_id,
        type=row.type,
        title=row.title,
        message=row.message,
        link=row.link,
        read=row.read,
        created_at=row.created_at,
    )


class _SqlRepository:
    """Shared session handling: one session and one commit per operation."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except (SQLAlchemyError, OSError) as exc:
                await session.rollback()
                logger.exception("%s operation failed", type(self).__name__)
                raise PersistenceError("Storage backend failure") from exc


class SqlBookingRepository(_SqlRepository, BookingRepository):
    """SQL implementation of BookingRepository"""

    async def create(self, fields: NewBooking) -> Booking:
        property_uuid = _to_uuid(fields.property_id)
        if property_uuid is None:
            raise PersistenceError(f"Invalid property id: {fields.property_id!r}")
        now = utcnow()
        row = BookingRow(
            property_id=property_uuid,
            user_id=fields.user_id,
            check_in=fields.check_in,
            check_out=fields.check_out,
            guests=fields.guests,
            total_price=fields.total_price,
            status=fields.status,
            created_at=now,
            updated_at=now,
        )
        async with self._session() as session:
            session.add(row)
            await session.flush()
        return _to_booking(row)

    async def get_by_id(self, booking_id: str) -> Booking | None:
        booking_uuid = _to_uuid(booking_id)
        if booking_uuid is None:
            return None
        async with self._session() as session:
            row = await session.get(BookingRow, booking_uuid)
        return _to_booking(row) if row is not None else None

    async def list_by_user(self, user_id: str) -> list[Booking]:
        async with self._session() as session:
            result = await session.execute(
                select(BookingRow).where(BookingRow.user_id == user_id).order_by(BookingRow.created_at.desc())
            )
            rows = list(result.scalars().all())
        return [_to_booking(r) for r in rows]

    async def list_by_property(self, property_id: str) -> list[Booking]:
        property_uuid = _to_uuid(property_id)
        if property_uuid is None:
            return []
        async with self._session() as session:
            result = await session.execute(
                select(BookingRow).where(BookingRow.property_id == property_uuid).order_by(BookingRow.check_in)
            )
            rows = list(result.scalars().all())
        return [_to_booking(r) for r in rows]

    async def update_status(self, booking_id: str, status: str) -> Booking | None:
        booking_uuid = _to_uuid(booking_id)
        if booking_uuid is None:
            return None
        async with self._session() as session:
            row = await session.get(BookingRow, booking_uuid)
            if row is None:
                return None
            row.status = status
            row.updated_at = utcnow()
        return _to_booking(row)

    async def delete_by_property(self, property_id: str) -> int:
        property_uuid = _to_uuid(property_id)
        if property_uuid is None:
            return 0
        async with self._session() as session:
            result = await session.execute(delete(BookingRow).where(BookingRow.property_id == property_uuid))
            removed = result.rowcount or 0
        return removed


class SqlPropertyRepository(_SqlRepository, PropertyRepository):
    """SQL implementation of PropertyRepository"""

    async def get_by_id(self, property_id: str) -> PropertyInfo | None:
        property_uuid = _to_uuid(property_id)
        if property_uuid is None:
            return None
        async with self._session() as session:
            row = await session.get(PropertyRow, property_uuid)
        return _to_property(row) if row is not None else None

    async def add(
        self,
        host_id: str,
        title: str,
        price_per_night: Decimal,
        max_guests: int | None = None,
        description: str | None = None,
        location: str | None = None,
    ) -> PropertyInfo:
        row = PropertyRow(
            host_id=host_id,
            title=title,
            price_per_night=Decimal(price_per_night),
            max_guests=max_guests,
            description=description,
            location=location,
        )
        async with self._session() as session:
            session.add(row)
            await session.flush()
        return _to_property(row)

    async def update_price(self, property_id: str, price_per_night: Decimal) -> PropertyInfo | None:
        property_uuid = _to_uuid(property_id)
        if property_uuid is None:
            return None
        async with self._session() as session:
            row = await session.get(PropertyRow, property_uuid)
            if row is None:
                return None
            row.price_per_night = Decimal(price_per_night)
            row.updated_at = utcnow()
        return _to_property(row)

    async def delete(self, property_id: str) -> bool:
        property_uuid = _to_uuid(property_id)
        if property_uuid is None:
            return False
        async with self._session() as session:
            result = await session.execute(delete(PropertyRow).where(PropertyRow.id == property_uuid))
            removed = result.rowcount or 0
        return removed > 0


class SqlNotificationRepository(_SqlRepository, NotificationRepository):
    """SQL implementation of NotificationRepository"""

    async def create(
        self,
        user_id: str,
        type: str,
        title: str,
        message: str,
        link: str | None = None,
    ) -> Notification:
        row = NotificationRow(user_id=user_id, type=type, title=title, message=message, link=link, read=False)
        async with self._session() as session:
            session.add(row)
            await session.flush()
        return _to_notification(row)

    async def list_by_user(self, user_id: str) -> list[Notification]:
        async with self._session() as session:
            result = await session.execute(
                select(NotificationRow)
                .where(NotificationRow.user_id == user_id)
                .order_by(NotificationRow.created_at.desc())
            )
            rows = list(result.scalars().all())
        return [_to_notification(r) for r in rows]
