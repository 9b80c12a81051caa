"""In-memory repository implementations.

Used for local development and tests. Nothing survives a restart; each
instance owns its own data, so tests build a fresh set per case.
"""

import dataclasses
import threading
import uuid
from decimal import Decimal

from staybook.database import utcnow
from staybook.repositories.base import BookingRepository, NotificationRepository, PropertyRepository
from staybook.reservations.types import Booking, NewBooking, Notification, PropertyInfo


class InMemoryBookingRepository(BookingRepository):
    """In-memory implementation of BookingRepository"""

    def __init__(self) -> None:
        self._storage: dict[str, Booking] = {}
        # Map mutation must stay atomic when the host drives the store from threads.
        self._lock = threading.Lock()

    async def create(self, fields: NewBooking) -> Booking:
        now = utcnow()
        booking = Booking(
            id=str(uuid.uuid4()),
            property_id=fields.property_id,
            user_id=fields.user_id,
            check_in=fields.check_in,
            check_out=fields.check_out,
            guests=fields.guests,
            total_price=fields.total_price,
            status=fields.status,
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self._storage[booking.id] = booking
        return booking

    async def get_by_id(self, booking_id: str) -> Booking | None:
        with self._lock:
            return self._storage.get(booking_id)

    async def list_by_user(self, user_id: str) -> list[Booking]:
        with self._lock:
            items = [b for b in self._storage.values() if b.user_id == user_id]
        return sorted(items, key=lambda b: b.created_at, reverse=True)

    async def list_by_property(self, property_id: str) -> list[Booking]:
        with self._lock:
            items = [b for b in self._storage.values() if b.property_id == property_id]
        return sorted(items, key=lambda b: b.check_in)

    async def update_status(self, booking_id: str, status: str) -> Booking | None:
        with self._lock:
            current = self._storage.get(booking_id)
            if current is None:
                return None
            updated = dataclasses.replace(current, status=status, updated_at=utcnow())
            self._storage[booking_id] = updated
        return updated

    async def delete_by_property(self, property_id: str) -> int:
        with self._lock:
            doomed = [bid for bid, b in self._storage.items() if b.property_id == property_id]
            for bid in doomed:
                del self._storage[bid]
        return len(doomed)

    def reset(self) -> None:
        with self._lock:
            self._storage.clear()


class InMemoryPropertyRepository(PropertyRepository):
    """In-memory implementation of PropertyRepository"""

    def __init__(self) -> None:
        self._storage: dict[str, PropertyInfo] = {}
        self._lock = threading.Lock()

    async def get_by_id(self, property_id: str) -> PropertyInfo | None:
        with self._lock:
            return self._storage.get(property_id)

    async def add(
        self,
        host_id: str,
        title: str,
        price_per_night: Decimal,
        max_guests: int | None = None,
        description: str | None = None,
        location: str | None = None,
    ) -> PropertyInfo:
        prop = PropertyInfo(
            id=str(uuid.uuid4()),
            host_id=host_id,
            title=title,
            price_per_night=Decimal(price_per_night),
            max_guests=max_guests,
            description=description,
            location=location,
        )
        with self._lock:
            self._storage[prop.id] = prop
        return prop

    async def update_price(self, property_id: str, price_per_night: Decimal) -> PropertyInfo | None:
        with self._lock:
            current = self._storage.get(property_id)
            if current is None:
                return None
            updated = dataclasses.replace(current, price_per_night=Decimal(price_per_night))
            self._storage[property_id] = updated
        return updated

    async def delete(self, property_id: str) -> bool:
        with self._lock:
            return self._storage.pop(property_id, None) is not None

    def reset(self) -> None:
        with self._lock:
            self._storage.clear()


class InMemoryNotificationRepository(NotificationRepository):
    """In-memory implementation of NotificationRepository"""

    def __init__(self) -> None:
        self._storage: dict[str, Notification] = {}
        self._lock = threading.Lock()

    async def create(
        self,
        user_id: str,
        type: str,
        title: str,
        message: str,
        link: str | None = None,
    ) -> Notification:
        notification = Notification(
            id=str(uuid.uuid4()),
            user_id=user_id,
            type=type,
            title=title,
            message=message,
            link=link,
            read=False,
            created_at=utcnow(),
        )
        with self._lock:
            self._storage[notification.id] = notification
        return notification

    async def list_by_user(self, user_id: str) -> list[Notification]:
        with self._lock:
            items = [n for n in self._storage.values() if n.user_id == user_id]
        return sorted(items, key=lambda n: n.created_at, reverse=True)

    def reset(self) -> None:
        with self._lock:
            self._storage.clear()
