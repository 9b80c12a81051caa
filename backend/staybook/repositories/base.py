"""Storage interfaces the reservation engine depends on.

Each interface has an in-memory and a SQL implementation with identical
semantics; the engine never knows which one it was given.
"""

from abc import ABC, abstractmethod
from decimal import Decimal

from staybook.reservations.types import Booking, NewBooking, Notification, PropertyInfo


class BookingRepository(ABC):
    """Owns booking records."""

    @abstractmethod
    async def create(self, fields: NewBooking) -> Booking:
        """Assign id and timestamps, persist, and return the stored record."""

    @abstractmethod
    async def get_by_id(self, booking_id: str) -> Booking | None:
        """Return the booking, or ``None`` for unknown or malformed ids."""

    @abstractmethod
    async def list_by_user(self, user_id: str) -> list[Booking]:
        """Bookings made by ``user_id``, newest first."""

    @abstractmethod
    async def list_by_property(self, property_id: str) -> list[Booking]:
        """Bookings on ``property_id``, ordered by check-in."""

    @abstractmethod
    async def update_status(self, booking_id: str, status: str) -> Booking | None:
        """Set ``status`` and bump ``updated_at``; every other field is immutable."""

    @abstractmethod
    async def delete_by_property(self, property_id: str) -> int:
        """Remove every booking on ``property_id`` and return how many were removed."""


class PropertyRepository(ABC):
    """Read access to the property catalog, plus the writes seeding and cascades need."""

    @abstractmethod
    async def get_by_id(self, property_id: str) -> PropertyInfo | None:
        pass

    @abstractmethod
    async def add(
        self,
        host_id: str,
        title: str,
        price_per_night: Decimal,
        max_guests: int | None = None,
        description: str | None = None,
        location: str | None = None,
    ) -> PropertyInfo:
        pass

    @abstractmethod
    async def update_price(self, property_id: str, price_per_night: Decimal) -> PropertyInfo | None:
        """Change the nightly rate. Existing bookings keep the price they were quoted."""

    @abstractmethod
    async def delete(self, property_id: str) -> bool:
        pass


class NotificationRepository(ABC):
    """In-app inbox the notification sink writes to."""

    @abstractmethod
    async def create(
        self,
        user_id: str,
        type: str,
        title: str,
        message: str,
        link: str | None = None,
    ) -> Notification:
        pass

    @abstractmethod
    async def list_by_user(self, user_id: str) -> list[Notification]:
        """Notifications for ``user_id``, newest first."""
