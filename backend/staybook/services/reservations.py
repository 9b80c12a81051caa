"""Reservation lifecycle — create, cancel, read, and list bookings.

A booking is created ``confirmed`` and can only move to ``cancelled``.
Every booking this service hands back carries its *effective* status:
a non-cancelled booking whose checkout is in the past reads as ``completed``.
"""

import asyncio
import contextlib
import logging
from collections import defaultdict
from collections.abc import Callable
from datetime import date

from staybook.repositories import Repositories
from staybook.reservations.dates import require_date_range
from staybook.reservations.errors import (
    BookingNotFoundError,
    ForbiddenError,
    NotAvailableError,
    PropertyNotFoundError,
    ValidationError,
)
from staybook.reservations.status import normalize_booking
from staybook.reservations.types import Booking, BookingPreview, NewBooking, PropertyInfo
from staybook.services import pricing
from staybook.services.availability import is_available
from staybook.services.notifications import HostNotifier

logger = logging.getLogger(__name__)


def _require(value: str | None, field: str) -> str:
    text = str(value or "").strip()
    if not text:
        raise ValidationError(field, f"{field} is required")
    return text


class ReservationService:
    """Entry point of the reservation engine.

    Args:
        repositories: Stores chosen once at startup; treated as opaque.
        notifier: Sink for host notifications (best-effort).
        host_dashboard_link: Link attached to host notifications.
        serialize_per_property: Hold a per-property lock between the
            availability check and the insert, so two concurrent requests in
            this process cannot double-book the same dates.
        today: Clock used for the derived ``completed`` status.
    """

    def __init__(
        self,
        repositories: Repositories,
        notifier: HostNotifier,
        host_dashboard_link: str = "/host/dashboard",
        serialize_per_property: bool = True,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._bookings = repositories.bookings
        self._properties = repositories.properties
        self._notifier = notifier
        self._host_link = host_dashboard_link
        self._serialize = serialize_per_property
        self._today = today
        self._property_locks: defaultdict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def normalize(self, booking: Booking) -> Booking:
        return normalize_booking(booking, self._today())

    async def get_property(self, property_id: str) -> PropertyInfo:
        prop = await self._properties.get_by_id(_require(property_id, "propertyId"))
        if prop is None:
            raise PropertyNotFoundError(property_id)
        return prop

    async def check_availability(self, property_id: str, check_in: str, check_out: str) -> bool:
        prop = await self.get_property(property_id)
        return await is_available(self._bookings, prop.id, check_in, check_out)

    async def preview(self, property_id: str, check_in: str, check_out: str, guests: int) -> BookingPreview:
        return await pricing.preview(self._properties, self._bookings, property_id, check_in, check_out, guests)

    async def get_booking(self, user_id: str, booking_id: str, privileged: bool = False) -> Booking:
        """Fetch a booking the caller owns (privileged callers may read any).

        Raises:
            BookingNotFoundError: Unknown booking id.
            ForbiddenError: Caller is neither the owner nor privileged.
        """
        booking_id = _require(booking_id, "id")
        booking = await self._bookings.get_by_id(booking_id)
        if booking is None:
            raise BookingNotFoundError(booking_id)
        if not privileged and booking.user_id != user_id:
            raise ForbiddenError()
        return self.normalize(booking)

    async def list_for_user(self, user_id: str) -> list[Booking]:
        return [self.normalize(b) for b in await self._bookings.list_by_user(user_id)]

    async def list_for_property(self, property_id: str) -> list[Booking]:
        property_id = _require(property_id, "propertyId")
        return [self.normalize(b) for b in await self._bookings.list_by_property(property_id)]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def _lock_for(self, property_id: str) -> contextlib.AbstractAsyncContextManager:
        if not self._serialize:
            return contextlib.nullcontext()
        return self._property_locks[property_id]

    async def create_booking(
        self,
        user_id: str,
        property_id: str,
        check_in: str,
        check_out: str,
        guests: int,
    ) -> Booking:
        """Validate, check availability, price, persist, and notify the host.

        Raises:
            ValidationError: Missing ids, bad dates, or an invalid guest count.
            PropertyNotFoundError: Unknown property.
            CapacityExceededError: More guests than the property allows.
            NotAvailableError: The dates overlap an existing booking.
        """
        user_id = _require(user_id, "userId")
        property_id = _require(property_id, "propertyId")

        prop = await self._properties.get_by_id(property_id)
        if prop is None:
            raise PropertyNotFoundError(property_id)

        in_date, out_date = require_date_range(check_in, check_out)
        guests = pricing.validate_guests(guests, prop)

        async with self._lock_for(property_id):
            # The property may have been deleted while we waited for the lock.
            prop = await self._properties.get_by_id(property_id)
            if prop is None:
                raise PropertyNotFoundError(property_id)

            if not await is_available(self._bookings, property_id, check_in, check_out):
                raise NotAvailableError(property_id, check_in, check_out)

            nights, total_price = pricing.stay_price(prop, in_date, out_date)
            if nights <= 0:
                raise ValidationError("checkOut", "Invalid nights")

            booking = await self._bookings.create(
                NewBooking(
                    property_id=property_id,
                    user_id=user_id,
                    check_in=in_date.isoformat(),
                    check_out=out_date.isoformat(),
                    guests=guests,
                    total_price=total_price,
                    status="confirmed",
                )
            )

        logger.info(
            "Booking %s created: property=%s user=%s %s..%s nights=%d total=%s",
            booking.id,
            property_id,
            user_id,
            booking.check_in,
            booking.check_out,
            nights,
            total_price,
        )

        if prop.host_id and prop.host_id != user_id:
            self._notifier.notify(
                prop.host_id,
                "booking_confirmed",
                "New booking confirmed",
                f'New booking for "{prop.title}" ({booking.check_in} → {booking.check_out}).',
                self._host_link,
            )

        return self.normalize(booking)

    async def cancel_booking(self, user_id: str, booking_id: str, privileged: bool = False) -> Booking:
        """Cancel a booking. Cancelling an already-cancelled booking is a no-op.

        Raises:
            BookingNotFoundError: Unknown booking id.
            ForbiddenError: Caller is neither the owner nor privileged.
        """
        booking_id = _require(booking_id, "id")
        booking = await self._bookings.get_by_id(booking_id)
        if booking is None:
            raise BookingNotFoundError(booking_id)
        if not privileged and booking.user_id != user_id:
            raise ForbiddenError()

        async with self._lock_for(booking.property_id):
            current = await self._bookings.get_by_id(booking_id)
            if current is None:
                raise BookingNotFoundError(booking_id)
            if current.status == "cancelled":
                return self.normalize(current)

            updated = await self._bookings.update_status(booking_id, "cancelled")
            if updated is None:
                raise BookingNotFoundError(booking_id)

        logger.info("Booking %s cancelled by %s%s", booking_id, user_id, " (privileged)" if privileged else "")

        prop = await self._properties.get_by_id(updated.property_id)
        if prop is not None and prop.host_id and prop.host_id != user_id:
            self._notifier.notify(
                prop.host_id,
                "booking_cancelled",
                "Booking cancelled",
                f'A booking for "{prop.title}" ({updated.check_in} → {updated.check_out}) was cancelled.',
                self._host_link,
            )

        return self.normalize(updated)

    async def delete_property(self, user_id: str, property_id: str, privileged: bool = False) -> int:
        """Remove a property and cascade-delete its bookings.

        Only the property's host or a privileged caller may do this.
        Returns the number of bookings removed.
        """
        prop = await self.get_property(property_id)
        if not privileged and prop.host_id != user_id:
            raise ForbiddenError()

        async with self._lock_for(prop.id):
            removed = await self._bookings.delete_by_property(prop.id)
            await self._properties.delete(prop.id)
        self._property_locks.pop(prop.id, None)

        logger.info("Property %s deleted by %s; %d booking(s) removed", prop.id, user_id, removed)
        return removed
