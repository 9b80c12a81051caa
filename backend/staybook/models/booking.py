"""Booking model — tracks property reservations."""

import uuid
from decimal import Decimal

from sqlalchemy import CheckConstraint, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from staybook.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Booking(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A reservation of a property by a user for a half-open date range."""

    __tablename__ = "bookings"

    property_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    # Calendar dates kept as ISO strings (YYYY-MM-DD), no time-of-day component.
    check_in: Mapped[str] = mapped_column(String(32), nullable=False)
    check_out: Mapped[str] = mapped_column(String(32), nullable=False)
    guests: Mapped[int] = mapped_column(Integer, nullable=False)
    total_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        default="confirmed",
        index=True,
    )  # pending, confirmed, cancelled, completed

    __table_args__ = (
        CheckConstraint("guests >= 1", name="ck_bookings_guests_positive"),
        CheckConstraint("total_price >= 0", name="ck_bookings_total_price_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, property_id={self.property_id}, user_id={self.user_id!r}, status={self.status})>"
