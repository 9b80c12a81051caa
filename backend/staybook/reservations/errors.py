"""Error taxonomy raised by the reservation engine.

The engine only distinguishes errors by kind; mapping kinds to HTTP status
codes is the job of ``staybook.api.errors``.
"""


class ReservationError(Exception):
    """Base class for every error the engine raises on purpose."""

    code = "ERROR"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class ValidationError(ReservationError):
    """Malformed or missing input; the caller must fix ``field``."""

    code = "VALIDATION_ERROR"

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class NotFoundError(ReservationError):
    code = "NOT_FOUND"


class PropertyNotFoundError(NotFoundError):
    code = "PROPERTY_NOT_FOUND"

    def __init__(self, property_id: str) -> None:
        super().__init__("Property not found")
        self.property_id = property_id


class BookingNotFoundError(NotFoundError):
    code = "BOOKING_NOT_FOUND"

    def __init__(self, booking_id: str) -> None:
        super().__init__("Booking not found")
        self.booking_id = booking_id


class ForbiddenError(ReservationError):
    """Caller is neither the owner of the resource nor privileged."""

    code = "FORBIDDEN"

    def __init__(self, message: str = "Not allowed") -> None:
        super().__init__(message)


class BusinessRuleError(ReservationError):
    """Well-formed input that cannot currently succeed.

    Callers are expected to retry with different parameters.
    """

    code = "BUSINESS_RULE"


class CapacityExceededError(BusinessRuleError):
    code = "GUESTS_EXCEED_MAX"

    def __init__(self, guests: int, max_guests: int) -> None:
        super().__init__("Number of guests exceeds property capacity")
        self.guests = guests
        self.max_guests = max_guests


class NotAvailableError(BusinessRuleError):
    code = "NOT_AVAILABLE"

    def __init__(self, property_id: str, check_in: str, check_out: str) -> None:
        super().__init__("Property is not available for selected dates")
        self.property_id = property_id
        self.check_in = check_in
        self.check_out = check_out


class PersistenceError(ReservationError):
    """The storage backend failed (network, constraint, corruption)."""

    code = "PERSISTENCE_ERROR"
