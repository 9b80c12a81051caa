"""Map reservation engine errors to HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from staybook.reservations.errors import (
    BusinessRuleError,
    CapacityExceededError,
    ForbiddenError,
    NotAvailableError,
    NotFoundError,
    PersistenceError,
    ReservationError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# First match wins, so subclasses come before their parents.
_STATUS_BY_ERROR: list[tuple[type[ReservationError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (CapacityExceededError, status.HTTP_400_BAD_REQUEST),
    (NotAvailableError, status.HTTP_409_CONFLICT),
    (BusinessRuleError, status.HTTP_409_CONFLICT),
    (PersistenceError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def status_code_for(exc: ReservationError) -> int:
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def reservation_error_handler(request: Request, exc: ReservationError) -> JSONResponse:
    status_code = status_code_for(exc)
    body: dict[str, str] = {"detail": exc.message, "code": exc.code}
    if isinstance(exc, ValidationError):
        body["field"] = exc.field
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.code)
    return JSONResponse(status_code=status_code, content=body)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ReservationError, reservation_error_handler)  # type: ignore[arg-type]
