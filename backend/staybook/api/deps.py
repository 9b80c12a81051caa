"""Shared API dependencies — single import point for all routers.

Services are built once in ``create_app`` and hung off ``app.state``::

    from staybook.api.deps import get_current_caller, get_reservation_service
"""

from fastapi import Request

from staybook.auth.dependencies import CallerContext, get_current_caller
from staybook.services.notifications import HostNotifier
from staybook.services.reservations import ReservationService


def get_reservation_service(request: Request) -> ReservationService:
    return request.app.state.reservations


def get_notifier(request: Request) -> HostNotifier:
    return request.app.state.notifier


__all__ = [
    "CallerContext",
    "get_current_caller",
    "get_notifier",
    "get_reservation_service",
]
