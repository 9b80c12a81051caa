"""Best-effort host notifications for booking lifecycle events."""

import asyncio
import logging

from staybook.repositories.base import NotificationRepository
from staybook.reservations.errors import ValidationError
from staybook.reservations.types import NOTIFICATION_TYPES, Notification

logger = logging.getLogger(__name__)


class HostNotifier:
    """Fire-and-forget delivery of notifications to a host's inbox.

    ``notify`` schedules delivery and returns immediately; a delivery failure
    is logged and never reaches the caller whose booking triggered it.
    """

    def __init__(self, notifications: NotificationRepository) -> None:
        self._notifications = notifications
        self._pending: set[asyncio.Task] = set()

    def notify(
        self,
        host_id: str,
        kind: str,
        title: str,
        message: str,
        link: str | None = None,
    ) -> None:
        task = asyncio.create_task(self._deliver(host_id, kind, title, message, link))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _deliver(
        self,
        host_id: str,
        kind: str,
        title: str,
        message: str,
        link: str | None,
    ) -> Notification | None:
        try:
            title = (title or "").strip()
            message = (message or "").strip()
            if not title:
                raise ValidationError("title", "title is required")
            if not message:
                raise ValidationError("message", "message is required")
            if kind not in NOTIFICATION_TYPES:
                logger.warning("Delivering notification of unknown type %r", kind)
            notification = await self._notifications.create(
                user_id=host_id,
                type=kind,
                title=title,
                message=message,
                link=link,
            )
        except Exception:
            logger.exception("Failed to deliver %s notification to host %s", kind, host_id)
            return None
        logger.info("Delivered %s notification %s to host %s", kind, notification.id, host_id)
        return notification

    async def drain(self) -> None:
        """Wait for every scheduled delivery to finish (shutdown and tests)."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    async def inbox(self, user_id: str) -> list[Notification]:
        return await self._notifications.list_by_user(user_id)
