"""Notifications API router — the current user's inbox."""

from fastapi import APIRouter, Depends

from staybook.api.deps import CallerContext, get_current_caller, get_notifier
from staybook.schemas.notification import NotificationListResponse, NotificationResponse
from staybook.services.notifications import HostNotifier

router = APIRouter(prefix="/api/v1/notifications", tags=["notifications"])


@router.get(
    "",
    response_model=NotificationListResponse,
    summary="List the current user's notifications",
)
async def list_my_notifications(
    caller: CallerContext = Depends(get_current_caller),
    notifier: HostNotifier = Depends(get_notifier),
) -> NotificationListResponse:
    items = await notifier.inbox(caller.user_id)
    return NotificationListResponse(items=[NotificationResponse.model_validate(n) for n in items])
