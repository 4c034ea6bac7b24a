"""
Scheduled notification endpoints.
"""
from typing import List

from fastapi import APIRouter, Depends

from dayplanner.api.deps import get_notification_service
from dayplanner.schemas.notification import DispatchResponse, ScheduledNotificationResponse
from dayplanner.services.notifications import NotificationService

router = APIRouter()


@router.get("", response_model=List[ScheduledNotificationResponse])
async def list_pending(
    notifications: NotificationService = Depends(get_notification_service),
):
    """List the user's pending notifications."""
    return await notifications.get_pending()


@router.post("/dispatch", response_model=DispatchResponse)
async def dispatch_due(
    notifications: NotificationService = Depends(get_notification_service),
):
    """Deliver notifications whose fire time has been reached."""
    return DispatchResponse(delivered=await notifications.dispatch_due())
