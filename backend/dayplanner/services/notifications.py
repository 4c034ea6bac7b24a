"""
Local notification scheduling backed by the scheduled_notifications table.
"""
import logging
from datetime import datetime
from typing import Optional, List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dayplanner.exceptions import NotificationSchedulingError
from dayplanner.models.scheduled_notification import ScheduledNotification
from dayplanner.schemas.notification import (
    DeliveredNotification,
    NotificationHandlerConfig,
    NotificationStatus,
    ScheduledNotificationResponse,
)
from dayplanner.utils.time_utils import ensure_utc, utc_now

logger = logging.getLogger(__name__)


def to_response(notification: ScheduledNotification) -> ScheduledNotificationResponse:
    return ScheduledNotificationResponse(
        id=notification.id,
        user_id=notification.user_id,
        title=notification.title,
        body=notification.body,
        fire_time=ensure_utc(notification.fire_time),
        status=NotificationStatus(notification.status),
    )


class NotificationService:
    """
    Schedules, cancels and delivers one-shot notifications.

    Presentation (banner, list, sound, badge) comes from the handler config
    set up once at application startup.
    """

    def __init__(
        self,
        db: AsyncSession,
        handler_config: NotificationHandlerConfig,
        permission_granted: bool = True,
        user_id: Optional[str] = None,
    ):
        self.db = db
        self.handler_config = handler_config
        self.permission_granted = permission_granted
        self.user_id = user_id

    async def schedule(self, fire_time: datetime, title: str, body: str) -> str:
        """
        Schedule a notification.

        Args:
            fire_time: When the notification should be delivered
            title: Notification title
            body: Notification body text

        Returns:
            Identifier of the scheduled notification

        Raises:
            NotificationSchedulingError: Permission not granted or the
                notification could not be stored
        """
        if not self.permission_granted:
            raise NotificationSchedulingError("Notification permission not granted")

        notification = ScheduledNotification(
            user_id=self.user_id,
            title=title,
            body=body,
            fire_time=ensure_utc(fire_time),
            status=NotificationStatus.PENDING.value,
        )

        try:
            self.db.add(notification)
            await self.db.commit()
            await self.db.refresh(notification)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise NotificationSchedulingError(f"Could not store notification: {e}") from e

        return notification.id

    async def cancel(self, notification_id: str) -> None:
        """Cancel a pending notification. Unknown or finished ids are ignored."""
        notification = await self.db.get(ScheduledNotification, notification_id)

        if notification is None or notification.status != NotificationStatus.PENDING.value:
            logger.debug(f"Nothing to cancel for notification {notification_id}")
            return

        notification.status = NotificationStatus.CANCELLED.value
        await self.db.commit()

    async def get_pending(self) -> List[ScheduledNotificationResponse]:
        """List pending notifications, soonest first."""
        query = select(ScheduledNotification).where(
            ScheduledNotification.status == NotificationStatus.PENDING.value
        )
        if self.user_id is not None:
            query = query.where(ScheduledNotification.user_id == self.user_id)

        result = await self.db.execute(query.order_by(ScheduledNotification.fire_time))
        return [to_response(n) for n in result.scalars().all()]

    async def dispatch_due(self, now: Optional[datetime] = None) -> List[DeliveredNotification]:
        """
        Deliver every pending notification whose fire time has been reached.

        Args:
            now: Reference time, defaults to the wall clock

        Returns:
            The delivered notifications with their presentation settings
        """
        now = ensure_utc(now) if now else utc_now()

        query = select(ScheduledNotification).where(
            ScheduledNotification.status == NotificationStatus.PENDING.value,
            ScheduledNotification.fire_time <= now,
        )
        if self.user_id is not None:
            query = query.where(ScheduledNotification.user_id == self.user_id)

        result = await self.db.execute(query.order_by(ScheduledNotification.fire_time))
        due = result.scalars().all()

        if not due:
            return []

        for notification in due:
            notification.status = NotificationStatus.FIRED.value
            notification.fired_at = now
        await self.db.commit()

        logger.info(f"Delivered {len(due)} notifications")
        return [
            DeliveredNotification(notification=to_response(n), presentation=self.handler_config)
            for n in due
        ]
