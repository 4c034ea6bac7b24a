"""
Notification planning: turn an event start and lead time into one scheduled
"get ready" notification, or an explanation of why none was scheduled.
"""
import logging
from datetime import datetime, timedelta
from typing import Optional

from dayplanner.core.collaborators import NotificationCollaborator
from dayplanner.exceptions import NotificationSchedulingError
from dayplanner.schemas.event import NotificationRecord
from dayplanner.schemas.notification import NotificationPlan, PlanOutcome
from dayplanner.utils.time_utils import ensure_utc, format_clock, utc_now

logger = logging.getLogger(__name__)

NOTIFICATION_TITLE = "⏰ Time to get ready"


def compute_fire_time(start_time: datetime, effective_lead_minutes: int) -> datetime:
    return ensure_utc(start_time) - timedelta(minutes=effective_lead_minutes)


def build_notification_body(
    destination_label: str,
    effective_lead_minutes: int,
    weather_message: str = "",
) -> str:
    body = f"{destination_label} starts in {effective_lead_minutes} minutes"
    if weather_message:
        body += f"\n{weather_message}"
    return body


class NotificationPlanner:
    """
    Decides whether a notification can be scheduled and drives the
    notification backend.

    Fire time is start_time - (lead + extra) minutes. Anything at or within
    the safety margin of "now" is rejected without contacting the backend.
    """

    def __init__(self, notifications: NotificationCollaborator, safety_margin_seconds: int = 60):
        self.notifications = notifications
        self.safety_margin_seconds = safety_margin_seconds

    async def plan(
        self,
        start_time: datetime,
        lead_minutes: int,
        extra_minutes: int = 0,
        now: Optional[datetime] = None,
        title: str = "",
        destination_label: Optional[str] = None,
        weather_message: str = "",
    ) -> NotificationPlan:
        """
        Plan (and, when possible, schedule) the notification for one event.

        Args:
            start_time: Event start
            lead_minutes: User-chosen minutes before start (> 0)
            extra_minutes: Weather adjustment added to the lead time
            now: Reference time, defaults to the wall clock
            title: Event title, used in the body when there is no location
            destination_label: Event location text
            weather_message: Weather summary appended to the body

        Returns:
            The plan, with outcome scheduled, rejected_too_soon or rejected_error
        """
        if lead_minutes <= 0:
            raise ValueError("lead_minutes must be positive when planning a notification")

        now = ensure_utc(now) if now else utc_now()
        start_time = ensure_utc(start_time)
        effective_lead = lead_minutes + extra_minutes
        fire_time = compute_fire_time(start_time, effective_lead)
        seconds_until_fire = (fire_time - now).total_seconds()

        if seconds_until_fire <= self.safety_margin_seconds:
            if seconds_until_fire <= 0:
                reason = "the notification time has already passed"
            else:
                reason = (
                    f"the notification time is less than {self.safety_margin_seconds} seconds away"
                )
            explanation = (
                f"No notification was scheduled because {reason} "
                f"(now: {format_clock(now)}, event starts: {format_clock(start_time)}, "
                f"notification time: {format_clock(fire_time)}). "
                f"Choose a shorter lead time to be notified."
            )
            logger.info(f"Notification rejected as too soon: fire_time={fire_time.isoformat()}")
            return NotificationPlan(
                scheduled=False,
                outcome=PlanOutcome.REJECTED_TOO_SOON,
                fire_time=fire_time,
                effective_lead_minutes=effective_lead,
                explanation=explanation,
            )

        body = build_notification_body(destination_label or title, effective_lead, weather_message)

        try:
            notification_id = await self.notifications.schedule(fire_time, NOTIFICATION_TITLE, body)
        except NotificationSchedulingError as e:
            logger.error(f"Failed to schedule notification: {e}")
            return NotificationPlan(
                scheduled=False,
                outcome=PlanOutcome.REJECTED_ERROR,
                fire_time=fire_time,
                effective_lead_minutes=effective_lead,
                explanation=(
                    "No notification was scheduled because scheduling failed "
                    f"({e}). Check that notification permission is granted."
                ),
            )

        logger.info(f"Scheduled notification {notification_id} at {fire_time.isoformat()}")
        return NotificationPlan(
            scheduled=True,
            outcome=PlanOutcome.SCHEDULED,
            fire_time=fire_time,
            effective_lead_minutes=effective_lead,
            notification_id=notification_id,
            explanation=(
                f"You will be notified at {format_clock(fire_time)} "
                f"({effective_lead} minutes before the start)."
            ),
        )

    async def cancel(self, record: Optional[NotificationRecord]) -> None:
        """Cancel every identifier stored in a notification record."""
        if record is None:
            return

        for notification_id in record.identifiers():
            await self.notifications.cancel(notification_id)
            logger.info(f"Cancelled notification {notification_id}")


def record_for(plan: NotificationPlan) -> Optional[NotificationRecord]:
    """The record to store on an event for a plan, None unless it was scheduled."""
    if not plan.scheduled or plan.notification_id is None:
        return None
    return NotificationRecord(departure=plan.notification_id, preparation=plan.notification_id)
