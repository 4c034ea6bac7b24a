"""
Notification planning schemas.
"""
from datetime import datetime
from enum import Enum
from typing import Optional, List

from pydantic import BaseModel


class PlanOutcome(str, Enum):
    SCHEDULED = "scheduled"
    REJECTED_TOO_SOON = "rejected_too_soon"
    REJECTED_ERROR = "rejected_error"


class NotificationStatus(str, Enum):
    PENDING = "pending"
    CANCELLED = "cancelled"
    FIRED = "fired"


class NotificationPlan(BaseModel):
    scheduled: bool
    outcome: PlanOutcome
    fire_time: datetime
    effective_lead_minutes: int
    notification_id: Optional[str] = None
    explanation: str


class NotificationHandlerConfig(BaseModel):
    """How delivered notifications are presented. Built once at startup."""
    show_banner: bool = True
    show_list: bool = True
    play_sound: bool = True
    set_badge: bool = False


class ScheduledNotificationResponse(BaseModel):
    id: str
    user_id: Optional[str] = None
    title: str
    body: str
    fire_time: datetime
    status: NotificationStatus


class DeliveredNotification(BaseModel):
    notification: ScheduledNotificationResponse
    presentation: NotificationHandlerConfig


class DispatchResponse(BaseModel):
    delivered: List[DeliveredNotification]
