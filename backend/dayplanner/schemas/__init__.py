"""
Pydantic schemas for API request/response validation.
"""
from dayplanner.schemas.event import (
    Event,
    EventCreate,
    EventUpdate,
    NotificationRecord,
    SaveResult,
)
from dayplanner.schemas.notification import (
    NotificationPlan,
    NotificationHandlerConfig,
    NotificationStatus,
    PlanOutcome,
    ScheduledNotificationResponse,
)
from dayplanner.schemas.routing import (
    Coordinate,
    RouteCandidate,
    RouteSearchRequest,
    RouteSelection,
)
from dayplanner.schemas.weather import (
    WeatherAdjustment,
    WeatherAdjustmentPolicy,
    WeatherConditions,
)

__all__ = [
    # Events
    "Event",
    "EventCreate",
    "EventUpdate",
    "NotificationRecord",
    "SaveResult",
    # Notifications
    "NotificationPlan",
    "NotificationHandlerConfig",
    "NotificationStatus",
    "PlanOutcome",
    "ScheduledNotificationResponse",
    # Routing
    "Coordinate",
    "RouteCandidate",
    "RouteSearchRequest",
    "RouteSelection",
    # Weather
    "WeatherAdjustment",
    "WeatherAdjustmentPolicy",
    "WeatherConditions",
]
