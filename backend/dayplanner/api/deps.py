"""
Shared API dependencies: current user and service wiring.
"""
from typing import Optional

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from dayplanner.config import settings
from dayplanner.core.notification_planner import NotificationPlanner
from dayplanner.core.weather_adjuster import WeatherAdjuster
from dayplanner.database import get_db
from dayplanner.schemas.notification import NotificationHandlerConfig
from dayplanner.services.event_store import EventListStore
from dayplanner.services.events import EventService
from dayplanner.services.maps import MapsService
from dayplanner.services.notifications import NotificationService
from dayplanner.services.preferences import PreferencesService
from dayplanner.services.weather import WeatherService


async def get_current_user_id(x_user_id: Optional[str] = Header(None)) -> str:
    """Identify the user from the X-User-Id header."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-User-Id header is required",
        )
    return x_user_id.strip()


def get_notification_handler(request: Request) -> NotificationHandlerConfig:
    """Handler config created once in the application lifespan."""
    handler = getattr(request.app.state, "notification_handler", None)
    if handler is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Notifications not initialized",
        )
    return handler


def get_weather_service() -> WeatherService:
    return WeatherService(settings.openweather_api_key, timeout=settings.lookup_timeout_seconds)


def get_maps_service() -> MapsService:
    return MapsService(settings.google_maps_api_key, timeout=settings.lookup_timeout_seconds)


def get_notification_service(
    db: AsyncSession = Depends(get_db),
    handler: NotificationHandlerConfig = Depends(get_notification_handler),
    user_id: str = Depends(get_current_user_id),
) -> NotificationService:
    return NotificationService(
        db,
        handler,
        permission_granted=settings.notification_permission_granted,
        user_id=user_id,
    )


def get_preferences_service(
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> PreferencesService:
    return PreferencesService(db, user_id)


def get_event_service(
    db: AsyncSession = Depends(get_db),
    notifications: NotificationService = Depends(get_notification_service),
    weather: WeatherService = Depends(get_weather_service),
) -> EventService:
    return EventService(
        store=EventListStore(db),
        planner=NotificationPlanner(
            notifications,
            safety_margin_seconds=settings.notification_safety_margin_seconds,
        ),
        adjuster=WeatherAdjuster(weather, timeout=settings.lookup_timeout_seconds),
    )
