"""
Dayplanner - event scheduling with weather-aware departure notifications
FastAPI Application Entry Point
"""
import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from dayplanner.config import Settings, settings
from dayplanner.database import async_engine, Base, ensure_database_directory
from dayplanner import models  # noqa: F401 (registers tables on Base.metadata)
from dayplanner.api import events, routing, weather, preferences, notifications
from dayplanner.schemas.notification import NotificationHandlerConfig

# Configure logging
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    stream=sys.stdout,
)

logger = logging.getLogger(__name__)


def build_notification_handler(config: Settings) -> NotificationHandlerConfig:
    """How delivered notifications are shown; created once per process."""
    return NotificationHandlerConfig(
        show_banner=config.notification_show_banner,
        show_list=config.notification_show_list,
        play_sound=config.notification_play_sound,
        set_badge=config.notification_set_badge,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    ensure_database_directory(settings.database_url)
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    app.state.notification_handler = build_notification_handler(settings)
    logger.info("Dayplanner initialized successfully")
    yield
    # Shutdown
    await async_engine.dispose()
    logger.info("Dayplanner shut down")


app = FastAPI(
    title="Dayplanner API",
    description="Event scheduling with route, weather and notification planning",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:8081",  # Expo dev server
        "http://localhost:19006",
        "http://127.0.0.1:8081",
        "http://127.0.0.1:19006",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(events.router, prefix="/api/events", tags=["Events"])
app.include_router(routing.router, prefix="/api/routes", tags=["Routes"])
app.include_router(weather.router, prefix="/api/weather", tags=["Weather"])
app.include_router(preferences.router, prefix="/api/preferences", tags=["Preferences"])
app.include_router(notifications.router, prefix="/api/notifications", tags=["Notifications"])


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "healthy", "service": "Dayplanner API", "version": "1.0.0"}


@app.get("/health")
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "database": "connected",
        "weather_configured": bool(settings.openweather_api_key),
        "maps_configured": bool(settings.google_maps_api_key),
        "notifications_permitted": settings.notification_permission_granted,
    }
