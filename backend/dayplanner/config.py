"""
Application configuration loaded from environment variables.
"""
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite+aiosqlite:///./data/dayplanner.db"

    # OpenWeatherMap
    openweather_api_key: Optional[str] = None

    # Google Maps (Directions + Geocoding)
    google_maps_api_key: Optional[str] = None

    # Upper bound for a single route or weather lookup
    lookup_timeout_seconds: float = 5.0

    # Notifications
    notification_safety_margin_seconds: int = 60
    notification_permission_granted: bool = True
    notification_show_banner: bool = True
    notification_show_list: bool = True
    notification_play_sound: bool = True
    notification_set_badge: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
