"""
Services and external integrations for Dayplanner.
"""
from dayplanner.services.event_store import EventListStore
from dayplanner.services.events import EventService
from dayplanner.services.maps import MapsService, DrivingMultiplierTransitEstimate
from dayplanner.services.notifications import NotificationService
from dayplanner.services.preferences import PreferencesService
from dayplanner.services.weather import WeatherService

__all__ = [
    "EventListStore",
    "EventService",
    "MapsService",
    "DrivingMultiplierTransitEstimate",
    "NotificationService",
    "PreferencesService",
    "WeatherService",
]
