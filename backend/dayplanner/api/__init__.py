"""
API routers for Dayplanner.
"""
from dayplanner.api import events, routing, weather, preferences, notifications

__all__ = [
    "events",
    "routing",
    "weather",
    "preferences",
    "notifications",
]
