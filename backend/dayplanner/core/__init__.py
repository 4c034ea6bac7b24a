"""
Core planning logic for Dayplanner.
"""
from dayplanner.core.notification_planner import NotificationPlanner, record_for
from dayplanner.core.route_selector import duration_to_minutes, select_route
from dayplanner.core.weather_adjuster import WeatherAdjuster

__all__ = [
    "NotificationPlanner",
    "record_for",
    "duration_to_minutes",
    "select_route",
    "WeatherAdjuster",
]
