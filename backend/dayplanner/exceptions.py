"""
Domain errors raised by the planner and its collaborators.
"""


class DayplannerError(Exception):
    """Base class for all dayplanner errors."""


class ValidationError(DayplannerError):
    """An event failed validation; nothing is persisted or scheduled."""


class EventNotFoundError(DayplannerError):
    """No event with the given id exists for the user."""

    def __init__(self, event_id: str):
        super().__init__(f"Event '{event_id}' not found")
        self.event_id = event_id


class RouteLookupError(DayplannerError):
    """Route search failed (network, API status or geocoding)."""


class WeatherLookupError(DayplannerError):
    """Current weather could not be fetched or parsed."""


class NotificationSchedulingError(DayplannerError):
    """The notification backend refused to schedule (e.g. permission revoked)."""
