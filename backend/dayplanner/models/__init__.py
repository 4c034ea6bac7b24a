"""
SQLAlchemy models for the Dayplanner database.
"""
from dayplanner.models.event_list import EventList
from dayplanner.models.preferences import Preference
from dayplanner.models.scheduled_notification import ScheduledNotification

__all__ = [
    "EventList",
    "Preference",
    "ScheduledNotification",
]
