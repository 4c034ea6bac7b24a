"""
Event schemas: the stored event and the payloads used to create and edit it.
"""
from datetime import datetime
from typing import Optional, List, Literal

from pydantic import BaseModel

from dayplanner.schemas.notification import NotificationPlan
from dayplanner.schemas.routing import Coordinate, RouteCandidate, TravelMode


RepeatRule = Literal["none", "daily", "weekly", "monthly"]


class NotificationRecord(BaseModel):
    # Both entries hold the same identifier; one notification is scheduled per event.
    departure: str
    preparation: str

    def identifiers(self) -> List[str]:
        """Distinct identifiers, in record order."""
        return list(dict.fromkeys([self.departure, self.preparation]))


class Event(BaseModel):
    id: str
    title: str
    location: Optional[str] = None
    start_time: datetime
    end_time: datetime
    is_all_day: bool = False
    repeat: RepeatRule = "none"
    travel_time_minutes: Optional[int] = None
    travel_mode: Optional[TravelMode] = None
    destination: Optional[Coordinate] = None
    notification_enabled: bool = False
    notification_lead_minutes: Optional[int] = None
    notification_record: Optional[NotificationRecord] = None
    weather: Optional[str] = None


class EventCreate(BaseModel):
    title: str
    location: Optional[str] = None
    start_time: datetime
    end_time: datetime
    is_all_day: bool = False
    repeat: RepeatRule = "none"
    travel_time_minutes: Optional[int] = None
    destination: Optional[Coordinate] = None
    route_candidates: List[RouteCandidate] = []
    chosen_route_index: int = 0
    notification_enabled: bool = True
    notification_lead_minutes: Optional[int] = 15


class EventUpdate(EventCreate):
    pass


class SaveResult(BaseModel):
    event: Event
    plan: Optional[NotificationPlan] = None
    message: str
