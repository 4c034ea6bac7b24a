"""
Event service: validates, plans notifications for and stores user events.
"""
import logging
import uuid
from datetime import datetime
from typing import List, Optional, Tuple

from dayplanner.core.collaborators import EventStore
from dayplanner.core.notification_planner import NotificationPlanner, record_for
from dayplanner.core.route_selector import select_route
from dayplanner.core.weather_adjuster import WeatherAdjuster
from dayplanner.exceptions import EventNotFoundError, ValidationError
from dayplanner.schemas.event import Event, EventCreate, SaveResult
from dayplanner.schemas.notification import NotificationPlan
from dayplanner.schemas.weather import WeatherAdjustmentPolicy
from dayplanner.utils.time_utils import ensure_utc, format_clock

logger = logging.getLogger(__name__)


def validate_event(data: EventCreate) -> None:
    """Reject an event before anything is stored or scheduled."""
    if not data.title.strip():
        raise ValidationError("Title is required")

    if not data.is_all_day and ensure_utc(data.end_time) <= ensure_utc(data.start_time):
        raise ValidationError("End time must be after start time")

    if data.travel_time_minutes is not None and data.travel_time_minutes < 0:
        raise ValidationError("Travel time cannot be negative")

    if data.notification_lead_minutes is not None and data.notification_lead_minutes < 0:
        raise ValidationError("Notification lead time cannot be negative")

    if data.route_candidates and not 0 <= data.chosen_route_index < len(data.route_candidates):
        raise ValidationError("Chosen route does not exist")


class EventService:
    """
    Save flow for one event:
    validate -> select route -> weather adjustment -> plan notification -> store.

    Steps run one after another. Lookup failures degrade to defaults;
    a notification that cannot be scheduled never prevents the save.
    """

    def __init__(
        self,
        store: EventStore,
        planner: NotificationPlanner,
        adjuster: WeatherAdjuster,
    ):
        self.store = store
        self.planner = planner
        self.adjuster = adjuster

    async def list_events(self, user_id: str) -> List[Event]:
        return await self.store.get_all(user_id)

    async def get_event(self, user_id: str, event_id: str) -> Event:
        events = await self.store.get_all(user_id)
        return events[self._index_of(events, event_id)]

    async def create_event(
        self,
        user_id: str,
        data: EventCreate,
        policy: WeatherAdjustmentPolicy,
        now: Optional[datetime] = None,
    ) -> SaveResult:
        validate_event(data)

        event = self._build_event(str(uuid.uuid4()), data)
        plan = await self._plan_notification(event, policy, now)

        events = await self.store.get_all(user_id)
        events.append(event)
        await self.store.save_all(user_id, events)

        logger.info(f"Created event {event.id} for user {user_id}")
        return SaveResult(event=event, plan=plan, message=self._confirmation("saved", event, plan))

    async def update_event(
        self,
        user_id: str,
        event_id: str,
        data: EventCreate,
        policy: WeatherAdjustmentPolicy,
        now: Optional[datetime] = None,
    ) -> SaveResult:
        validate_event(data)

        events = await self.store.get_all(user_id)
        index = self._index_of(events, event_id)

        # The old notification must not fire for the edited event
        await self.planner.cancel(events[index].notification_record)

        event = self._build_event(event_id, data)
        plan = await self._plan_notification(event, policy, now)

        events[index] = event
        await self.store.save_all(user_id, events)

        logger.info(f"Updated event {event_id} for user {user_id}")
        return SaveResult(event=event, plan=plan, message=self._confirmation("updated", event, plan))

    async def delete_event(self, user_id: str, event_id: str) -> Event:
        """Cancel the event's notification, then remove it from the user's list."""
        events = await self.store.get_all(user_id)
        index = self._index_of(events, event_id)
        event = events[index]

        await self.planner.cancel(event.notification_record)

        del events[index]
        await self.store.save_all(user_id, events)

        logger.info(f"Deleted event {event_id} for user {user_id}")
        return event

    @staticmethod
    def _index_of(events: List[Event], event_id: str) -> int:
        for index, event in enumerate(events):
            if event.id == event_id:
                return index
        raise EventNotFoundError(event_id)

    @staticmethod
    def _build_event(event_id: str, data: EventCreate) -> Event:
        travel_time = data.travel_time_minutes
        destination = data.destination
        travel_mode = None

        if data.route_candidates:
            selection = select_route(data.route_candidates, data.chosen_route_index)
            travel_time = selection.travel_time_minutes
            destination = selection.destination
            travel_mode = selection.mode

        lead = data.notification_lead_minutes if data.notification_enabled else None
        if lead is not None and lead <= 0:
            lead = None

        return Event(
            id=event_id,
            title=data.title.strip(),
            location=(data.location or "").strip() or None,
            start_time=ensure_utc(data.start_time),
            end_time=ensure_utc(data.end_time),
            is_all_day=data.is_all_day,
            repeat=data.repeat,
            travel_time_minutes=travel_time,
            travel_mode=travel_mode,
            destination=destination,
            notification_enabled=data.notification_enabled,
            notification_lead_minutes=lead,
        )

    async def _plan_notification(
        self,
        event: Event,
        policy: WeatherAdjustmentPolicy,
        now: Optional[datetime],
    ) -> Optional[NotificationPlan]:
        """Plan the event's notification and record it on the event; None when not requested."""
        lead = event.notification_lead_minutes
        if not event.notification_enabled or not lead or lead <= 0:
            return None

        adjustment = await self.adjuster.adjust(event.destination, policy)

        plan = await self.planner.plan(
            start_time=event.start_time,
            lead_minutes=lead,
            extra_minutes=adjustment.extra_minutes,
            now=now,
            title=event.title,
            destination_label=event.location,
            weather_message=adjustment.message,
        )

        event.notification_record = record_for(plan)
        event.weather = adjustment.message or None
        return plan

    @staticmethod
    def _confirmation(action: str, event: Event, plan: Optional[NotificationPlan]) -> str:
        message = f"Event '{event.title}' {action} for {format_clock(event.start_time)}."
        if event.weather:
            message += f" Weather: {event.weather}."
        if plan is None:
            return message + " No notification requested."
        return f"{message} {plan.explanation}"
