"""
Per-user event list storage.

Each user's events live in one JSON row that is read and replaced as a
whole. Two concurrent saves for the same user race, and the last write wins.
"""
import logging
from typing import List

from pydantic import TypeAdapter
from sqlalchemy.ext.asyncio import AsyncSession

from dayplanner.models.event_list import EventList
from dayplanner.schemas.event import Event

logger = logging.getLogger(__name__)

_events_adapter = TypeAdapter(List[Event])


class EventListStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_all(self, user_id: str) -> List[Event]:
        """Load a user's events; a user with no saved list has none."""
        row = await self.db.get(EventList, user_id)
        if row is None:
            return []
        return _events_adapter.validate_python(row.events)

    async def save_all(self, user_id: str, events: List[Event]) -> None:
        """Replace a user's whole event list."""
        payload = _events_adapter.dump_python(events, mode="json")

        row = await self.db.get(EventList, user_id)
        if row is None:
            self.db.add(EventList(user_id=user_id, events=payload))
        else:
            row.events = payload

        await self.db.commit()
        logger.info(f"Saved {len(events)} events for user {user_id}")
