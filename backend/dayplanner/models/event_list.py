"""
EventList model: one row per user holding that user's whole event list.
The list is read and replaced as a unit, never updated per event.
"""
from datetime import datetime
from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from dayplanner.database import Base


class EventList(Base):
    __tablename__ = "event_lists"

    user_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    events: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )
