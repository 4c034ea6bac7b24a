"""
Boundary contracts for the external systems the planner depends on.
"""
from datetime import datetime
from typing import List, Protocol, Union

from dayplanner.schemas.event import Event
from dayplanner.schemas.routing import Coordinate, RouteCandidate
from dayplanner.schemas.weather import WeatherConditions


class RouteCollaborator(Protocol):
    async def search(
        self,
        origin: Coordinate,
        destination: Union[Coordinate, str],
        arrival_time: datetime,
    ) -> List[RouteCandidate]:
        """Raises RouteLookupError on failure; [] when no route exists."""
        ...


class WeatherCollaborator(Protocol):
    async def get_conditions(self, coordinate: Coordinate) -> WeatherConditions:
        """Raises WeatherLookupError on failure."""
        ...


class NotificationCollaborator(Protocol):
    async def schedule(self, fire_time: datetime, title: str, body: str) -> str:
        """Raises NotificationSchedulingError when scheduling is refused."""
        ...

    async def cancel(self, notification_id: str) -> None:
        """Unknown, fired or already cancelled identifiers are ignored."""
        ...


class EventStore(Protocol):
    async def get_all(self, user_id: str) -> List[Event]:
        ...

    async def save_all(self, user_id: str, events: List[Event]) -> None:
        ...
