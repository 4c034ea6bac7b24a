"""
Route search and selection schemas.
"""
from datetime import datetime
from typing import Optional, List, Literal, Union

from pydantic import BaseModel, Field


TravelMode = Literal["walking", "transit", "driving"]


class Coordinate(BaseModel):
    latitude: float
    longitude: float


class RouteCandidate(BaseModel):
    mode: TravelMode
    duration_seconds: float = Field(ge=0)
    distance_meters: float = Field(ge=0)
    duration_text: Optional[str] = None
    distance_text: Optional[str] = None
    end_location: Coordinate
    departure_time: Optional[datetime] = None  # arrival_time - duration
    estimated: bool = False  # True when derived by a transit estimation strategy

    @property
    def duration_minutes(self) -> int:
        return int(self.duration_seconds // 60)


class RouteSearchRequest(BaseModel):
    origin: Coordinate
    destination: Union[Coordinate, str]  # coordinate or address to geocode
    arrival_time: datetime


class RouteSearchResponse(BaseModel):
    candidates: List[RouteCandidate]
    message: str


class RouteSelectRequest(BaseModel):
    candidates: List[RouteCandidate]
    chosen_index: int = 0


class RouteSelection(BaseModel):
    travel_time_minutes: int
    destination: Coordinate
    mode: TravelMode
