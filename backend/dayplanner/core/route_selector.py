"""
Route selection: turn route candidates into a travel time and destination.
"""
from typing import Sequence

from dayplanner.schemas.routing import RouteCandidate, RouteSelection


def duration_to_minutes(duration_seconds: float) -> int:
    """Whole minutes in a duration, rounded down."""
    return int(duration_seconds // 60)


def select_route(candidates: Sequence[RouteCandidate], chosen_index: int = 0) -> RouteSelection:
    """
    Pick one candidate and derive the event's travel time from it.

    Index 0 is the default choice: whichever mode the route search returned
    first. No fastest/cheapest comparison is made.

    Args:
        candidates: Non-empty list of route candidates
        chosen_index: Position of the chosen candidate

    Returns:
        Travel time in minutes, destination coordinate and travel mode
    """
    if not candidates:
        raise ValueError("No route candidates to choose from")
    if not 0 <= chosen_index < len(candidates):
        raise ValueError(
            f"Route index {chosen_index} out of range for {len(candidates)} candidates"
        )

    route = candidates[chosen_index]
    return RouteSelection(
        travel_time_minutes=duration_to_minutes(route.duration_seconds),
        destination=route.end_location,
        mode=route.mode,
    )
