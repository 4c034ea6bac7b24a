"""
Route search and selection endpoints.
"""
import asyncio

from fastapi import APIRouter, Depends, HTTPException, status

from dayplanner.api.deps import get_current_user_id, get_maps_service
from dayplanner.config import settings
from dayplanner.core.route_selector import select_route
from dayplanner.exceptions import RouteLookupError
from dayplanner.schemas.routing import (
    RouteSearchRequest,
    RouteSearchResponse,
    RouteSelectRequest,
    RouteSelection,
)
from dayplanner.services.maps import MapsService

router = APIRouter()


@router.post("/search", response_model=RouteSearchResponse)
async def search_routes(
    request: RouteSearchRequest,
    user_id: str = Depends(get_current_user_id),
    maps: MapsService = Depends(get_maps_service),
):
    """Search walking, driving and transit routes to a destination."""
    try:
        # Geocoding plus parallel mode lookups, bounded as a whole
        candidates = await asyncio.wait_for(
            maps.search(request.origin, request.destination, request.arrival_time),
            timeout=settings.lookup_timeout_seconds * 2,
        )
    except (RouteLookupError, asyncio.TimeoutError) as e:
        reason = str(e) or "timed out"
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Route calculation failed ({reason}). Enter the travel time manually.",
        )

    if not candidates:
        return RouteSearchResponse(
            candidates=[],
            message="No route found. Enter the travel time manually.",
        )

    return RouteSearchResponse(
        candidates=candidates,
        message=f"Found {len(candidates)} routes. Choose the one you will take.",
    )


@router.post("/select", response_model=RouteSelection)
async def choose_route(
    request: RouteSelectRequest,
    user_id: str = Depends(get_current_user_id),
):
    """Turn a chosen route into a travel time and destination."""
    try:
        return select_route(request.candidates, request.chosen_index)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
