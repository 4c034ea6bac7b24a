"""
Current weather endpoint.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status

from dayplanner.api.deps import get_current_user_id, get_weather_service
from dayplanner.exceptions import WeatherLookupError
from dayplanner.schemas.routing import Coordinate
from dayplanner.schemas.weather import CurrentWeatherResponse
from dayplanner.services.weather import WeatherService

router = APIRouter()


@router.get("", response_model=CurrentWeatherResponse)
async def current_weather(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    user_id: str = Depends(get_current_user_id),
    weather: WeatherService = Depends(get_weather_service),
):
    """Current conditions at a coordinate with a travel mode suggestion."""
    try:
        conditions = await weather.get_conditions(
            Coordinate(latitude=latitude, longitude=longitude)
        )
    except WeatherLookupError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    return CurrentWeatherResponse(
        conditions=conditions,
        recommendation=WeatherService.recommend_travel_mode(conditions),
    )
