"""
Preference endpoints.
"""
from fastapi import APIRouter, Depends

from dayplanner.api.deps import get_preferences_service
from dayplanner.schemas.weather import WeatherAdjustmentPolicy
from dayplanner.services.preferences import PreferencesService

router = APIRouter()


@router.get("/weather", response_model=WeatherAdjustmentPolicy)
async def get_weather_policy(
    preferences: PreferencesService = Depends(get_preferences_service),
):
    """Get the weather notification policy."""
    return await preferences.get_weather_policy()


@router.put("/weather", response_model=WeatherAdjustmentPolicy)
async def update_weather_policy(
    policy: WeatherAdjustmentPolicy,
    preferences: PreferencesService = Depends(get_preferences_service),
):
    """Replace the weather notification policy."""
    return await preferences.save_weather_policy(policy)
