"""
Weather conditions and weather-based notification adjustment schemas.
"""
from typing import Optional

from pydantic import BaseModel, Field

from dayplanner.schemas.routing import TravelMode


class WeatherConditions(BaseModel):
    category: str  # OpenWeatherMap "main": 'Rain', 'Snow', 'Clouds', 'Clear', ...
    description: str
    emoji: str
    temperature: Optional[float] = None  # Celsius
    humidity: Optional[float] = None
    wind_speed: Optional[float] = None  # m/s


class WeatherAdjustmentPolicy(BaseModel):
    enabled: bool = True
    rain_minutes: int = Field(default=15, ge=0)
    snow_minutes: int = Field(default=15, ge=0)
    thunderstorm_minutes: int = Field(default=15, ge=0)
    cloudy_minutes: int = Field(default=15, ge=0)

    def extra_minutes_for(self, category: str) -> int:
        """Extra lead minutes for a weather category; unknown categories add nothing."""
        return {
            "Rain": self.rain_minutes,
            "Snow": self.snow_minutes,
            "Thunderstorm": self.thunderstorm_minutes,
            "Clouds": self.cloudy_minutes,
        }.get(category, 0)


class WeatherAdjustment(BaseModel):
    extra_minutes: int = 0
    message: str = ""
    category: Optional[str] = None


class TravelModeRecommendation(BaseModel):
    mode: TravelMode
    reason: str


class CurrentWeatherResponse(BaseModel):
    conditions: WeatherConditions
    recommendation: TravelModeRecommendation
