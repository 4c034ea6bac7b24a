"""
Weather service using the OpenWeatherMap current weather API.
"""
import logging
import httpx
from typing import Optional, Dict, Any

from dayplanner.exceptions import WeatherLookupError
from dayplanner.schemas.routing import Coordinate
from dayplanner.schemas.weather import TravelModeRecommendation, WeatherConditions

logger = logging.getLogger(__name__)


class WeatherService:
    """
    Current conditions from OpenWeatherMap.
    Returns the condition category ('Rain', 'Clouds', ...) used by the
    weather adjustment policy.
    """

    BASE_URL = "https://api.openweathermap.org/data/2.5"

    def __init__(
        self,
        api_key: Optional[str],
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    async def get_conditions(self, coordinate: Coordinate) -> WeatherConditions:
        """
        Get current weather at a coordinate.

        Args:
            coordinate: Latitude/longitude to look up

        Returns:
            Current conditions with category, description and emoji

        Raises:
            WeatherLookupError: API not configured, request failed or the
                response could not be parsed
        """
        if not self.api_key:
            raise WeatherLookupError("OpenWeatherMap API key not configured")

        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.get(
                    f"{self.BASE_URL}/weather",
                    params={
                        "lat": coordinate.latitude,
                        "lon": coordinate.longitude,
                        "appid": self.api_key,
                        "units": "metric",
                    },
                )
        except httpx.HTTPError as e:
            raise WeatherLookupError(f"Weather request failed: {e}") from e

        if response.status_code != 200:
            raise WeatherLookupError(f"Failed to fetch weather data: HTTP {response.status_code}")

        try:
            conditions = self._parse_conditions(response.json())
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise WeatherLookupError(f"Malformed weather response: {e}") from e

        logger.debug(f"Weather at {coordinate.latitude},{coordinate.longitude}: {conditions.category}")
        return conditions

    def _parse_conditions(self, data: Dict[str, Any]) -> WeatherConditions:
        weather = data["weather"][0]
        main = data.get("main", {})
        wind = data.get("wind", {})

        return WeatherConditions(
            category=weather["main"],
            description=weather["description"],
            emoji=self._category_to_emoji(weather["main"]),
            temperature=main.get("temp"),
            humidity=main.get("humidity"),
            wind_speed=wind.get("speed"),
        )

    @staticmethod
    def _category_to_emoji(category: str) -> str:
        """Convert an OpenWeatherMap condition category to an emoji."""
        emojis = {
            "Clear": "☀️",
            "Clouds": "☁️",
            "Rain": "🌧️",
            "Snow": "❄️",
            "Thunderstorm": "⛈️",
            "Drizzle": "🌦️",
            "Mist": "🌫️",
            "Fog": "🌫️",
            "Haze": "🌫️",
        }
        return emojis.get(category, "🌈")

    @staticmethod
    def recommend_travel_mode(conditions: WeatherConditions) -> TravelModeRecommendation:
        """Suggest a travel mode for the current weather."""
        if conditions.category in ("Rain", "Snow", "Thunderstorm"):
            return TravelModeRecommendation(
                mode="transit",
                reason=f"{conditions.emoji} {conditions.description}, public transit is recommended",
            )

        temperature = conditions.temperature
        if conditions.category == "Clear" and temperature is not None and 15 <= temperature <= 25:
            return TravelModeRecommendation(
                mode="walking",
                reason=f"{conditions.emoji} Nice weather, walking is a good option",
            )

        return TravelModeRecommendation(
            mode="transit",
            reason=f"{conditions.emoji} {conditions.description}",
        )
