"""
Weather-based lead time adjustment.
"""
import asyncio
import logging
from typing import Optional

from dayplanner.core.collaborators import WeatherCollaborator
from dayplanner.exceptions import WeatherLookupError
from dayplanner.schemas.routing import Coordinate
from dayplanner.schemas.weather import WeatherAdjustment, WeatherAdjustmentPolicy

logger = logging.getLogger(__name__)


class WeatherAdjuster:
    """
    Maps current weather at a destination to extra notification lead minutes.

    Uses current conditions, not a forecast for the departure time. A failed
    or slow lookup yields no adjustment so it never blocks saving an event.
    """

    def __init__(self, weather: WeatherCollaborator, timeout: float = 5.0):
        self.weather = weather
        self.timeout = timeout

    async def adjust(
        self,
        destination: Optional[Coordinate],
        policy: WeatherAdjustmentPolicy,
    ) -> WeatherAdjustment:
        if not policy.enabled or destination is None:
            return WeatherAdjustment()

        try:
            conditions = await asyncio.wait_for(
                self.weather.get_conditions(destination),
                timeout=self.timeout,
            )
        except WeatherLookupError as e:
            logger.warning(f"Weather lookup failed, no adjustment applied: {e}")
            return WeatherAdjustment()
        except asyncio.TimeoutError:
            logger.warning(f"Weather lookup timed out after {self.timeout}s, no adjustment applied")
            return WeatherAdjustment()
        except Exception as e:
            logger.warning(f"Unexpected weather lookup error, no adjustment applied: {e}")
            return WeatherAdjustment()

        extra_minutes = policy.extra_minutes_for(conditions.category)
        message = f"{conditions.emoji} {conditions.description}"
        if extra_minutes > 0:
            message += f" (notified {extra_minutes} minutes earlier)"

        logger.info(
            f"Weather at destination is {conditions.category}, adding {extra_minutes} minutes"
        )
        return WeatherAdjustment(
            extra_minutes=extra_minutes,
            message=message,
            category=conditions.category,
        )
