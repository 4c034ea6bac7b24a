"""
Maps service using Google Maps API for route search and geocoding.
"""
import asyncio
import logging
import httpx
from typing import Optional, Dict, Any, List, Protocol, Union
from datetime import datetime, timedelta

from dayplanner.exceptions import RouteLookupError
from dayplanner.schemas.routing import Coordinate, RouteCandidate
from dayplanner.utils.time_utils import ensure_utc

logger = logging.getLogger(__name__)


class TransitEstimationStrategy(Protocol):
    def estimate(self, driving: RouteCandidate) -> RouteCandidate:
        """Derive a transit candidate from a driving candidate."""
        ...


class DrivingMultiplierTransitEstimate:
    """
    Estimate transit time as the driving time scaled by a distance band.
    Short trips lose proportionally more time to walking and waiting.
    """

    # (upper bound in meters, multiplier)
    BANDS = (
        (5_000, 1.5),
        (20_000, 1.3),
    )
    LONG_DISTANCE_MULTIPLIER = 1.2

    def multiplier_for(self, distance_meters: float) -> float:
        for upper_bound, multiplier in self.BANDS:
            if distance_meters < upper_bound:
                return multiplier
        return self.LONG_DISTANCE_MULTIPLIER

    def estimate(self, driving: RouteCandidate) -> RouteCandidate:
        duration = round(driving.duration_seconds * self.multiplier_for(driving.distance_meters))
        return driving.model_copy(
            update={
                "mode": "transit",
                "duration_seconds": duration,
                "duration_text": f"About {duration // 60} min",
                "departure_time": None,
                "estimated": True,
            }
        )


class MapsService:
    """
    Google Maps API integration for route candidates.
    Walking and driving come from the Directions API; transit is estimated
    from the driving route by a swappable strategy.
    """

    BASE_URL = "https://maps.googleapis.com/maps/api"

    # Directions statuses meaning "no route", as opposed to a failed lookup
    NO_ROUTE_STATUSES = ("ZERO_RESULTS", "NOT_FOUND")

    def __init__(
        self,
        api_key: Optional[str],
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        transit_strategy: Optional[TransitEstimationStrategy] = None,
    ):
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport
        self.transit_strategy = transit_strategy or DrivingMultiplierTransitEstimate()

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport, timeout=self.timeout)

    async def search(
        self,
        origin: Coordinate,
        destination: Union[Coordinate, str],
        arrival_time: datetime,
    ) -> List[RouteCandidate]:
        """
        Search walking, driving and transit routes in parallel.

        Args:
            origin: Starting coordinate
            destination: Destination coordinate or address
            arrival_time: Desired arrival, used to back-compute departure times

        Returns:
            Candidates in the order walking, driving, transit; modes that
            found no route are left out, so the list may be empty

        Raises:
            RouteLookupError: API not configured, geocoding failed or every
                mode failed
        """
        if not self.api_key:
            raise RouteLookupError("Google Maps API not configured")

        if isinstance(destination, str):
            destination = await self.geocode(destination)

        modes = ("walking", "driving")
        results = await asyncio.gather(
            *(self._directions(origin, destination, mode) for mode in modes),
            return_exceptions=True,
        )

        candidates: Dict[str, RouteCandidate] = {}
        failures = 0
        for mode, result in zip(modes, results):
            if isinstance(result, RouteLookupError):
                logger.warning(f"{mode} route search failed: {result}")
                failures += 1
            elif isinstance(result, BaseException):
                raise result
            elif result is not None:
                candidates[mode] = result

        if failures == len(modes):
            raise RouteLookupError("All route lookups failed")

        if "driving" in candidates:
            candidates["transit"] = self.transit_strategy.estimate(candidates["driving"])

        arrival_time = ensure_utc(arrival_time)
        routes = []
        for route in candidates.values():
            route.departure_time = arrival_time - timedelta(seconds=route.duration_seconds)
            routes.append(route)

        logger.info(f"Found {len(routes)} route candidates")
        return routes

    async def _directions(
        self,
        origin: Coordinate,
        destination: Coordinate,
        mode: str,
    ) -> Optional[RouteCandidate]:
        """Fetch one mode from the Directions API; None when no route exists."""
        try:
            async with self._client() as client:
                response = await client.get(
                    f"{self.BASE_URL}/directions/json",
                    params={
                        "origin": f"{origin.latitude},{origin.longitude}",
                        "destination": f"{destination.latitude},{destination.longitude}",
                        "mode": mode,
                        "key": self.api_key,
                    },
                )
        except httpx.HTTPError as e:
            raise RouteLookupError(f"Directions request failed: {e}") from e

        if response.status_code != 200:
            raise RouteLookupError(f"Failed to fetch directions: HTTP {response.status_code}")

        try:
            data = response.json()
            status = data.get("status")
        except (ValueError, AttributeError) as e:
            raise RouteLookupError(f"Malformed directions response: {e}") from e

        if status in self.NO_ROUTE_STATUSES:
            return None
        if status != "OK":
            raise RouteLookupError(f"Directions API error: {status}")

        try:
            routes = data.get("routes", [])
            if not routes or not routes[0].get("legs"):
                return None
            return self._leg_to_candidate(routes[0]["legs"][0], mode, destination)
        except (ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
            raise RouteLookupError(f"Malformed directions response: {e}") from e

    @staticmethod
    def _leg_to_candidate(leg: Dict[str, Any], mode: str, destination: Coordinate) -> RouteCandidate:
        end = leg.get("end_location")
        end_location = (
            Coordinate(latitude=end["lat"], longitude=end["lng"]) if end else destination
        )

        return RouteCandidate(
            mode=mode,
            duration_seconds=leg.get("duration", {}).get("value", 0),
            duration_text=leg.get("duration", {}).get("text"),
            distance_meters=leg.get("distance", {}).get("value", 0),
            distance_text=leg.get("distance", {}).get("text"),
            end_location=end_location,
        )

    async def geocode(self, address: str) -> Coordinate:
        """Geocode an address to coordinates."""
        if not self.api_key:
            raise RouteLookupError("Google Maps API not configured")

        try:
            async with self._client() as client:
                response = await client.get(
                    f"{self.BASE_URL}/geocode/json",
                    params={
                        "address": address,
                        "key": self.api_key,
                    },
                )
        except httpx.HTTPError as e:
            raise RouteLookupError(f"Geocoding request failed: {e}") from e

        if response.status_code != 200:
            raise RouteLookupError(f"Failed to geocode address: HTTP {response.status_code}")

        try:
            data = response.json()
            status = data.get("status")
        except (ValueError, AttributeError) as e:
            raise RouteLookupError(f"Malformed geocoding response: {e}") from e

        if status != "OK":
            raise RouteLookupError(f"Could not geocode '{address}': {status}")

        results = data.get("results", [])
        if not results:
            raise RouteLookupError(f"Could not geocode '{address}'")

        try:
            location = results[0]["geometry"]["location"]
            return Coordinate(latitude=location["lat"], longitude=location["lng"])
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise RouteLookupError(f"Malformed geocoding response for '{address}': {e}") from e
