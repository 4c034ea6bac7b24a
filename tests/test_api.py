"""End-to-end tests of the HTTP API on an in-memory database."""

from datetime import timedelta

import httpx
import pytest

from dayplanner.api.deps import get_maps_service, get_weather_service
from dayplanner.config import Settings
from dayplanner.database import get_db
from dayplanner.main import app, build_notification_handler
from dayplanner.services.maps import MapsService
from dayplanner.utils.time_utils import utc_now

from fakes import FakeWeather

HEADERS = {"X-User-Id": "user-1"}


def no_route_handler(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"status": "ZERO_RESULTS", "routes": []})


@pytest.fixture
async def client(db_session):
    async def override_get_db():
        yield db_session

    weather = FakeWeather(category="Rain", description="light rain")

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_weather_service] = lambda: weather
    app.dependency_overrides[get_maps_service] = lambda: MapsService(
        api_key="test-key", transport=httpx.MockTransport(no_route_handler)
    )
    app.state.notification_handler = build_notification_handler(Settings())

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        yield http

    app.dependency_overrides.clear()


def event_payload(minutes_ahead=120, **overrides):
    start = utc_now() + timedelta(minutes=minutes_ahead)
    payload = {
        "title": "Dentist",
        "location": "Ginza",
        "start_time": start.isoformat(),
        "end_time": (start + timedelta(hours=1)).isoformat(),
        "travel_time_minutes": 20,
        "notification_lead_minutes": 15,
    }
    payload.update(overrides)
    return payload


async def test_health(client):
    """Both health endpoints answer."""
    assert (await client.get("/")).json()["status"] == "healthy"
    assert (await client.get("/health")).status_code == 200


async def test_user_header_is_required(client):
    """Requests without X-User-Id are rejected."""
    response = await client.get("/api/events")
    assert response.status_code == 401


async def test_create_list_and_delete_event(client):
    """A created event is listed with a pending notification until it is deleted."""
    response = await client.post("/api/events", json=event_payload(), headers=HEADERS)
    assert response.status_code == 201
    body = response.json()
    event_id = body["event"]["id"]
    assert body["plan"]["scheduled"] is True
    assert body["plan"]["outcome"] == "scheduled"
    assert "Dentist" in body["message"]

    events = (await client.get("/api/events", headers=HEADERS)).json()
    assert [e["id"] for e in events] == [event_id]

    pending = (await client.get("/api/notifications", headers=HEADERS)).json()
    assert [n["id"] for n in pending] == [body["event"]["notification_record"]["departure"]]
    assert pending[0]["title"] == "⏰ Time to get ready"

    assert (await client.delete(f"/api/events/{event_id}", headers=HEADERS)).status_code == 204
    assert (await client.get("/api/events", headers=HEADERS)).json() == []
    assert (await client.get("/api/notifications", headers=HEADERS)).json() == []


async def test_event_starting_too_soon_is_saved_without_notification(client):
    """The save succeeds even when the notification time has passed."""
    response = await client.post("/api/events", json=event_payload(minutes_ahead=5), headers=HEADERS)

    assert response.status_code == 201
    body = response.json()
    assert body["plan"]["scheduled"] is False
    assert body["event"]["notification_record"] is None


async def test_weather_policy_moves_notification_earlier(client):
    """Rain at the destination adds the configured minutes."""
    await client.put("/api/preferences/weather", json={"rain_minutes": 10}, headers=HEADERS)

    payload = event_payload(destination={"latitude": 35.67, "longitude": 139.76})
    body = (await client.post("/api/events", json=payload, headers=HEADERS)).json()

    assert body["plan"]["effective_lead_minutes"] == 25
    assert "light rain" in body["event"]["weather"]


async def test_invalid_event_is_rejected(client):
    """End before start is a validation error and nothing is stored."""
    payload = event_payload()
    payload["end_time"] = payload["start_time"]

    response = await client.post("/api/events", json=payload, headers=HEADERS)

    assert response.status_code == 422
    assert (await client.get("/api/events", headers=HEADERS)).json() == []


async def test_update_and_missing_event(client):
    """Editing keeps the id; unknown ids are 404."""
    created = (await client.post("/api/events", json=event_payload(), headers=HEADERS)).json()
    event_id = created["event"]["id"]

    response = await client.put(
        f"/api/events/{event_id}", json=event_payload(title="Dentist (moved)"), headers=HEADERS
    )
    assert response.status_code == 200
    assert response.json()["event"]["id"] == event_id
    assert (await client.get(f"/api/events/{event_id}", headers=HEADERS)).json()["title"] == "Dentist (moved)"

    assert (await client.get("/api/events/missing", headers=HEADERS)).status_code == 404
    assert (await client.delete("/api/events/missing", headers=HEADERS)).status_code == 404


async def test_preferences_round_trip(client):
    """The weather policy defaults to 15 minutes and can be replaced."""
    defaults = (await client.get("/api/preferences/weather", headers=HEADERS)).json()
    assert defaults["enabled"] is True
    assert defaults["snow_minutes"] == 15

    saved = await client.put(
        "/api/preferences/weather",
        json={"enabled": False, "snow_minutes": 30},
        headers=HEADERS,
    )
    assert saved.status_code == 200

    reloaded = (await client.get("/api/preferences/weather", headers=HEADERS)).json()
    assert reloaded["enabled"] is False
    assert reloaded["snow_minutes"] == 30


async def test_route_search_without_results(client):
    """No route found is reported with a hint to enter the time manually."""
    response = await client.post(
        "/api/routes/search",
        json={
            "origin": {"latitude": 35.68, "longitude": 139.69},
            "destination": {"latitude": 35.67, "longitude": 139.76},
            "arrival_time": utc_now().isoformat(),
        },
        headers=HEADERS,
    )

    assert response.status_code == 200
    assert response.json()["candidates"] == []
    assert "manually" in response.json()["message"]


async def test_route_select_out_of_range(client):
    """Choosing a route that does not exist is a 422."""
    response = await client.post(
        "/api/routes/select",
        json={"candidates": [], "chosen_index": 0},
        headers=HEADERS,
    )
    assert response.status_code == 422


async def test_current_weather(client):
    """Current conditions come with a travel mode suggestion."""
    response = await client.get(
        "/api/weather", params={"latitude": 35.68, "longitude": 139.76}, headers=HEADERS
    )

    assert response.status_code == 200
    assert response.json()["conditions"]["category"] == "Rain"
    assert response.json()["recommendation"]["mode"] == "transit"


async def test_dispatch_with_nothing_due(client):
    """Dispatch returns an empty delivery list when nothing is due."""
    await client.post("/api/events", json=event_payload(), headers=HEADERS)

    response = await client.post("/api/notifications/dispatch", headers=HEADERS)

    assert response.json() == {"delivered": []}


async def test_route_search_with_malformed_response_asks_for_manual_entry(client):
    """A garbled Maps response becomes a 502 with the manual entry hint."""
    app.dependency_overrides[get_maps_service] = lambda: MapsService(
        api_key="test-key",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, text="<html>oops</html>")),
    )

    response = await client.post(
        "/api/routes/search",
        json={
            "origin": {"latitude": 35.68, "longitude": 139.69},
            "destination": {"latitude": 35.67, "longitude": 139.76},
            "arrival_time": utc_now().isoformat(),
        },
        headers=HEADERS,
    )

    assert response.status_code == 502
    assert "Enter the travel time manually" in response.json()["detail"]
