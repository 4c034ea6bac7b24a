"""Tests for stored weather notification preferences."""

from dayplanner.models.preferences import Preference
from dayplanner.schemas.weather import WeatherAdjustmentPolicy
from dayplanner.services.preferences import WEATHER_POLICY_KEY, PreferencesService


async def test_defaults_when_nothing_saved(db_session):
    """Without a saved policy every category adds 15 minutes."""
    policy = await PreferencesService(db_session, "user-1").get_weather_policy()

    assert policy == WeatherAdjustmentPolicy()
    assert policy.enabled is True
    assert policy.rain_minutes == 15


async def test_save_and_reload(db_session):
    """A saved policy is returned on the next load, and saving again updates it."""
    service = PreferencesService(db_session, "user-1")

    await service.save_weather_policy(WeatherAdjustmentPolicy(rain_minutes=5))
    await service.save_weather_policy(WeatherAdjustmentPolicy(enabled=False, snow_minutes=30))

    policy = await service.get_weather_policy()
    assert policy.enabled is False
    assert policy.snow_minutes == 30
    assert policy.rain_minutes == 15


async def test_partial_stored_policy_is_merged_with_defaults(db_session):
    """Fields missing from an older saved policy fall back to defaults."""
    db_session.add(Preference(user_id="user-1", key=WEATHER_POLICY_KEY, value={"rain_minutes": 40}))
    await db_session.commit()

    policy = await PreferencesService(db_session, "user-1").get_weather_policy()

    assert policy.rain_minutes == 40
    assert policy.thunderstorm_minutes == 15
    assert policy.enabled is True


async def test_policies_are_per_user(db_session):
    """One user's preferences do not leak to another."""
    await PreferencesService(db_session, "alice").save_weather_policy(
        WeatherAdjustmentPolicy(cloudy_minutes=0)
    )

    bob_policy = await PreferencesService(db_session, "bob").get_weather_policy()
    assert bob_policy.cloudy_minutes == 15
