"""
User preference storage, currently the weather notification policy.
"""
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dayplanner.models.preferences import Preference
from dayplanner.schemas.weather import WeatherAdjustmentPolicy

WEATHER_POLICY_KEY = "weather_notification"


class PreferencesService:
    def __init__(self, db: AsyncSession, user_id: str):
        self.db = db
        self.user_id = user_id

    async def _get(self, key: str) -> Optional[Preference]:
        result = await self.db.execute(
            select(Preference).where(
                Preference.user_id == self.user_id,
                Preference.key == key,
            )
        )
        return result.scalar_one_or_none()

    async def get_weather_policy(self) -> WeatherAdjustmentPolicy:
        """Stored policy merged over the defaults, so older saved policies still load."""
        pref = await self._get(WEATHER_POLICY_KEY)
        if pref is None:
            return WeatherAdjustmentPolicy()

        merged = {**WeatherAdjustmentPolicy().model_dump(), **pref.value}
        return WeatherAdjustmentPolicy(**merged)

    async def save_weather_policy(self, policy: WeatherAdjustmentPolicy) -> WeatherAdjustmentPolicy:
        pref = await self._get(WEATHER_POLICY_KEY)

        if pref:
            pref.value = policy.model_dump()
        else:
            pref = Preference(
                user_id=self.user_id,
                key=WEATHER_POLICY_KEY,
                value=policy.model_dump(),
            )
            self.db.add(pref)

        await self.db.commit()
        return policy
