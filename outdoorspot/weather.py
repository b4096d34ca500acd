"""Weather readings for locations.

Readings come from a fixed table keyed by location name. The lookup sleeps
for a short, configurable delay to behave like a remote call, and readings
are cached in Redis when a cache is given.
"""
import asyncio
from typing import Any, Dict, Optional

from redis.exceptions import RedisError

from outdoorspot.cache import CacheManager, make_cache_key
from outdoorspot.config import settings
from outdoorspot.errors import WeatherLookupError
from outdoorspot.logger import logger
from outdoorspot.models import Weather

WEATHER_READINGS: Dict[str, Dict[str, Any]] = {
    "yosemite national park": {
        "temperature": 72,
        "condition": "Sunny",
        "humidity": 30,
        "forecast": [
            {"day": "Monday", "high": 75, "low": 48, "condition": "Partly Cloudy"},
            {"day": "Tuesday", "high": 78, "low": 50, "condition": "Sunny"},
            {"day": "Wednesday", "high": 70, "low": 45, "condition": "Rain"},
        ],
    },
    "glacier national park": {
        "temperature": 58,
        "condition": "Partly Cloudy",
        "humidity": 55,
        "forecast": [
            {"day": "Monday", "high": 61, "low": 39, "condition": "Cloudy"},
            {"day": "Tuesday", "high": 64, "low": 41, "condition": "Sunny"},
        ],
    },
    "grand canyon national park": {
        "temperature": 88,
        "condition": "Sunny",
        "humidity": 12,
        "forecast": [
            {"day": "Monday", "high": 91, "low": 60, "condition": "Sunny"},
            {"day": "Tuesday", "high": 93, "low": 62, "condition": "Sunny"},
        ],
    },
    "white rock lake park": {"temperature": 84, "condition": "Humid", "humidity": 68},
    "cedar hill state park": {"temperature": 83, "condition": "Partly Cloudy", "humidity": 62},
    "dinosaur valley state park": {"temperature": 86, "condition": "Sunny", "humidity": 50},
    "lake texoma": {"temperature": 81, "condition": "Thunderstorms", "humidity": 74},
}


class WeatherService:
    """Looks up the current reading for a location name."""

    def __init__(
        self,
        cache: Optional[CacheManager] = None,
        delay_s: float = settings.WEATHER_SIMULATED_DELAY_S,
        readings: Optional[Dict[str, Dict[str, Any]]] = None,
        cache_ttl_s: int = settings.WEATHER_CACHE_TTL_S,
    ):
        self.cache = cache
        self.delay_s = delay_s
        self.readings = readings if readings is not None else WEATHER_READINGS
        self.cache_ttl_s = cache_ttl_s

    async def _cache_get(self, key: str) -> Optional[Weather]:
        """Cached reading, or None. Unreadable entries count as a miss."""
        if self.cache is None:
            return None
        try:
            cached = await self.cache.get_json(key)
            if cached is None:
                return None
            return Weather.model_validate(cached)
        # JSONDecodeError and ValidationError are both ValueErrors
        except (RedisError, ValueError) as e:
            logger.warning("Weather cache read failed for {key}: {error}", key=key, error=e)
            return None

    async def _cache_set(self, key: str, weather: Weather) -> None:
        if self.cache is None:
            return
        try:
            await self.cache.set_json(key, weather.model_dump(mode="json"), expire=self.cache_ttl_s)
        except RedisError as e:
            logger.warning("Weather cache write failed for {key}: {error}", key=key, error=e)

    async def lookup(self, name: str) -> Weather:
        """Return the reading for `name`, or `Weather.unknown(name)` on a miss.

        Raises:
            WeatherLookupError: if `name` is blank.
        """
        if not name or not name.strip():
            raise WeatherLookupError("Location name is required")

        normalized = name.strip().lower()
        cache_key = make_cache_key("weather", normalized)

        cached = await self._cache_get(cache_key)
        if cached is not None:
            logger.debug("Weather cache HIT for {key}", key=cache_key)
            return cached

        await asyncio.sleep(self.delay_s)

        reading = self.readings.get(normalized)
        if reading is None:
            logger.debug("No weather reading for '{name}'", name=name)
            return Weather.unknown(name)

        weather = Weather(location=name, **reading)
        await self._cache_set(cache_key, weather)
        return weather
