"""Attach weather readings to search results."""

import asyncio
from typing import List

from outdoorspot.config import settings
from outdoorspot.errors import WeatherLookupError
from outdoorspot.logger import logger
from outdoorspot.models import Location, Weather
from outdoorspot.weather import WeatherService


class WeatherEnrichmentService:  # pylint: disable=too-few-public-methods
    """
    Best-effort weather enrichment.

    One lookup per location runs concurrently, each bounded by a timeout.
    A lookup that times out or fails is replaced by `Weather.unavailable`,
    so enrichment never fails the request.
    """

    def __init__(
            self,
            weather_service: WeatherService,
            timeout_s: float = settings.WEATHER_TIMEOUT_S):
        self.weather = weather_service
        self.timeout_s = timeout_s

    async def _lookup(self, name: str) -> Weather:
        """
        Lookup with timeout and fallback.

        Args:
            name: Location name used as the weather key

        Returns:
            Weather: the reading, `unknown` on a miss, `unavailable` on failure
        """
        try:
            return await asyncio.wait_for(self.weather.lookup(name), timeout=self.timeout_s)
        except asyncio.TimeoutError:
            logger.warning(
                "Weather lookup for '{name}' timed out after {timeout}s",
                name=name, timeout=self.timeout_s,
            )
        except WeatherLookupError as e:
            logger.warning("Weather lookup for '{name}' failed: {error}", name=name, error=e)
        except Exception as e:  # pylint: disable=broad-except
            logger.opt(exception=e).warning("Weather lookup for '{name}' raised unexpectedly", name=name)
        return Weather.unavailable(name)

    async def append_weather(self, locations: List[Location]) -> List[Location]:
        """
        Return copies of `locations` with their `weather` field set.

        The input objects are not modified; the catalog they come from is
        shared between requests.
        """
        if not locations:
            return []

        readings = await asyncio.gather(
            *(self._lookup(location.name) for location in locations)
        )

        logger.debug(
            "WeatherEnrichmentService - {count} readings: {conditions}",
            count=len(readings),
            conditions=[reading.condition for reading in readings],
        )

        return [
            location.model_copy(update={"weather": reading})
            for location, reading in zip(locations, readings)
        ]
