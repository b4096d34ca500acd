# tests/test_weather_enrichment.py
import asyncio
import json

import pytest
from unittest.mock import AsyncMock, MagicMock
from redis.exceptions import ConnectionError as RedisConnectionError

from outdoorspot.errors import WeatherLookupError
from outdoorspot.models import Weather
from outdoorspot.search import catalog
from outdoorspot.search.weather_enrichment import WeatherEnrichmentService
from outdoorspot.weather import WeatherService
from test_utils import print_test_name, print_test_result


class SlowWeather:
    """Weather lookup that never answers in time."""

    async def lookup(self, name):
        await asyncio.sleep(5)
        return Weather(location=name, condition="Sunny")


class BrokenWeather:
    async def lookup(self, name):
        raise WeatherLookupError("upstream down")


class CrashingWeather:
    async def lookup(self, name):
        raise RuntimeError("unexpected")


@pytest.mark.asyncio
class TestWeatherService:

    async def test_known_location(self, weather_service):
        weather = await weather_service.lookup("Yosemite National Park")
        assert weather.location == "Yosemite National Park"
        assert weather.temperature == 72
        assert weather.condition == "Sunny"
        assert len(weather.forecast) == 3

    async def test_lookup_ignores_case(self, weather_service):
        weather = await weather_service.lookup("  lake TEXOMA ")
        assert weather.condition == "Thunderstorms"

    async def test_miss_gives_unknown(self, weather_service):
        weather = await weather_service.lookup("Tyler State Park")
        assert weather.condition == "Unknown"
        assert weather.temperature is None

    async def test_blank_name_raises(self, weather_service):
        with pytest.raises(WeatherLookupError):
            await weather_service.lookup("   ")

    async def test_cache_miss_then_set(self, weather_service, mock_cache_manager):
        test_name = "test_cache_miss_then_set"
        print_test_name(test_name)
        try:
            # --- Act ---
            await weather_service.lookup("Glacier National Park")

            # --- Assert ---
            mock_cache_manager.get_json.assert_awaited_once_with("weather:glacier national park")
            mock_cache_manager.set_json.assert_awaited_once()
            key, value = mock_cache_manager.set_json.await_args.args
            assert key == "weather:glacier national park"
            assert value["condition"] == "Partly Cloudy"
            print_test_result(test_name, passed=True)
        except Exception as e:
            print_test_result(test_name, passed=False)
            raise e

    async def test_cache_hit_skips_table(self, mock_cache_manager):
        mock_cache_manager.get_json.return_value = {"location": "Nowhere", "condition": "Foggy"}
        service = WeatherService(cache=mock_cache_manager, delay_s=0, readings={})

        weather = await service.lookup("Nowhere")

        assert weather.condition == "Foggy"
        mock_cache_manager.set_json.assert_not_awaited()

    async def test_stale_cache_entry_is_a_miss(self, weather_service, mock_cache_manager):
        test_name = "test_stale_cache_entry_is_a_miss"
        print_test_name(test_name)
        try:
            # --- Arrange ---
            mock_cache_manager.get_json.return_value = {"condition": "Sunny"}

            # --- Act ---
            weather = await weather_service.lookup("Glacier National Park")

            # --- Assert ---
            assert weather.location == "Glacier National Park"
            assert weather.condition == "Partly Cloudy"
            mock_cache_manager.set_json.assert_awaited_once()
            print_test_result(test_name, passed=True)
        except Exception as e:
            print_test_result(test_name, passed=False)
            raise e

    async def test_corrupt_cache_json_is_a_miss(self, weather_service, mock_cache_manager):
        mock_cache_manager.get_json.side_effect = json.JSONDecodeError("Expecting value", "x", 0)

        weather = await weather_service.lookup("Lake Texoma")

        assert weather.condition == "Thunderstorms"

    async def test_redis_errors_are_not_fatal(self):
        cache = MagicMock()
        cache.get_json = AsyncMock(side_effect=RedisConnectionError("redis down"))
        cache.set_json = AsyncMock(side_effect=RedisConnectionError("redis down"))
        service = WeatherService(cache=cache, delay_s=0)

        weather = await service.lookup("Cedar Hill State Park")

        assert weather.condition == "Partly Cloudy"

    async def test_works_without_cache(self):
        service = WeatherService(cache=None, delay_s=0)
        weather = await service.lookup("White Rock Lake Park")
        assert weather.humidity == 68


@pytest.mark.asyncio
class TestWeatherEnrichment:

    async def test_every_location_gets_weather(self, weather_service):
        enrichment = WeatherEnrichmentService(weather_service, timeout_s=1.0)
        enriched = await enrichment.append_weather(catalog.LOCATIONS[:3])

        assert [loc.id for loc in enriched] == ["1", "2", "3"]
        assert all(loc.weather is not None for loc in enriched)
        assert enriched[0].weather.condition == "Sunny"

    async def test_catalog_is_not_mutated(self, weather_service):
        enrichment = WeatherEnrichmentService(weather_service, timeout_s=1.0)
        await enrichment.append_weather(catalog.LOCATIONS)
        assert all(loc.weather is None for loc in catalog.LOCATIONS)

    async def test_empty_input(self, weather_service):
        enrichment = WeatherEnrichmentService(weather_service)
        assert await enrichment.append_weather([]) == []

    async def test_timeout_gives_unavailable(self):
        test_name = "test_timeout_gives_unavailable"
        print_test_name(test_name)
        try:
            # --- Arrange ---
            enrichment = WeatherEnrichmentService(SlowWeather(), timeout_s=0.05)

            # --- Act ---
            enriched = await enrichment.append_weather(catalog.LOCATIONS[:2])

            # --- Assert ---
            assert [loc.weather.condition for loc in enriched] == ["Unavailable", "Unavailable"]
            assert enriched[0].weather.location == catalog.LOCATIONS[0].name
            print_test_result(test_name, passed=True)
        except Exception as e:
            print_test_result(test_name, passed=False)
            raise e

    async def test_lookup_error_gives_unavailable(self):
        enrichment = WeatherEnrichmentService(BrokenWeather(), timeout_s=1.0)
        enriched = await enrichment.append_weather(catalog.LOCATIONS[:1])
        assert enriched[0].weather.condition == "Unavailable"

    async def test_unexpected_error_gives_unavailable(self):
        enrichment = WeatherEnrichmentService(CrashingWeather(), timeout_s=1.0)
        enriched = await enrichment.append_weather(catalog.LOCATIONS[:2])
        assert [loc.weather.condition for loc in enriched] == ["Unavailable", "Unavailable"]
        assert [loc.id for loc in enriched] == ["1", "2"]
