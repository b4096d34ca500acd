# tests/test_search_service.py
import pytest
from unittest.mock import AsyncMock, MagicMock

from outdoorspot.errors import BadRequestError
from outdoorspot.search.search_service import SearchService
from outdoorspot.search.sources import CatalogSource, DatabaseSource, build_source
from outdoorspot.search.weather_enrichment import WeatherEnrichmentService
from test_utils import print_test_name, print_test_result


@pytest.mark.asyncio
class TestSearchLocations:

    async def test_hits_carry_weather(self, search_service):
        hits = await search_service.search_locations(state="texas", limit=3)

        assert len(hits) == 3
        assert all(loc.location == "Texas" for loc in hits)
        assert all(loc.weather is not None for loc in hits)

    async def test_no_match_is_empty_success(self, search_service):
        assert await search_service.search_locations(q="volcano") == []

    async def test_weather_only_for_survivors(self, weather_service):
        weather_service.lookup = AsyncMock(side_effect=weather_service.lookup)
        service = SearchService(CatalogSource(), WeatherEnrichmentService(weather_service))

        await service.search_locations(q="glacier")

        weather_service.lookup.assert_awaited_once_with("Glacier National Park")


@pytest.mark.asyncio
class TestSearchAll:
    """Combined search over locations and activities."""

    async def test_all_fills_both_collections(self, search_service):
        test_name = "test_all_fills_both_collections"
        print_test_name(test_name)
        try:
            # --- Act ---
            results = await search_service.search_all()

            # --- Assert ---
            assert len(results.locations) == 6
            assert len(results.activities) == 8
            print_test_result(test_name, passed=True)
        except Exception as e:
            print_test_result(test_name, passed=False)
            raise e

    async def test_locations_only(self, search_service):
        results = await search_service.search_all(q="lake", search_type="locations")
        assert results.locations
        assert results.activities == []

    async def test_activities_only(self, search_service):
        results = await search_service.search_all(category="hiking", search_type="ACTIVITIES")
        assert results.locations == []
        assert all(a.category == "hiking" for a in results.activities)

    async def test_missing_type_means_all(self, search_service):
        results = await search_service.search_all(q="texoma", search_type=None)
        assert [l.name for l in results.locations] == ["Lake Texoma"]
        assert [a.name for a in results.activities] == ["Striper Fishing"]

    async def test_invalid_type_is_rejected(self, search_service):
        with pytest.raises(BadRequestError) as excinfo:
            await search_service.search_all(search_type="events")
        assert excinfo.value.status_code == 400
        assert "events" in excinfo.value.message


@pytest.mark.asyncio
class TestSources:

    async def test_catalog_source_with_custom_data(self):
        source = CatalogSource(locations=[], activities=[])
        assert await source.locations() == []
        assert await source.activities() == []

    async def test_database_source_reads_repositories(self):
        locations = MagicMock()
        locations.list_for_search = AsyncMock(return_value=[])
        activities = MagicMock()
        activities.list_all = AsyncMock(return_value=[])
        source = DatabaseSource(locations, activities)

        await source.locations()
        await source.activities()

        locations.list_for_search.assert_awaited_once()
        activities.list_all.assert_awaited_once()


def test_build_source(mock_db_connector):
    assert isinstance(build_source("catalog", mock_db_connector), CatalogSource)
    assert isinstance(build_source("database", mock_db_connector), DatabaseSource)
    with pytest.raises(ValueError):
        build_source("elastic", mock_db_connector)
