"""Where search reads its locations and activities from.

A deployment picks one source (SEARCH_SOURCE); the catalog and the database
are never merged.
"""
from typing import List, Optional

from outdoorspot.db.repositories import ActivityRepository, LocationRepository
from outdoorspot.models import Activity, Location
from outdoorspot.search import catalog


class CatalogSource:
    """The fixed in-memory catalog."""

    name = "catalog"

    def __init__(
            self,
            locations: Optional[List[Location]] = None,
            activities: Optional[List[Activity]] = None):
        self._locations = catalog.LOCATIONS if locations is None else locations
        self._activities = catalog.ACTIVITIES if activities is None else activities

    async def locations(self) -> List[Location]:
        return self._locations

    async def activities(self) -> List[Activity]:
        return self._activities


class DatabaseSource:
    """A snapshot of the `locations` / `activities` tables, read per request."""

    name = "database"

    def __init__(self, locations: LocationRepository, activities: ActivityRepository):
        self.location_repository = locations
        self.activity_repository = activities

    async def locations(self) -> List[Location]:
        return await self.location_repository.list_for_search()

    async def activities(self) -> List[Activity]:
        return await self.activity_repository.list_all()


def build_source(kind: str, db_connector):
    """Source for a SEARCH_SOURCE value. Raises ValueError for unknown kinds."""
    if kind == CatalogSource.name:
        return CatalogSource()
    if kind == DatabaseSource.name:
        return DatabaseSource(
            LocationRepository(db_connector),
            ActivityRepository(db_connector),
        )
    raise ValueError(f"Unknown SEARCH_SOURCE '{kind}'. Use 'catalog' or 'database'.")
