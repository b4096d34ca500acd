"""Module containing the main search service."""
# outdoorspot/search/search_service.py
import asyncio
import time
from dataclasses import dataclass
from typing import Any, List, Optional

import psutil

from outdoorspot.config import settings
from outdoorspot.errors import BadRequestError
from outdoorspot.logger import logger
from outdoorspot.models import Activity, CombinedResults, Location, NearbyQuery
from outdoorspot.scoring.distance import FlatDistance, flat_distance, rank_by_distance
from outdoorspot.search.search_utils import SearchUtils
from outdoorspot.search.weather_enrichment import WeatherEnrichmentService

SEARCH_TYPES = ("all", "locations", "activities")


@dataclass
class SearchContext:
    """Per-call bookkeeping used for logging."""
    operation: str
    source: str
    start_time: float

    def log_done(self, count: int, **query: Any) -> None:
        duration = time.time() - self.start_time
        memory_mb = psutil.Process().memory_info().rss / 1024 / 1024
        logger.info(
            "{operation} (source: {source}, query: {query}): {count} results | "
            "Duration = {duration:.4f}s | RAM = {memory:.2f} MB",
            operation=self.operation, source=self.source, query=query,
            count=count, duration=duration, memory=memory_mb,
        )


class SearchService:
    """Search over one location source: text filters, nearby ranking and weather."""

    def __init__(
            self,
            source,
            weather_enrichment: WeatherEnrichmentService,
            metric: FlatDistance = flat_distance):
        self.source = source
        self.utils = SearchUtils()
        self.weather_enrichment = weather_enrichment
        self.metric = metric

    def _context(self, operation: str) -> SearchContext:
        return SearchContext(
            operation=operation,
            source=getattr(self.source, "name", type(self.source).__name__),
            start_time=time.time(),
        )

    async def search_locations(
            self,
            q: Optional[str] = None,
            activity: Optional[str] = None,
            state: Optional[str] = None,
            limit: int = settings.DEFAULT_LIMIT) -> List[Location]:
        """
        Filter locations, then attach weather to the survivors.

        Args:
            q: Free text on name, description, region and tags
            activity: Activity tag substring
            state: Region label substring
            limit: Maximum number of results

        Returns:
            Matching locations in source order, each with `weather` set
        """
        ctx = self._context("Location search")
        locations = await self.source.locations()
        hits = self.utils.filter_locations(
            locations, q=q, activity=activity, state=state, limit=limit
        )
        hits = await self.weather_enrichment.append_weather(hits)
        ctx.log_done(len(hits), q=q, activity=activity, state=state, limit=limit)
        return hits

    async def search_activities(
            self,
            q: Optional[str] = None,
            category: Optional[str] = None,
            limit: int = settings.DEFAULT_LIMIT) -> List[Activity]:
        """Filter activities by text and category."""
        ctx = self._context("Activity search")
        activities = await self.source.activities()
        hits = self.utils.filter_activities(activities, q=q, category=category, limit=limit)
        ctx.log_done(len(hits), q=q, category=category, limit=limit)
        return hits

    async def search_all(
            self,
            q: Optional[str] = None,
            activity: Optional[str] = None,
            state: Optional[str] = None,
            category: Optional[str] = None,
            search_type: Optional[str] = "all") -> CombinedResults:
        """
        Search locations and activities side by side.

        Locations are capped at COMBINED_LOCATION_LIMIT and activities at
        COMBINED_ACTIVITY_LIMIT. A collection excluded by `search_type` comes
        back as an empty list.

        Raises:
            BadRequestError: if `search_type` is not all, locations or activities.
        """
        search_type = (search_type or "all").strip().lower()
        if search_type not in SEARCH_TYPES:
            raise BadRequestError(
                f"Invalid search type '{search_type}'. Use one of: {', '.join(SEARCH_TYPES)}"
            )

        async def no_results() -> list:
            return []

        locations_task = (
            self.search_locations(
                q=q, activity=activity, state=state,
                limit=settings.COMBINED_LOCATION_LIMIT,
            )
            if search_type in ("all", "locations") else no_results()
        )
        activities_task = (
            self.search_activities(
                q=q, category=category,
                limit=settings.COMBINED_ACTIVITY_LIMIT,
            )
            if search_type in ("all", "activities") else no_results()
        )

        locations, activities = await asyncio.gather(locations_task, activities_task)
        return CombinedResults(locations=locations, activities=activities)

    async def nearby(self, query: NearbyQuery) -> List[Location]:
        """
        Locations within `query.radius` km of the point, closest first.

        Each result carries its approximate distance in km, rounded to
        two decimals.
        """
        ctx = self._context("Nearby search")
        locations = await self.source.locations()
        ranked = rank_by_distance(
            locations,
            lat=query.lat,
            lng=query.lng,
            radius=query.radius,
            limit=query.limit,
            metric=self.metric,
        )
        hits = [
            location.model_copy(update={"distance": round(distance, 2)})
            for location, distance in ranked
        ]
        ctx.log_done(len(hits), lat=query.lat, lng=query.lng, radius=query.radius, limit=query.limit)
        return hits
