"""
SearchUtils - text, tag and region filtering over in-memory collections.

Every filter is a case-insensitive substring test. Filters combine with AND,
results keep the input order, and the limit is applied last.
"""

import math
from typing import Any, Iterable, List, Optional

from outdoorspot.config import settings
from outdoorspot.errors import BadRequestError
from outdoorspot.models import Activity, Location, NearbyQuery


def _contains(haystack: Optional[str], needle: str) -> bool:
    """Case-insensitive substring test. `needle` is already lowercased."""
    return bool(haystack) and needle in haystack.lower()


def _normalize(term: Optional[str]) -> Optional[str]:
    if term is None:
        return None
    term = term.strip().lower()
    return term or None


def parse_limit(
        raw: Any,
        default: int = settings.DEFAULT_LIMIT,
        maximum: int = settings.MAX_LIMIT) -> int:
    """
    Parse a `limit` query value without ever raising.

    Non-numeric, non-finite or negative input gives `default`; values above
    `maximum` are capped. `0` is kept and yields an empty result.
    """
    if raw is None or isinstance(raw, bool):
        return default
    try:
        value = float(str(raw).strip())
    except ValueError:
        return default
    if not math.isfinite(value) or value < 0:
        return default
    return min(int(value), maximum)


def parse_float(raw: Any) -> Optional[float]:
    """Parse a finite float, None for missing or unparseable input."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = float(str(raw).strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


class SearchUtils:
    """Filtering helpers shared by the search endpoints."""

    # -----------------------------------------------------------------
    # Locations
    # -----------------------------------------------------------------
    def matches_location(
            self,
            location: Location,
            q: Optional[str] = None,
            activity: Optional[str] = None,
            state: Optional[str] = None) -> bool:
        """
        True when the location satisfies every filter that is set.

        Args:
            location: Candidate location
            q: Free text, matched on name, description, region or any tag
            activity: Matched on at least one activity tag
            state: Matched on the region label
        """
        q, activity, state = _normalize(q), _normalize(activity), _normalize(state)

        if q is not None:
            text_hit = (
                _contains(location.name, q)
                or _contains(location.description, q)
                or _contains(location.location, q)
                or any(_contains(tag, q) for tag in location.activities)
            )
            if not text_hit:
                return False

        if activity is not None:
            if not any(_contains(tag, activity) for tag in location.activities):
                return False

        if state is not None and not _contains(location.location, state):
            return False

        return True

    def filter_locations(
            self,
            locations: Iterable[Location],
            q: Optional[str] = None,
            activity: Optional[str] = None,
            state: Optional[str] = None,
            limit: int = settings.DEFAULT_LIMIT) -> List[Location]:
        """Filter, keep input order, then truncate to `limit`."""
        matched = [
            location for location in locations
            if self.matches_location(location, q=q, activity=activity, state=state)
        ]
        return matched[:max(limit, 0)]

    # -----------------------------------------------------------------
    # Activities
    # -----------------------------------------------------------------
    def matches_activity(
            self,
            activity: Activity,
            q: Optional[str] = None,
            category: Optional[str] = None) -> bool:
        """`q` on name, description, category or location name; `category` on category."""
        q, category = _normalize(q), _normalize(category)

        if q is not None:
            text_hit = (
                _contains(activity.name, q)
                or _contains(activity.description, q)
                or _contains(activity.category, q)
                or _contains(activity.location_name, q)
            )
            if not text_hit:
                return False

        if category is not None and not _contains(activity.category, category):
            return False

        return True

    def filter_activities(
            self,
            activities: Iterable[Activity],
            q: Optional[str] = None,
            category: Optional[str] = None,
            limit: int = settings.DEFAULT_LIMIT) -> List[Activity]:
        """Same contract as `filter_locations`, for activities."""
        matched = [
            activity for activity in activities
            if self.matches_activity(activity, q=q, category=category)
        ]
        return matched[:max(limit, 0)]


def parse_nearby_query(
        lat: Any,
        lng: Any,
        radius: Any = None,
        limit: Any = None) -> NearbyQuery:
    """
    Build a NearbyQuery from raw query values.

    Raises:
        BadRequestError: if `lat` or `lng` is missing or not a finite number.
    """
    parsed_lat = parse_float(lat)
    parsed_lng = parse_float(lng)
    if parsed_lat is None or parsed_lng is None:
        raise BadRequestError("Latitude and longitude are required")

    parsed_radius = parse_float(radius)
    if parsed_radius is None or parsed_radius < 0:
        parsed_radius = settings.NEARBY_DEFAULT_RADIUS_KM

    return NearbyQuery(
        lat=parsed_lat,
        lng=parsed_lng,
        radius=parsed_radius,
        limit=parse_limit(limit),
    )
