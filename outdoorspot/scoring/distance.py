# ---------------------------------------------------------------------
"""Approximate distance used by the "nearby" search."""
import math
from typing import List, Sequence, Tuple

from outdoorspot.config import settings
from outdoorspot.models import Location


class FlatDistance:
    """Euclidean distance on raw degrees, scaled to kilometers.

    This is not a geodesic distance: one degree of longitude is treated as
    `km_per_degree` at every latitude, so results get too large away from the
    equator. Nearby results depend on this exact formula, so it must not be
    swapped for haversine without changing the API contract.
    """

    def __init__(self, km_per_degree: float = settings.KM_PER_DEGREE):
        self.km_per_degree = km_per_degree

    def distance_km(self, lat1: float, lng1: float, lat2: float, lng2: float) -> float:
        """
        Compute sqrt(dlat^2 + dlng^2) * km_per_degree.

        Args:
            lat1, lng1: First point, in degrees
            lat2, lng2: Second point, in degrees

        Returns:
            Approximate distance in kilometers
        """
        d_lat = lat1 - lat2
        d_lng = lng1 - lng2
        return math.sqrt(d_lat ** 2 + d_lng ** 2) * self.km_per_degree


# Shared instance
flat_distance = FlatDistance()


def approx_distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    return flat_distance.distance_km(lat1, lng1, lat2, lng2)


def rank_by_distance(
    locations: Sequence[Location],
    lat: float,
    lng: float,
    radius: float,
    limit: int,
    metric: FlatDistance = flat_distance,
) -> List[Tuple[Location, float]]:
    """
    Keep locations within `radius` km of (lat, lng), closest first.

    The sort is stable, so equal distances keep their input order.

    Returns:
        At most `limit` (location, distance_km) pairs
    """
    in_range: List[Tuple[Location, float]] = []
    for location in locations:
        dist = metric.distance_km(lat, lng, location.coordinates.lat, location.coordinates.lng)
        if dist <= radius:
            in_range.append((location, dist))

    in_range.sort(key=lambda pair: pair[1])
    return in_range[:max(limit, 0)]
