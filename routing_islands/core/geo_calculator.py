"""Geodesic helpers for network geometry checks.

Provides the small amount of geometry the detector needs:
- Distance calculation (Haversine formula) for zero-length segment detection
- Segment iteration over an ordered vertex sequence

All calculations use WGS84 spherical Earth approximation (R = 6,371 km).
"""

from math import atan2, cos, radians, sin, sqrt
from typing import Iterable, Iterator, Sequence, TypeVar

# Earth's radius in meters (WGS84 spherical approximation)
EARTH_RADIUS_M = 6_371_000

_T = TypeVar("_T")


class GeoCalculator:
    """Static methods for geodesic calculations on Earth's surface.

    All methods use WGS84 spherical Earth model (R = 6,371 km).
    Coordinates are in decimal degrees (WGS84). Distances are in meters.
    """

    EARTH_RADIUS_M = EARTH_RADIUS_M

    @staticmethod
    def haversine_distance_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        """Calculate great-circle distance between two points using Haversine formula.

        Args:
            lat1: Latitude of first point (decimal degrees)
            lon1: Longitude of first point (decimal degrees)
            lat2: Latitude of second point (decimal degrees)
            lon2: Longitude of second point (decimal degrees)

        Returns:
            Distance in meters.
        """
        dlat = radians(lat2 - lat1)
        dlon = radians(lon2 - lon1)
        a = sin(dlat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(dlon / 2) ** 2
        return EARTH_RADIUS_M * 2 * atan2(sqrt(a), sqrt(1 - a))

    @staticmethod
    def pairwise(items: Sequence[_T]) -> Iterator[tuple[_T, _T]]:
        """Yield consecutive (previous, next) pairs of a sequence."""
        for i in range(1, len(items)):
            yield items[i - 1], items[i]

    @staticmethod
    def zero_length_segments(points: Iterable[tuple[float, float]]) -> int:
        """Count consecutive (lon, lat) pairs that are zero meters apart.

        Args:
            points: Ordered (lon, lat) coordinates

        Returns:
            Number of degenerate segments.
        """
        coords = list(points)
        count = 0
        for (lon1, lat1), (lon2, lat2) in GeoCalculator.pairwise(coords):
            if GeoCalculator.haversine_distance_m(lat1=lat1, lon1=lon1, lat2=lat2, lon2=lon2) == 0.0:
                count += 1
        return count
