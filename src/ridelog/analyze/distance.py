# ridelog/analyze/distance.py
"""
Great-circle distance for ridelog.
"""

from __future__ import annotations

from haversine import haversine, Unit

EARTH_RADIUS_M = 6_371_000.0


def distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Haversine distance in meters between two lat/lon points.

    Unit.RADIANS gives the central angle, scaled here by EARTH_RADIUS_M
    rather than the library's mean radius. check=False lets NaN and
    out-of-range coordinates propagate instead of raising.
    """
    angle = haversine((lat1, lon1), (lat2, lon2), unit=Unit.RADIANS, check=False)
    return angle * EARTH_RADIUS_M
