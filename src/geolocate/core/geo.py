from __future__ import annotations

from dataclasses import dataclass
from math import atan2, cos, radians, sin, sqrt

"""
Geospatial helpers.

We keep a tiny geometry layer here so the hotel builder and the CLI can do distance
calculations without pulling in heavier GIS dependencies.
"""

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class Coordinate:
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float


def haversine_km(a: Coordinate, b: Coordinate) -> float:
    """Compute the unrounded great-circle distance in kilometers between two points.

    Inputs are not range-checked; any finite pair yields a number.
    """
    lat1 = radians(a.latitude)
    lat2 = radians(b.latitude)
    dlat = radians(b.latitude - a.latitude)
    dlon = radians(b.longitude - a.longitude)

    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # Floating noise can push h a hair outside [0, 1] near antipodes; NaN passes through.
    if h > 1.0:
        h = 1.0
    elif h < 0.0:
        h = 0.0
    return 2 * EARTH_RADIUS_KM * atan2(sqrt(h), sqrt(1 - h))


def distance_km(origin: Coordinate, target: Coordinate) -> float:
    """Great-circle distance rounded to 2 decimal places (display precision)."""
    return round(haversine_km(origin, target), 2)
