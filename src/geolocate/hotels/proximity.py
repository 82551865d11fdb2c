from __future__ import annotations

import math
from enum import Enum

NEAR_MAX_KM = 5.0
MODERATE_MAX_KM = 10.0


class InvalidDistance(ValueError):
    """Raised when a distance cannot be classified (negative or NaN)."""


class ProximityTier(str, Enum):
    """Coarse distance bucket used for marker styling."""

    NEAR = "near"
    MODERATE = "moderate"
    FAR = "far"


def classify_proximity(distance_km: float) -> ProximityTier:
    """Map a distance to its tier; upper bounds are inclusive (5.0 is NEAR, 10.0 is MODERATE)."""
    if math.isnan(distance_km) or distance_km < 0:
        raise InvalidDistance(f"distance must be a non-negative number, got {distance_km!r}")
    if distance_km <= NEAR_MAX_KM:
        return ProximityTier.NEAR
    if distance_km <= MODERATE_MAX_KM:
        return ProximityTier.MODERATE
    return ProximityTier.FAR
