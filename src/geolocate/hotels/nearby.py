from __future__ import annotations

import logging
from typing import Protocol

from geolocate.core.geo import Coordinate
from geolocate.hotels.records import HotelDisplayRecord, PointOfInterest, build_hotel_records

logger = logging.getLogger(__name__)


class HotelSource(Protocol):
    def get_nearby_hotels(self, *, lat: float, lon: float) -> list[PointOfInterest]: ...


def find_nearby_hotels(origin: Coordinate, *, source: HotelSource) -> list[HotelDisplayRecord]:
    """Fetch lodging POIs around `origin` and shape them into display records."""
    pois = source.get_nearby_hotels(lat=origin.latitude, lon=origin.longitude)
    records = build_hotel_records(origin, pois)
    logger.info("Hotels returned: %d", len(records))
    return records
