"""
Hotel display records.

Turns raw OpenStreetMap points of interest into display-ready hotel records:
- a name (defaulting to "Unnamed Hotel"),
- the great-circle distance from the request origin,
- a presence-only amenity summary ("Yes" / "Unknown", never "No").

A missing tag does not mean the hotel lacks the amenity, so we never infer "No".
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

from geolocate.core.geo import Coordinate, distance_km

logger = logging.getLogger(__name__)

DEFAULT_HOTEL_NAME = "Unnamed Hotel"

TriState = Literal["Yes", "Unknown"]

# service name -> OSM tag key
AMENITY_TAGS: dict[str, str] = {
    "wifi": "internet_access",
    "restaurant": "restaurant",
    "parking": "parking",
}


def _to_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


@dataclass(frozen=True)
class PointOfInterest:
    """A raw POI as returned by the geodata provider."""

    name: str | None
    latitude: float | None
    longitude: float | None
    tags: Mapping[str, Any] = field(default_factory=dict)

    @property
    def coordinate(self) -> Coordinate | None:
        if self.latitude is None or self.longitude is None:
            return None
        if not (math.isfinite(self.latitude) and math.isfinite(self.longitude)):
            return None
        return Coordinate(latitude=self.latitude, longitude=self.longitude)

    @classmethod
    def from_overpass_element(cls, element: Mapping[str, Any]) -> "PointOfInterest":
        """Parse one Overpass `elements[]` entry (`lat`, `lon`, optional `tags`)."""
        tags = element.get("tags")
        if not isinstance(tags, Mapping):
            tags = {}
        name = tags.get("name")
        return cls(
            name=str(name) if name is not None else None,
            latitude=_to_float(element.get("lat")),
            longitude=_to_float(element.get("lon")),
            tags=dict(tags),
        )


@dataclass(frozen=True)
class ServiceSummary:
    wifi: TriState = "Unknown"
    restaurant: TriState = "Unknown"
    parking: TriState = "Unknown"


@dataclass(frozen=True)
class HotelDisplayRecord:
    """Display-ready hotel with its distance from the request origin."""

    name: str
    coordinate: Coordinate
    distance_km: float
    services: ServiceSummary


def summarize_services(tags: Mapping[str, Any]) -> ServiceSummary:
    """Presence check per tracked amenity tag: truthy value -> "Yes", otherwise "Unknown"."""
    values: dict[str, TriState] = {
        service: "Yes" if tags.get(tag_key) else "Unknown" for service, tag_key in AMENITY_TAGS.items()
    }
    return ServiceSummary(**values)


def _display_name(name: str | None) -> str:
    if name and name.strip():
        return name
    return DEFAULT_HOTEL_NAME


def build_hotel_record(origin: Coordinate, poi: PointOfInterest) -> HotelDisplayRecord | None:
    """Build one display record, or return None when the POI lacks a usable coordinate."""
    target = poi.coordinate
    if target is None:
        return None
    return HotelDisplayRecord(
        name=_display_name(poi.name),
        coordinate=target,
        distance_km=distance_km(origin, target),
        services=summarize_services(poi.tags),
    )


def build_hotel_records(origin: Coordinate, pois: Iterable[PointOfInterest]) -> list[HotelDisplayRecord]:
    """Build records for every POI against a single origin, skipping malformed ones.

    Input order is preserved for the records that survive.
    """
    records: list[HotelDisplayRecord] = []
    skipped = 0
    for poi in pois:
        record = build_hotel_record(origin, poi)
        if record is None:
            skipped += 1
            continue
        records.append(record)
    if skipped:
        logger.debug("Skipped %d POIs without coordinates", skipped)
    return records
