"""
Domain models (Pydantic).

These types represent the stable JSON "contract" between the backend and the web UI:
- query coordinates (`GeoPoint`)
- nearby hotels (`HotelOut`)
- current weather (`WeatherReport`)
- reverse-geocoded place names (`PlaceName`)

The hotel field names (`lat`, `lon`, `distance`) match what the browser script reads.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from geolocate.hotels.proximity import ProximityTier, classify_proximity
from geolocate.hotels.records import HotelDisplayRecord, TriState


class GeoPoint(BaseModel):
    """A geographic point in decimal degrees."""

    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)


class HotelServices(BaseModel):
    wifi: TriState = "Unknown"
    restaurant: TriState = "Unknown"
    parking: TriState = "Unknown"


class HotelOut(BaseModel):
    """One nearby hotel as returned by `/api/hotels`."""

    name: str
    lat: float
    lon: float
    distance: float = Field(..., ge=0, description="Great-circle distance from the origin in km (2 decimals).")
    tier: ProximityTier
    services: HotelServices

    @classmethod
    def from_record(cls, record: HotelDisplayRecord) -> "HotelOut":
        return cls(
            name=record.name,
            lat=record.coordinate.latitude,
            lon=record.coordinate.longitude,
            distance=record.distance_km,
            tier=classify_proximity(record.distance_km),
            services=HotelServices(
                wifi=record.services.wifi,
                restaurant=record.services.restaurant,
                parking=record.services.parking,
            ),
        )


class WeatherReport(BaseModel):
    """Current conditions plus the nearest forecast slot's rain probability."""

    temperature: float
    temp_min: float
    temp_max: float
    humidity: float
    wind_speed: float
    condition: str
    rain_probability: float = Field(0.0, ge=0, le=1)
    local_time: str


class PlaceName(BaseModel):
    """Administrative names for a coordinate; empty strings when unknown."""

    city: str = ""
    county: str = ""
    state: str = ""
    country: str = ""
