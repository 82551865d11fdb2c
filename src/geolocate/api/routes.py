"""
API routes.

Endpoints:
- GET `/api/weather`: current weather for a coordinate (OpenWeatherMap proxy).
- GET `/api/hotels`: nearby hotels with distance + amenity summary (Overpass proxy).
- GET `/api/place`: reverse-geocoded place names (Nominatim proxy).
- GET `/api/health`: liveness check.

Errors are returned as `{"error": "<message>"}`, the shape the web UI expects.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from geolocate.config.settings import get_settings
from geolocate.core.errors import ProviderNotConfigured, ProviderUnavailable
from geolocate.core.geo import Coordinate
from geolocate.domain.models import GeoPoint, HotelOut, PlaceName, WeatherReport
from geolocate.hotels.nearby import find_nearby_hotels
from geolocate.ingestion.geocoding_client import GeocodingClient
from geolocate.ingestion.overpass_client import OverpassClient
from geolocate.ingestion.weather_client import WeatherClient

logger = logging.getLogger(__name__)

router = APIRouter()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _parse_point(lat: str | None, lon: str | None) -> GeoPoint | None:
    """Validate raw query values; None when missing, non-numeric or out of range."""
    if not lat or not lon:
        return None
    try:
        return GeoPoint(lat=lat, lon=lon)
    except ValidationError:
        return None


@lru_cache
def _clients() -> tuple[OverpassClient, WeatherClient, GeocodingClient]:
    settings = get_settings()
    return OverpassClient(settings), WeatherClient(settings), GeocodingClient(settings)


@router.get("/api/health")
def get_health() -> dict:
    return {"status": "ok", "message": "Geolocate GIS Backend is running."}


@router.get("/api/weather", response_model=WeatherReport)
def get_weather(lat: str | None = None, lon: str | None = None):
    """Return current weather conditions for the given coordinate."""
    point = _parse_point(lat, lon)
    if point is None:
        return _error(400, "Latitude and Longitude required")

    _, weather_client, _ = _clients()
    try:
        return weather_client.get_report(lat=point.lat, lon=point.lon)
    except ProviderNotConfigured as e:
        logger.error("Weather request rejected: %s", e)
        return _error(500, "Weather API key not configured")
    except ProviderUnavailable:
        logger.exception("Weather API error")
        return _error(500, "Weather service unavailable")
    except Exception:
        logger.exception("Weather API failure")
        return _error(500, "Weather service unavailable")


@router.get("/api/hotels", response_model=list[HotelOut])
def get_hotels(lat: str | None = None, lon: str | None = None):
    """Return hotels near the given coordinate, in provider order."""
    logger.info("Received coordinates: %s %s", lat, lon)
    point = _parse_point(lat, lon)
    if point is None:
        return _error(400, "Coordinates required")

    overpass_client, _, _ = _clients()
    try:
        records = find_nearby_hotels(Coordinate(latitude=point.lat, longitude=point.lon), source=overpass_client)
        return [HotelOut.from_record(r) for r in records]
    except ProviderUnavailable:
        logger.exception("Overpass request failed")
        return _error(500, "Overpass service unavailable")
    except Exception:
        logger.exception("Hotels API failure")
        return _error(500, "Unable to retrieve nearby hotels")


@router.get("/api/place", response_model=PlaceName)
def get_place(lat: str | None = None, lon: str | None = None):
    """Return city/county/state/country for the given coordinate (blank when unknown)."""
    point = _parse_point(lat, lon)
    if point is None:
        return _error(400, "Coordinates required")

    _, _, geocoding_client = _clients()
    return geocoding_client.reverse(lat=point.lat, lon=point.lon)
