"""
Reverse geocoding client (OpenStreetMap Nominatim).

Lookups are best-effort: any provider failure yields an all-empty `PlaceName` so the
UI can still show coordinates.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from geolocate.config.settings import Settings
from geolocate.core.http import get_json
from geolocate.domain.models import PlaceName

logger = logging.getLogger(__name__)


def parse_place_name(payload: Any) -> PlaceName:
    address = payload.get("address") if isinstance(payload, dict) else None
    if not isinstance(address, dict):
        return PlaceName()
    return PlaceName(
        city=str(address.get("city") or address.get("town") or address.get("village") or ""),
        county=str(address.get("county") or ""),
        state=str(address.get("state") or ""),
        country=str(address.get("country") or ""),
    )


class GeocodingClient:
    def __init__(self, settings: Settings):
        self._settings = settings

    def reverse(self, *, lat: float, lon: float) -> PlaceName:
        cfg = self._settings.ingestion.geocoding
        # Nominatim usage policy expects a descriptive UA.
        try:
            payload = get_json(
                f"{cfg.base_url.rstrip('/')}/reverse",
                params={"lat": lat, "lon": lon, "format": "json"},
                headers={"User-Agent": cfg.user_agent},
                timeout_seconds=self._settings.app.http_timeout_seconds,
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Reverse geocoding failed lat=%.5f lon=%.5f: %s", lat, lon, e)
            return PlaceName()
        return parse_place_name(payload)
