"""
Overpass ingestion client (OpenStreetMap).

This module is responsible only for:
- building the Overpass QL query for lodging around a coordinate,
- posting it to the configured endpoints (first success wins),
- parsing the returned elements into `PointOfInterest` records.

Distance and amenity shaping live in `geolocate.hotels.records`.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from geolocate.config.settings import Settings
from geolocate.core.errors import ProviderUnavailable
from geolocate.core.http import post_text
from geolocate.hotels.records import PointOfInterest

logger = logging.getLogger(__name__)


def build_hotels_query(*, lat: float, lon: float, radius_m: int, tourism_types: list[str], timeout_seconds: int) -> str:
    """Return an Overpass QL query for tourism nodes of the given types within `radius_m`."""
    pattern = "|".join(tourism_types)
    return (
        f"[out:json][timeout:{timeout_seconds}];\n"
        "(\n"
        f'  node["tourism"~"{pattern}"](around:{radius_m},{lat},{lon});\n'
        ");\n"
        "out body;\n"
    )


class OverpassClient:
    """Queries Overpass endpoints in configured order and returns raw POIs."""

    def __init__(self, settings: Settings):
        self._settings = settings

    def _post_query(self, query: str) -> dict[str, Any]:
        cfg = self._settings.ingestion.overpass
        last_error: Exception | None = None
        for url in cfg.endpoints:
            try:
                payload = post_text(
                    url,
                    body=query,
                    headers={"User-Agent": cfg.user_agent},
                    timeout_seconds=self._settings.app.http_timeout_seconds,
                )
            except (httpx.HTTPError, ValueError) as e:
                logger.warning("Overpass endpoint failed url=%s error=%s: %s", url, type(e).__name__, e)
                last_error = e
                continue
            if not isinstance(payload, dict):
                logger.warning("Overpass endpoint returned non-object JSON url=%s", url)
                last_error = ValueError("Overpass response root is not an object")
                continue
            return payload

        raise ProviderUnavailable("Overpass service unavailable") from last_error

    def get_nearby_hotels(self, *, lat: float, lon: float) -> list[PointOfInterest]:
        """Return lodging POIs around (lat, lon); an empty list when none are found."""
        cfg = self._settings.ingestion.overpass
        query = build_hotels_query(
            lat=lat,
            lon=lon,
            radius_m=cfg.search_radius_m,
            tourism_types=cfg.tourism_types,
            timeout_seconds=cfg.query_timeout_seconds,
        )
        logger.info("Fetching hotels for lat=%.5f lon=%.5f radius_m=%d", lat, lon, cfg.search_radius_m)
        payload = self._post_query(query)

        elements = payload.get("elements") or []
        if not isinstance(elements, list) or not elements:
            logger.warning("No hotels found for location lat=%.5f lon=%.5f", lat, lon)
            return []

        logger.info("Overpass returned %d elements", len(elements))
        return [PointOfInterest.from_overpass_element(el) for el in elements if isinstance(el, dict)]
