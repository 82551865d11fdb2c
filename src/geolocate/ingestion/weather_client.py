"""
Weather ingestion client (OpenWeatherMap).

Fetches the current conditions and the 5-day/3-hour forecast for a coordinate and
reshapes them into a `WeatherReport`:
- temperatures, humidity, wind and a text condition from the current endpoint
- rain probability (`pop`) from the first forecast slot
- the location's local wall-clock time, using the provider's UTC offset
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import httpx

from geolocate.config.settings import Settings
from geolocate.core.errors import ProviderNotConfigured, ProviderUnavailable
from geolocate.core.http import get_json
from geolocate.domain.models import WeatherReport

logger = logging.getLogger(__name__)


def local_time_string(unix_seconds: int, utc_offset_seconds: int) -> str:
    """Render `unix_seconds` shifted by `utc_offset_seconds` as HH:MM:SS."""
    shifted = datetime.fromtimestamp(int(unix_seconds) + int(utc_offset_seconds), tz=timezone.utc)
    return shifted.strftime("%H:%M:%S")


def parse_weather_report(current: dict[str, Any], forecast: dict[str, Any]) -> WeatherReport:
    """Combine raw current + forecast payloads into a `WeatherReport`.

    Raises:
        KeyError, IndexError, TypeError: If a payload is not an object or lacks required fields.
    """
    if not isinstance(current, dict) or not isinstance(forecast, dict):
        raise TypeError("weather payloads must be JSON objects")
    main = current["main"]
    slots = forecast.get("list")
    slots = slots if isinstance(slots, list) else []
    first_slot = slots[0] if slots and isinstance(slots[0], dict) else {}

    return WeatherReport(
        temperature=main["temp"],
        temp_min=main["temp_min"],
        temp_max=main["temp_max"],
        humidity=main["humidity"],
        wind_speed=current["wind"]["speed"],
        condition=current["weather"][0]["description"],
        rain_probability=first_slot.get("pop") or 0,
        local_time=local_time_string(current["dt"], current.get("timezone") or 0),
    )


class WeatherClient:
    """Fetches OpenWeatherMap data and reshapes it into `WeatherReport`."""

    def __init__(self, settings: Settings):
        self._settings = settings

    def _fetch(self, endpoint: str, *, lat: float, lon: float, api_key: str) -> dict[str, Any]:
        cfg = self._settings.ingestion.weather
        params = {"lat": lat, "lon": lon, "units": cfg.units, "appid": api_key}
        return get_json(
            f"{cfg.base_url.rstrip('/')}/{endpoint}",
            params=params,
            timeout_seconds=self._settings.app.http_timeout_seconds,
        )

    def get_report(self, *, lat: float, lon: float) -> WeatherReport:
        """Return current weather for (lat, lon)."""
        api_key = self._settings.ingestion.weather.api_key
        if not api_key:
            raise ProviderNotConfigured("Weather API key not configured")

        logger.info("Fetching weather for lat=%.4f lon=%.4f", lat, lon)
        try:
            current = self._fetch("weather", lat=lat, lon=lon, api_key=api_key)
            forecast = self._fetch("forecast", lat=lat, lon=lon, api_key=api_key)
            return parse_weather_report(current, forecast)
        except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
            raise ProviderUnavailable("Weather service unavailable") from e
