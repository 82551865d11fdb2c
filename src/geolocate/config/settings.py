# src/geolocate/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/geolocate/config/defaults.yaml`, then optionally overridden by:
- environment variables (e.g., `OPENWEATHER_API_KEY`, `GEOLOCATE_OVERPASS_URLS`)
- an external YAML file via `GEOLOCATE_CONFIG_PATH`

Design rule:
- Provider endpoints and search knobs live in YAML, not hard-coded in client code.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from geolocate.core.env import load_dotenv_if_present, resolve_config_path


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `geolocate.config`."""
    text = resources.files("geolocate.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(resolve_config_path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "Geolocate"
    http_timeout_seconds: float = 15
    log_level: str = "INFO"
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class OverpassSettings(BaseModel):
    # Tried in order; the first endpoint that answers wins.
    endpoints: list[str] = Field(default_factory=lambda: ["https://overpass-api.de/api/interpreter"])
    search_radius_m: int = Field(3000, gt=0)
    query_timeout_seconds: int = Field(25, gt=0)
    tourism_types: list[str] = Field(default_factory=lambda: ["hotel", "guest_house", "hostel"])
    user_agent: str = "Geolocate-GIS-App"


class WeatherSettings(BaseModel):
    base_url: str = "https://api.openweathermap.org/data/2.5"
    units: str = "metric"
    api_key: str | None = None


class GeocodingSettings(BaseModel):
    base_url: str = "https://nominatim.openstreetmap.org"
    user_agent: str = "Geolocate-GIS-App"


class IngestionSettings(BaseModel):
    overpass: OverpassSettings = Field(default_factory=OverpassSettings)
    weather: WeatherSettings = Field(default_factory=WeatherSettings)
    geocoding: GeocodingSettings = Field(default_factory=GeocodingSettings)


class ServerSettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = 3000


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    ingestion: IngestionSettings = Field(default_factory=IngestionSettings)


def _split_csv(value: str) -> list[str]:
    return [s.strip() for s in value.split(",") if s.strip()]


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload.

    Note: We intentionally keep this whitelist small.
    """
    load_dotenv_if_present()
    data = dict(data)

    log_level = os.getenv("GEOLOCATE_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    cors = os.getenv("GEOLOCATE_CORS_ORIGINS")
    if cors:
        data.setdefault("app", {})["cors_origins"] = _split_csv(cors)

    api_key = os.getenv("OPENWEATHER_API_KEY")
    if api_key:
        data.setdefault("ingestion", {}).setdefault("weather", {})["api_key"] = api_key

    overpass_urls = os.getenv("GEOLOCATE_OVERPASS_URLS")
    if overpass_urls and _split_csv(overpass_urls):
        data.setdefault("ingestion", {}).setdefault("overpass", {})["endpoints"] = _split_csv(overpass_urls)

    port = os.getenv("PORT")
    if port:
        data.setdefault("server", {})["port"] = int(port)

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("GEOLOCATE_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
