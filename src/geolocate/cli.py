"""
Geolocate CLI entrypoint.

Quick local lookups without the web UI, plus `serve` to run the API.
Provider logic lives in `geolocate.ingestion` and `geolocate.hotels`.
"""

from __future__ import annotations

import argparse
import json
import math
from dataclasses import asdict
from typing import Any

from geolocate.config.settings import get_settings
from geolocate.core.errors import GeolocateError
from geolocate.core.geo import Coordinate, distance_km
from geolocate.core.logging import configure_logging
from geolocate.hotels.nearby import find_nearby_hotels
from geolocate.hotels.proximity import InvalidDistance, classify_proximity
from geolocate.ingestion.geocoding_client import GeocodingClient
from geolocate.ingestion.overpass_client import OverpassClient
from geolocate.ingestion.weather_client import WeatherClient


def _finite_float(value: str) -> float:
    """argparse type: a finite decimal number (rejects nan and inf)."""
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from None
    if not math.isfinite(number):
        raise argparse.ArgumentTypeError(f"coordinate must be finite, got {value!r}")
    return number


def _cmd_hotels(args: argparse.Namespace) -> int:
    settings = get_settings()
    origin = Coordinate(latitude=args.lat, longitude=args.lon)
    records = find_nearby_hotels(origin, source=OverpassClient(settings))

    if args.json:
        print(json.dumps([asdict(r) for r in records], ensure_ascii=False, indent=2))
        return 0

    if not records:
        print("No nearby hotels found.")
        return 0

    for i, r in enumerate(records, start=1):
        tier = classify_proximity(r.distance_km).value
        s = r.services
        print(f"{i:>3}. {r.name}  {r.distance_km:.2f} km ({tier})")
        print(f"     wifi={s.wifi} restaurant={s.restaurant} parking={s.parking}")
    return 0


def _cmd_weather(args: argparse.Namespace) -> int:
    report = WeatherClient(get_settings()).get_report(lat=args.lat, lon=args.lon)
    if args.json:
        print(json.dumps(report.model_dump(mode="json"), ensure_ascii=False, indent=2))
        return 0

    print(f"Local time:  {report.local_time}")
    print(f"Condition:   {report.condition}")
    print(f"Temperature: {report.temperature} °C (min {report.temp_min}, max {report.temp_max})")
    print(f"Humidity:    {report.humidity}%")
    print(f"Wind speed:  {report.wind_speed} m/s")
    print(f"Rain:        {report.rain_probability * 100:.0f}%")
    return 0


def _cmd_place(args: argparse.Namespace) -> int:
    place = GeocodingClient(get_settings()).reverse(lat=args.lat, lon=args.lon)
    print(json.dumps(place.model_dump(mode="json"), ensure_ascii=False, indent=2))
    return 0


def _cmd_distance(args: argparse.Namespace) -> int:
    km = distance_km(Coordinate(args.lat1, args.lon1), Coordinate(args.lat2, args.lon2))
    print(f"{km:.2f} km ({classify_proximity(km).value})")
    return 0


def _cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "geolocate.api.app:app",
        host=args.host or settings.server.host,
        port=args.port or settings.server.port,
        reload=bool(args.reload),
    )
    return 0


def _add_coordinate_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--lat", required=True, type=_finite_float)
    p.add_argument("--lon", required=True, type=_finite_float)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the Geolocate CLI."""
    parser = argparse.ArgumentParser(prog="geolocate")
    sub = parser.add_subparsers(dest="command", required=True)

    hotels = sub.add_parser("hotels", help="List hotels near a coordinate (OpenStreetMap Overpass).")
    _add_coordinate_args(hotels)
    hotels.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    hotels.set_defaults(func=_cmd_hotels)

    weather = sub.add_parser("weather", help="Current weather for a coordinate (needs OPENWEATHER_API_KEY).")
    _add_coordinate_args(weather)
    weather.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    weather.set_defaults(func=_cmd_weather)

    place = sub.add_parser("place", help="Reverse-geocode a coordinate (OpenStreetMap Nominatim).")
    _add_coordinate_args(place)
    place.set_defaults(func=_cmd_place)

    dist = sub.add_parser("distance", help="Great-circle distance (km) and proximity tier between two points.")
    dist.add_argument("lat1", type=_finite_float)
    dist.add_argument("lon1", type=_finite_float)
    dist.add_argument("lat2", type=_finite_float)
    dist.add_argument("lon2", type=_finite_float)
    dist.set_defaults(func=_cmd_distance)

    serve = sub.add_parser("serve", help="Run the HTTP API and web UI.")
    serve.add_argument("--host", type=str, default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.add_argument("--reload", action="store_true")
    serve.set_defaults(func=_cmd_serve)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m geolocate.cli`."""
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    func: Any = getattr(args, "func")
    try:
        return int(func(args))
    except (GeolocateError, InvalidDistance) as e:
        print(f"error: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
