from starlette.testclient import TestClient

from geolocate.api.app import app
from geolocate.config.settings import Settings
from geolocate.core.errors import ProviderNotConfigured, ProviderUnavailable
from geolocate.domain.models import PlaceName, WeatherReport
from geolocate.hotels.records import PointOfInterest
from geolocate.ingestion.weather_client import WeatherClient


class _StubOverpassClient:
    def __init__(self, pois=None, error: Exception | None = None):
        self._pois = pois or []
        self._error = error
        self.calls: list[tuple[float, float]] = []

    def get_nearby_hotels(self, *, lat: float, lon: float):
        self.calls.append((lat, lon))
        if self._error is not None:
            raise self._error
        return self._pois


class _StubWeatherClient:
    def get_report(self, *, lat: float, lon: float) -> WeatherReport:
        return WeatherReport(
            temperature=21.5,
            temp_min=19.0,
            temp_max=23.0,
            humidity=55,
            wind_speed=3.2,
            condition="clear sky",
            rain_probability=0.1,
            local_time="14:05:00",
        )


class _FailingWeatherClient:
    def get_report(self, *, lat: float, lon: float):
        raise ProviderUnavailable("Weather service unavailable")


class _BrokenWeatherClient:
    def get_report(self, *, lat: float, lon: float):
        raise AttributeError("'list' object has no attribute 'get'")


class _StubGeocodingClient:
    def reverse(self, *, lat: float, lon: float) -> PlaceName:
        return PlaceName(city="Lyon", county="Rhône", state="Auvergne-Rhône-Alpes", country="France")


def _patch_clients(monkeypatch, overpass=None, weather=None, geocoding=None):
    # Patch the cached clients factory so API tests stay offline.
    import geolocate.api.routes as routes

    clients = (
        overpass or _StubOverpassClient(),
        weather or _StubWeatherClient(),
        geocoding or _StubGeocodingClient(),
    )
    monkeypatch.setattr(routes, "_clients", lambda: clients)
    return clients


def test_health():
    with TestClient(app) as c:
        resp = c.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_index_serves_dashboard():
    with TestClient(app) as c:
        resp = c.get("/")
    assert resp.status_code == 200
    assert 'id="hotelsBtn"' in resp.text


def test_hotels_returns_display_records(monkeypatch):
    overpass = _StubOverpassClient(
        pois=[
            PointOfInterest(name="A", latitude=10.0, longitude=10.0, tags={}),
            PointOfInterest(name=None, latitude=None, longitude=10.0, tags={}),
            PointOfInterest(name="", latitude=10.01, longitude=10.0, tags={"restaurant": "yes"}),
        ]
    )
    _patch_clients(monkeypatch, overpass=overpass)

    with TestClient(app) as c:
        resp = c.get("/api/hotels", params={"lat": "10", "lon": "10"})

    assert resp.status_code == 200
    data = resp.json()
    assert overpass.calls == [(10.0, 10.0)]
    assert len(data) == 2
    assert data[0] == {
        "name": "A",
        "lat": 10.0,
        "lon": 10.0,
        "distance": 0.0,
        "tier": "near",
        "services": {"wifi": "Unknown", "restaurant": "Unknown", "parking": "Unknown"},
    }
    assert data[1]["name"] == "Unnamed Hotel"
    assert data[1]["distance"] == 1.11
    assert data[1]["services"]["restaurant"] == "Yes"


def test_hotels_skips_elements_with_non_finite_coordinates(monkeypatch):
    elements = [
        {"type": "node", "lat": 10, "lon": 10, "tags": {"name": "Good"}},
        {"type": "node", "lat": "nan", "lon": 10, "tags": {"name": "Bad"}},
    ]
    overpass = _StubOverpassClient(pois=[PointOfInterest.from_overpass_element(el) for el in elements])
    _patch_clients(monkeypatch, overpass=overpass)

    with TestClient(app) as c:
        resp = c.get("/api/hotels", params={"lat": "10", "lon": "10"})

    assert resp.status_code == 200
    assert [h["name"] for h in resp.json()] == ["Good"]


def test_hotels_empty_result(monkeypatch):
    _patch_clients(monkeypatch, overpass=_StubOverpassClient(pois=[]))
    with TestClient(app) as c:
        resp = c.get("/api/hotels", params={"lat": "1", "lon": "2"})
    assert resp.status_code == 200
    assert resp.json() == []


def test_hotels_requires_coordinates(monkeypatch):
    _patch_clients(monkeypatch)
    with TestClient(app) as c:
        missing = c.get("/api/hotels", params={"lat": "10"})
        garbage = c.get("/api/hotels", params={"lat": "north", "lon": "10"})
    assert missing.status_code == 400
    assert missing.json() == {"error": "Coordinates required"}
    assert garbage.status_code == 400


def test_hotels_upstream_failure(monkeypatch):
    _patch_clients(monkeypatch, overpass=_StubOverpassClient(error=ProviderUnavailable("down")))
    with TestClient(app) as c:
        resp = c.get("/api/hotels", params={"lat": "1", "lon": "2"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Overpass service unavailable"}


def test_hotels_unexpected_failure(monkeypatch):
    _patch_clients(monkeypatch, overpass=_StubOverpassClient(error=RuntimeError("boom")))
    with TestClient(app) as c:
        resp = c.get("/api/hotels", params={"lat": "1", "lon": "2"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Unable to retrieve nearby hotels"}


def test_weather_returns_report(monkeypatch):
    _patch_clients(monkeypatch)
    with TestClient(app) as c:
        resp = c.get("/api/weather", params={"lat": "45.76", "lon": "4.83"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["condition"] == "clear sky"
    assert data["rain_probability"] == 0.1
    assert data["local_time"] == "14:05:00"


def test_weather_requires_coordinates(monkeypatch):
    _patch_clients(monkeypatch)
    with TestClient(app) as c:
        resp = c.get("/api/weather", params={"lon": "4.83"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Latitude and Longitude required"}


def test_weather_without_api_key(monkeypatch):
    _patch_clients(monkeypatch, weather=WeatherClient(Settings()))
    with TestClient(app) as c:
        resp = c.get("/api/weather", params={"lat": "1", "lon": "2"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Weather API key not configured"}


def test_weather_upstream_failure(monkeypatch):
    _patch_clients(monkeypatch, weather=_FailingWeatherClient())
    with TestClient(app) as c:
        resp = c.get("/api/weather", params={"lat": "1", "lon": "2"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Weather service unavailable"}


def test_place_returns_names(monkeypatch):
    _patch_clients(monkeypatch)
    with TestClient(app) as c:
        resp = c.get("/api/place", params={"lat": "45.76", "lon": "4.83"})
    assert resp.status_code == 200
    assert resp.json()["city"] == "Lyon"


def test_weather_non_object_forecast_returns_json_error(monkeypatch):
    current = {
        "dt": 1700000000,
        "timezone": 0,
        "main": {"temp": 1.0, "temp_min": 0.0, "temp_max": 2.0, "humidity": 90},
        "wind": {"speed": 1.0},
        "weather": [{"description": "fog"}],
    }
    settings = Settings()
    weather = settings.ingestion.weather.model_copy(update={"api_key": "k"})
    settings = settings.model_copy(update={"ingestion": settings.ingestion.model_copy(update={"weather": weather})})
    monkeypatch.setattr(
        "geolocate.ingestion.weather_client.get_json",
        lambda url, **_kwargs: current if url.endswith("/weather") else [],
    )
    _patch_clients(monkeypatch, weather=WeatherClient(settings))

    with TestClient(app) as c:
        resp = c.get("/api/weather", params={"lat": "1", "lon": "2"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Weather service unavailable"}


def test_weather_unexpected_failure_returns_json_error(monkeypatch):
    _patch_clients(monkeypatch, weather=_BrokenWeatherClient())
    with TestClient(app) as c:
        resp = c.get("/api/weather", params={"lat": "1", "lon": "2"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Weather service unavailable"}
