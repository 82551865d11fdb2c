from __future__ import annotations

import pytest

from geolocate.config.settings import get_logging_config, get_settings


@pytest.fixture
def fresh_settings():
    # get_settings is lru_cached; clear around each test so env overrides take effect.
    get_settings.cache_clear()
    yield get_settings
    get_settings.cache_clear()


def test_packaged_defaults_load(fresh_settings, monkeypatch):
    monkeypatch.delenv("GEOLOCATE_OVERPASS_URLS", raising=False)
    monkeypatch.delenv("GEOLOCATE_CONFIG_PATH", raising=False)
    settings = fresh_settings()

    overpass = settings.ingestion.overpass
    assert overpass.endpoints[0] == "https://overpass-api.de/api/interpreter"
    assert len(overpass.endpoints) == 4
    assert overpass.search_radius_m == 3000
    assert overpass.tourism_types == ["hotel", "guest_house", "hostel"]
    assert settings.ingestion.weather.units == "metric"


def test_env_overrides_api_key_log_level_and_endpoints(fresh_settings, monkeypatch):
    monkeypatch.delenv("GEOLOCATE_CONFIG_PATH", raising=False)
    monkeypatch.setenv("OPENWEATHER_API_KEY", "abc123")
    monkeypatch.setenv("GEOLOCATE_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("GEOLOCATE_OVERPASS_URLS", " https://one.test/api , https://two.test/api ,")

    settings = fresh_settings()

    assert settings.ingestion.weather.api_key == "abc123"
    assert settings.app.log_level == "DEBUG"
    assert settings.ingestion.overpass.endpoints == ["https://one.test/api", "https://two.test/api"]


def test_external_config_path_replaces_defaults(fresh_settings, monkeypatch, tmp_path):
    cfg = tmp_path / "geolocate.yaml"
    cfg.write_text("ingestion:\n  overpass:\n    search_radius_m: 1500\n", encoding="utf-8")
    monkeypatch.setenv("GEOLOCATE_CONFIG_PATH", str(cfg))
    monkeypatch.delenv("GEOLOCATE_OVERPASS_URLS", raising=False)

    settings = fresh_settings()

    assert settings.ingestion.overpass.search_radius_m == 1500
    assert settings.ingestion.overpass.endpoints == ["https://overpass-api.de/api/interpreter"]


def test_non_mapping_config_is_rejected(fresh_settings, monkeypatch, tmp_path):
    cfg = tmp_path / "bad.yaml"
    cfg.write_text("- just\n- a list\n", encoding="utf-8")
    monkeypatch.setenv("GEOLOCATE_CONFIG_PATH", str(cfg))

    with pytest.raises(ValueError, match="expected a mapping"):
        fresh_settings()


def test_logging_config_has_console_handler():
    config = get_logging_config()
    assert "console" in config["handlers"]


def test_api_key_is_read_from_env_file(fresh_settings, monkeypatch, tmp_path):
    import os

    from geolocate.core.env import load_dotenv_if_present

    env_file = tmp_path / "geolocate.env"
    env_file.write_text("OPENWEATHER_API_KEY=from-dotenv\n", encoding="utf-8")
    monkeypatch.setenv("GEOLOCATE_ENV_FILE", str(env_file))
    monkeypatch.delenv("GEOLOCATE_CONFIG_PATH", raising=False)
    saved_key = os.environ.pop("OPENWEATHER_API_KEY", None)
    load_dotenv_if_present.cache_clear()
    try:
        assert fresh_settings().ingestion.weather.api_key == "from-dotenv"
    finally:
        os.environ.pop("OPENWEATHER_API_KEY", None)
        if saved_key is not None:
            os.environ["OPENWEATHER_API_KEY"] = saved_key
        load_dotenv_if_present.cache_clear()


def test_relative_config_path_resolves_next_to_env_file(fresh_settings, monkeypatch, tmp_path):
    from geolocate.core.env import load_dotenv_if_present

    (tmp_path / ".env").write_text("", encoding="utf-8")
    (tmp_path / "local.yaml").write_text("app:\n  name: Local\n", encoding="utf-8")
    monkeypatch.setenv("GEOLOCATE_ENV_FILE", str(tmp_path / ".env"))
    monkeypatch.setenv("GEOLOCATE_CONFIG_PATH", "local.yaml")
    load_dotenv_if_present.cache_clear()
    try:
        assert fresh_settings().app.name == "Local"
    finally:
        load_dotenv_if_present.cache_clear()
