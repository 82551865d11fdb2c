"""
Logging configuration.

`src/geolocate/config/logging.yaml` is the base config. The app level (settings
`app.log_level`, env `GEOLOCATE_LOG_LEVEL`) drives the root logger, every handler and the
`geolocate` logger. Third-party loggers listed under `loggers:` (httpx, uvicorn.access)
keep their YAML level unless the requested level is quieter, so turning the app up to
DEBUG does not also dump httpx request chatter.
"""

from __future__ import annotations

import copy
import logging
import logging.config
from typing import Any

from geolocate.config.settings import get_logging_config, get_settings

APP_LOGGER = "geolocate"


def _level_number(name: str) -> int:
    value = logging.getLevelName(name.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level {name!r}")
    return value


def build_logging_config(level: str) -> dict[str, Any]:
    """Return a `dictConfig` payload with `level` applied; the cached YAML is not mutated."""
    config = copy.deepcopy(get_logging_config())
    level = level.upper()
    wanted = _level_number(level)

    config.setdefault("root", {})["level"] = level
    for handler in config.get("handlers", {}).values():
        if isinstance(handler, dict):
            handler["level"] = level

    loggers = config.setdefault("loggers", {})
    loggers.setdefault(APP_LOGGER, {})["level"] = level
    for name, logger_cfg in loggers.items():
        if name == APP_LOGGER or not isinstance(logger_cfg, dict):
            continue
        configured = logger_cfg.get("level")
        if configured is None or _level_number(str(configured)) < wanted:
            logger_cfg["level"] = level

    return config


def configure_logging(level: str | None = None) -> None:
    """Configure the Python logging system; `level` defaults to `settings.app.log_level`."""
    logging.config.dictConfig(build_logging_config(level or get_settings().app.log_level))
