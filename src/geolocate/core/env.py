"""
`.env` loading and config path resolution.

`OPENWEATHER_API_KEY` normally lives in a `.env` next to the project. `geolocate serve`
and uvicorn may be started from a subdirectory, so the file is searched for from the
working directory upwards. `GEOLOCATE_ENV_FILE` names the file explicitly.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

ENV_FILE_VAR = "GEOLOCATE_ENV_FILE"


def find_env_file() -> Path | None:
    """Return the `.env` to load, or None when there is none."""
    explicit = os.getenv(ENV_FILE_VAR)
    if explicit:
        path = Path(explicit).expanduser().resolve()
        return path if path.is_file() else None

    cwd = Path.cwd().resolve()
    for directory in (cwd, *cwd.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


@lru_cache
def load_dotenv_if_present() -> Path | None:
    """Load the `.env` file once; variables already in the environment win."""
    env_path = find_env_file()
    if env_path is not None:
        load_dotenv(dotenv_path=env_path, override=False)
    return env_path


def resolve_config_path(path: str | Path) -> Path:
    """Resolve `GEOLOCATE_CONFIG_PATH`; relative paths are taken from the `.env` directory if one was found."""
    p = Path(path).expanduser()
    if p.is_absolute():
        return p
    env_path = load_dotenv_if_present()
    base = env_path.parent if env_path is not None else Path.cwd()
    return (base / p).resolve()
