# src/geolocate/api/app.py
"""
FastAPI application wiring.

This file creates the `FastAPI` instance, mounts static assets, and serves the web UI.
Provider proxying lives in `geolocate.api.routes`.
"""

from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.middleware.cors import CORSMiddleware

from geolocate import __version__
from geolocate.config.settings import get_settings
from geolocate.core.logging import configure_logging

from .routes import router

configure_logging()

app = FastAPI(title="Geolocate API", version=__version__)

# The UI may be hosted separately from the API, so CORS defaults to any origin.
# Configure via env: GEOLOCATE_CORS_ORIGINS="https://example.org,http://localhost:8080"
cors_origins = get_settings().app.cors_origins
if cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(router)

BASE_DIR = Path(__file__).resolve().parent.parent
TEMPLATES_DIR = BASE_DIR / "web" / "templates"
STATIC_DIR = BASE_DIR / "web" / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")


@app.get("/", response_class=HTMLResponse)
def index(request: Request) -> HTMLResponse:
    """Serve the dashboard page."""
    return templates.TemplateResponse(request, "index.html", {"app_name": get_settings().app.name})
