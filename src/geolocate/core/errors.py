"""
Error types shared across layers.

Provider clients raise these so the API/CLI can map failures to stable messages
without depending on httpx exception classes.
"""

from __future__ import annotations


class GeolocateError(Exception):
    """Base class for application errors."""


class ProviderNotConfigured(GeolocateError):
    """A third-party provider is missing required configuration (e.g. an API key)."""


class ProviderUnavailable(GeolocateError):
    """A third-party provider could not be reached or returned an unusable response."""
