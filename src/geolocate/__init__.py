"""Geolocate: nearby hotels, weather and place lookup for a coordinate."""

__version__ = "0.1.0"
