# radius_map/api/config.py
"""Configuration management for the radius map service."""
import os
from dotenv import load_dotenv

from radius_map.api.models import normalize_unit

load_dotenv()

OSM_TILE_URL = "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"
OSM_ATTRIBUTION = '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors'


def get_google_maps_config():
    """Get Google Maps geocoding configuration."""
    return {
        "api_key": os.getenv("GOOGLE_MAPS_API_KEY", ""),
        "region": os.getenv("GEOCODING_REGION", ""),
        "language": os.getenv("GEOCODING_LANGUAGE", "en"),
    }


def get_port():
    """Get port configuration."""
    return int(os.getenv("PORT", 5000))


def get_map_config():
    """Get map view policy handed to the browser renderer.

    Padding and max zoom are rendering policy: the geometry engine only
    produces a bounding box, the page decides how to fit it.
    """
    return {
        "default_center": {
            "lat": float(os.getenv("MAP_DEFAULT_LAT", "40.7128")),
            "lng": float(os.getenv("MAP_DEFAULT_LNG", "-74.006")),
        },
        "default_zoom": int(os.getenv("MAP_DEFAULT_ZOOM", "13")),
        "fit_padding": int(os.getenv("MAP_FIT_PADDING", "50")),
        "max_zoom": int(os.getenv("MAP_MAX_ZOOM", "18")),
        "tile_url": os.getenv("MAP_TILE_URL", OSM_TILE_URL),
        "tile_attribution": os.getenv("MAP_TILE_ATTRIBUTION", OSM_ATTRIBUTION),
        "default_radius": float(os.getenv("DEFAULT_RADIUS", "5")),
        "default_unit": normalize_unit(os.getenv("DEFAULT_UNIT", "miles")),
    }


def get_websocket_config():
    """Get WebSocket configuration."""
    return {
        "ping_interval": int(os.getenv("WEBSOCKET_PING_INTERVAL", "25")),
        "ping_timeout": int(os.getenv("WEBSOCKET_PING_TIMEOUT", "60")),
        "cors_allowed_origins": os.getenv("WEBSOCKET_CORS_ORIGINS", "*").split(","),
    }


def validate_map_config():
    """Validate map configuration values are usable."""
    cfg = get_map_config()

    if cfg["fit_padding"] < 0:
        raise ValueError("MAP_FIT_PADDING must not be negative")

    if not 0 <= cfg["max_zoom"] <= 22:
        raise ValueError("MAP_MAX_ZOOM must be between 0 and 22")

    if cfg["default_radius"] <= 0:
        raise ValueError("DEFAULT_RADIUS must be greater than zero")

    center = cfg["default_center"]
    if not (-90 <= center["lat"] <= 90 and -180 <= center["lng"] <= 180):
        raise ValueError("MAP_DEFAULT_LAT/MAP_DEFAULT_LNG out of range")

    return True
