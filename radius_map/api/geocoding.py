# radius_map/api/geocoding.py
from __future__ import annotations

import logging
import time
from functools import lru_cache

import googlemaps
from googlemaps import exceptions as gmaps_exceptions

from radius_map.api.config import get_google_maps_config
from radius_map.api.errors import AddressLookupFailed, AddressNotFound, AddressRequired

logger = logging.getLogger(__name__)

_gmaps: googlemaps.Client | None = None

# Network and service failures from the googlemaps client
_LOOKUP_ERRORS = (
    gmaps_exceptions.ApiError,
    gmaps_exceptions.TransportError,
    gmaps_exceptions.Timeout,
)


def _get_client() -> googlemaps.Client:
    """Return a cached googlemaps.Client instance.

    Raises:
        AddressLookupFailed: If no usable API key is configured
    """
    global _gmaps
    if _gmaps is None:
        cfg = get_google_maps_config()
        api_key = cfg.get("api_key", "")
        if not api_key:
            logger.error("No Google Maps API key found in config")
            raise AddressLookupFailed()
        try:
            logger.info(f"Initializing Google Maps client with key: {api_key[:6]}...")
            _gmaps = googlemaps.Client(key=api_key)
        except ValueError as e:
            logger.error(f"Failed to initialize Google Maps client: {e}")
            raise AddressLookupFailed() from e
    return _gmaps


def reset_client() -> None:
    """Forget the cached client and cached lookups (used after config changes)."""
    global _gmaps
    _gmaps = None
    get_coordinates_for_address.cache_clear()


def normalize_address(address: str | None) -> str:
    """Collapse whitespace; raise AddressRequired for blank input."""
    text = " ".join((address or "").split())
    if not text:
        raise AddressRequired()
    return text


@lru_cache(maxsize=1000)
def get_coordinates_for_address(address: str) -> tuple[float, float]:
    """Resolve a free-text address to ``(lat, lng)`` using the first match.

    Only successful lookups are cached; failures raise and are retried
    on the next call.

    Raises:
        AddressNotFound: If the geocoder returns no match
        AddressLookupFailed: On network, quota or configuration failures
    """
    client = _get_client()
    cfg = get_google_maps_config()

    logger.debug(f"Geocoding address: {address}")
    start_time = time.time()
    try:
        kwargs = {"language": cfg.get("language") or "en"}
        if cfg.get("region"):
            kwargs["region"] = cfg["region"]
        results = client.geocode(address, **kwargs)
    except _LOOKUP_ERRORS as e:
        logger.error(f"Geocoding error for '{address}': {e}")
        raise AddressLookupFailed() from e

    if not results:
        logger.warning(f"No results found for address: {address}")
        raise AddressNotFound()

    loc = results[0]["geometry"]["location"]
    duration = time.time() - start_time
    logger.debug(f"Geocoded {address} to {loc['lat']}, {loc['lng']} in {duration:.2f}s")
    return float(loc["lat"]), float(loc["lng"])


def geocode_address(address: str | None) -> tuple[float, float]:
    """Normalise ``address`` and resolve it, sharing the lookup cache."""
    return get_coordinates_for_address(normalize_address(address))


# Re-export for clean imports elsewhere
__all__ = [
    "get_coordinates_for_address",
    "geocode_address",
    "normalize_address",
    "reset_client",
]
