# radius_map/api/services/coordinate_service.py
"""Service layer for turning user actions into coordinates."""

import logging
from typing import Any, Dict, Optional

from radius_map.api.errors import GeolocationFailed, GeolocationUnavailable
from radius_map.api.geocoding import geocode_address
from radius_map.api.models import Point, validate_coordinates

logger = logging.getLogger(__name__)

# W3C GeolocationPositionError codes
_GEOLOCATION_ERROR_CODES = {
    1: "User denied Geolocation",
    2: "Position unavailable",
    3: "Timeout expired",
}


class CoordinateService:
    """One-shot coordinate providers: device position and address lookup."""

    @staticmethod
    def from_device(payload: Optional[Dict[str, Any]]) -> Point:
        """Read the result of the browser's geolocation request.

        The page calls ``navigator.geolocation.getCurrentPosition`` and
        posts either the position, the error, or ``{"supported": false}``.

        Args:
            payload: Position payload posted by the browser

        Returns:
            The device position

        Raises:
            GeolocationUnavailable: If the browser has no geolocation
            GeolocationFailed: If the request was denied or failed
        """
        if payload is not None and not isinstance(payload, dict):
            raise GeolocationFailed("malformed position")
        if not payload or payload.get("supported") is False:
            raise GeolocationUnavailable()

        error = payload.get("error")
        if error:
            if isinstance(error, dict):
                reason = error.get("message") or _GEOLOCATION_ERROR_CODES.get(error.get("code"))
            else:
                reason = str(error)
            logger.warning(f"Device geolocation failed: {reason}")
            raise GeolocationFailed(reason)

        coords = payload.get("coords") or payload
        if not isinstance(coords, dict):
            raise GeolocationFailed("malformed position")
        lat = coords.get("latitude", coords.get("lat"))
        lng = coords.get("longitude", coords.get("lng"))

        try:
            lat, lng = float(lat), float(lng)
        except (TypeError, ValueError):
            raise GeolocationFailed("position missing coordinates")

        if not validate_coordinates(lat, lng):
            raise GeolocationFailed("position out of range")

        logger.debug(f"Device position {lat}, {lng}")
        return Point(lat, lng)

    @staticmethod
    def from_address(address: Optional[str]) -> Point:
        """Resolve a free-text address through the geocoder.

        Raises:
            AddressRequired: If the address is blank
            AddressNotFound: If the geocoder has no match
            AddressLookupFailed: If the geocoder could not be reached
        """
        lat, lng = geocode_address(address)
        logger.info(f"Resolved address '{address}' to {lat}, {lng}")
        return Point(lat, lng)


__all__ = ["CoordinateService"]
