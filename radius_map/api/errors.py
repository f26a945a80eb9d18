# radius_map/api/errors.py
"""Recoverable coordinate-lookup errors.

Each error carries the message shown to the user; none of them should
take the process down.
"""


class CoordinateLookupError(LookupError):
    """Base class for failures of a coordinate provider."""

    status_code = 400
    default_message = "Could not determine a location."

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def kind(self):
        return type(self).__name__

    def to_dict(self):
        return {"error": self.message, "kind": self.kind}


class GeolocationUnavailable(CoordinateLookupError):
    default_message = "Geolocation is not supported by your browser"


class GeolocationFailed(CoordinateLookupError):
    """Device position request was denied, timed out or otherwise failed."""

    def __init__(self, reason=None):
        self.reason = reason or "unknown error"
        super().__init__(f"Error getting location: {self.reason}")


class AddressRequired(CoordinateLookupError):
    default_message = "Please enter an address"


class AddressNotFound(CoordinateLookupError):
    status_code = 404
    default_message = "Address not found. Please try a different search."


class AddressLookupFailed(CoordinateLookupError):
    status_code = 502
    default_message = "Error searching for address. Please try again."


__all__ = [
    "CoordinateLookupError",
    "GeolocationUnavailable",
    "GeolocationFailed",
    "AddressRequired",
    "AddressNotFound",
    "AddressLookupFailed",
]
