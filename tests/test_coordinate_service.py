import pytest

from radius_map.api.errors import GeolocationFailed, GeolocationUnavailable
from radius_map.api.models import Point
from radius_map.api.services.coordinate_service import CoordinateService


def test_device_position_from_browser_coords():
    payload = {"coords": {"latitude": 51.5074, "longitude": -0.1278}}
    assert CoordinateService.from_device(payload) == Point(51.5074, -0.1278)


def test_device_position_accepts_plain_lat_lng():
    assert CoordinateService.from_device({"lat": "10.5", "lng": 20}) == Point(10.5, 20.0)


@pytest.mark.parametrize("payload", [None, {}, {"supported": False}])
def test_missing_geolocation_is_unavailable(payload):
    with pytest.raises(GeolocationUnavailable) as exc:
        CoordinateService.from_device(payload)
    assert exc.value.message == "Geolocation is not supported by your browser"


def test_denied_geolocation_reports_browser_message():
    payload = {"error": {"code": 1, "message": "User denied Geolocation"}}
    with pytest.raises(GeolocationFailed) as exc:
        CoordinateService.from_device(payload)
    assert exc.value.message == "Error getting location: User denied Geolocation"


def test_geolocation_error_code_without_message():
    with pytest.raises(GeolocationFailed) as exc:
        CoordinateService.from_device({"error": {"code": 3}})
    assert exc.value.reason == "Timeout expired"


@pytest.mark.parametrize("payload", [
    {"coords": {"latitude": 100, "longitude": 0}},
    {"coords": {"latitude": None, "longitude": 0}},
])
def test_bad_device_position_fails(payload):
    with pytest.raises(GeolocationFailed):
        CoordinateService.from_device(payload)


def test_address_resolves_through_geocoder(fake_geocoder):
    assert CoordinateService.from_address("Brooklyn Bridge") == Point(40.706086, -73.996864)


@pytest.mark.parametrize("payload", ["denied", ["lat", "lng"], {"coords": [51.5, -0.12]}])
def test_non_object_position_fails(payload):
    with pytest.raises(GeolocationFailed) as exc:
        CoordinateService.from_device(payload)
    assert exc.value.reason == "malformed position"
