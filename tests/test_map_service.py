import pytest

from radius_map.api.geometry import METERS_PER_DEGREE
from radius_map.api.models import Circle
from radius_map.api.services.map_service import MapService


def test_build_view_for_empty_set_keeps_previous_view():
    view = MapService.build_view([])
    assert view == {"circles": [], "intersections": [], "bounds": None, "fit": None}


def test_build_view_lists_only_crossing_pairs():
    a = Circle(lat=0, lng=0, radius=1, unit="km")
    b = Circle(lat=0, lng=1500 / METERS_PER_DEGREE, radius=1, unit="km")
    far = Circle(lat=10, lng=10, radius=1, unit="km")

    view = MapService.build_view([a, b, far])

    assert len(view["circles"]) == 3
    assert len(view["intersections"]) == 1
    assert view["intersections"][0]["circles"] == [a.id, b.id]
    assert len(view["intersections"][0]["points"]) == 2
    assert view["bounds"]["max_lat"] > 10


def test_fit_options_use_configured_padding_and_zoom(monkeypatch):
    monkeypatch.setenv("MAP_FIT_PADDING", "20")
    monkeypatch.setenv("MAP_MAX_ZOOM", "15")
    circle = Circle(lat=40.7128, lng=-74.006, radius=5, unit="miles")

    view = MapService.build_view([circle])

    assert view["fit"]["padding"] == [20, 20]
    assert view["fit"]["max_zoom"] == 15
    (south, west), (north, east) = view["fit"]["bounds"]
    assert (north + south) / 2 == pytest.approx(circle.lat)
    assert (east + west) / 2 == pytest.approx(circle.lng)
