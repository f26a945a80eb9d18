import math

import pytest

from radius_map.api.geometry import (
    METERS_PER_DEGREE,
    bounding_region,
    circle_bounds,
    intersect,
    intersect_centers,
    project,
    to_meters,
    unproject,
)
from radius_map.api.models import BoundingBox, Circle


def km_circle(lat, lng, km):
    return Circle(lat=lat, lng=lng, radius=km, unit="kilometers")


def test_to_meters_units():
    assert to_meters(1, "miles") == 1609.34
    assert to_meters(1, "kilometers") == 1000
    assert to_meters(2.5, "km") == 2500


def test_project_uses_cosine_of_latitude():
    x, y = project(60, 1)
    assert y == pytest.approx(60 * METERS_PER_DEGREE)
    assert x == pytest.approx(METERS_PER_DEGREE * 0.5)


def test_unproject_inverts_project_at_same_latitude():
    x, y = project(48.85, 2.35)
    point = unproject(x, y, 48.85)
    assert point.lat == pytest.approx(48.85)
    assert point.lng == pytest.approx(2.35)


def test_circles_too_far_apart_do_not_intersect():
    a = km_circle(0, 0, 1)
    b = km_circle(0, 3000 / METERS_PER_DEGREE, 1)
    assert intersect(a, b) == []


def test_nested_circles_do_not_intersect():
    outer = km_circle(40.0, -74.0, 10)
    inner = km_circle(40.01, -74.0, 1)
    assert intersect(outer, inner) == []


@pytest.mark.parametrize("r1,r2", [(1, 1), (1, 5), (3, 2)])
def test_concentric_circles_do_not_intersect(r1, r2):
    assert intersect(km_circle(51.5, -0.12, r1), km_circle(51.5, -0.12, r2)) == []


def test_equal_circles_1500m_apart_give_symmetric_pair():
    a = km_circle(0, 0, 1)
    b = km_circle(0, 1500 / METERS_PER_DEGREE, 1)

    points = intersect(a, b)

    assert len(points) == 2
    p1, p2 = points
    half_chord = math.sqrt(1000 ** 2 - 750 ** 2) / METERS_PER_DEGREE
    assert p1.lat == pytest.approx(-p2.lat)
    assert abs(p1.lat) == pytest.approx(half_chord)
    assert p1.lng == pytest.approx(p2.lng)
    assert p1.lng == pytest.approx(750 / METERS_PER_DEGREE)


def test_intersection_points_lie_on_both_circles_locally():
    points = intersect_centers(0, 0, 1000, 0, 1500 / METERS_PER_DEGREE, 800)
    assert len(points) == 2
    cx2, cy2 = project(0, 1500 / METERS_PER_DEGREE)
    for p in points:
        x, y = project(p.lat, p.lng)
        assert math.hypot(x, y) == pytest.approx(1000, rel=1e-6)
        assert math.hypot(x - cx2, y - cy2) == pytest.approx(800, rel=1e-6)


def test_externally_tangent_circles_give_two_coincident_points():
    # 0.125 degrees is exactly 13915 m, so d == r1 + r2 with no rounding
    points = intersect_centers(0, 0, 6915, 0.125, 0, 7000)
    assert len(points) == 2
    assert points[0] == points[1]
    assert points[0].lat == pytest.approx(6915 / METERS_PER_DEGREE)


def test_intersect_is_idempotent():
    a = Circle(lat=40.7128, lng=-74.006, radius=5, unit="miles")
    b = Circle(lat=40.7580, lng=-73.9855, radius=4, unit="miles")
    assert intersect(a, b) == intersect(a, b)
    assert len(intersect(a, b)) == 2


def test_bounding_region_empty_is_none():
    assert bounding_region([]) is None


def test_bounding_region_single_circle():
    circle = Circle(lat=40.7128, lng=-74.006, radius=5, unit="miles")
    box = bounding_region([circle])

    lat_delta = circle.radius_meters / METERS_PER_DEGREE
    assert box.max_lat - circle.lat == pytest.approx(lat_delta)
    assert circle.lat - box.min_lat == pytest.approx(lat_delta)
    assert box.center.lat == pytest.approx(circle.lat)
    assert box.center.lng == pytest.approx(circle.lng)
    assert box == circle_bounds(circle)


def test_circle_bounds_widens_longitude_with_latitude():
    box = circle_bounds(km_circle(60, 10, 10))
    lat_span = box.max_lat - box.min_lat
    lng_span = box.max_lng - box.min_lng
    assert lng_span == pytest.approx(2 * lat_span)


def test_bounding_region_contains_every_circle_and_intersection():
    circles = [
        Circle(lat=40.7128, lng=-74.006, radius=5, unit="miles"),
        Circle(lat=40.7580, lng=-73.9855, radius=4, unit="miles"),
        Circle(lat=40.6782, lng=-73.9442, radius=6, unit="kilometers"),
    ]
    box = bounding_region(circles)

    for circle in circles:
        assert box.contains_box(circle_bounds(circle))
    for i, a in enumerate(circles):
        for b in circles[i + 1:]:
            for point in intersect(a, b):
                assert box.contains(point)


def test_bounding_region_extends_to_supplied_points():
    circle = km_circle(0, 0, 1)
    far = unproject(0, 5000, 0)
    box = bounding_region([circle], [far])
    assert box.max_lat == pytest.approx(far.lat)


def test_bounding_region_is_idempotent():
    circles = [km_circle(10, 10, 50), km_circle(10.5, 10.2, 40)]
    assert bounding_region(circles) == bounding_region(circles)
    assert isinstance(bounding_region(circles), BoundingBox)


def test_internally_tangent_circles_give_two_coincident_points():
    # d == r1 - r2 == 13915 m exactly
    points = intersect_centers(0, 0, 20915, 0.125, 0, 7000)
    assert len(points) == 2
    assert points[0] == points[1]
    assert points[0].lat == pytest.approx(20915 / METERS_PER_DEGREE)


def test_points_are_unprojected_with_average_latitude():
    lat1, lat2, radius = 40.0, 40.3, 20000
    d = (lat2 - lat1) * METERS_PER_DEGREE
    h = math.sqrt(radius ** 2 - (d / 2) ** 2)

    points = intersect_centers(lat1, 0.0, radius, lat2, 0.0, radius)

    assert len(points) == 2
    average = METERS_PER_DEGREE * math.cos(math.radians((lat1 + lat2) / 2))
    own = METERS_PER_DEGREE * math.cos(math.radians(lat1))
    east, west = points
    assert east.lng == pytest.approx(h / average, rel=1e-9)
    assert west.lng == pytest.approx(-h / average, rel=1e-9)
    assert east.lng != pytest.approx(h / own, rel=1e-6)
    assert east.lat == pytest.approx((lat1 + lat2) / 2)
