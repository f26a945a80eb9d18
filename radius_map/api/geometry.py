# radius_map/api/geometry.py
"""Planar geometry for radius circles: intersections and map framing.

All distance math runs on a local equirectangular projection
(``x = lng * 111320 * cos(lat)``, ``y = lat * 111320``), which is only
accurate for circles up to a few hundred kilometres across. This is a
known approximation, not geodesic math.

Two approximations are layered on purpose:

* forward projection uses each circle's *own* latitude for its cosine
  factor, so widely separated latitudes introduce a small asymmetry;
* intersection points are projected back using the *average* latitude
  of the two centers, so projection and de-projection are not exact
  inverses.

Every function here is pure: values in, values out, no retained state.
"""

from __future__ import annotations

import itertools
import math
from typing import Iterable, List, Optional, Sequence, Tuple

from radius_map.api.models import MILES, BoundingBox, Circle, Point, normalize_unit

METERS_PER_DEGREE = 111320  # 1 degree of latitude ≈ 111,320 meters
METERS_PER_MILE = 1609.34
METERS_PER_KILOMETER = 1000


def to_meters(radius: float, unit: str) -> float:
    """Convert a radius in ``unit`` to meters."""
    if normalize_unit(unit) == MILES:
        return radius * METERS_PER_MILE
    return radius * METERS_PER_KILOMETER


def project(lat: float, lng: float) -> Tuple[float, float]:
    """Project lat/lng degrees to local planar meters ``(x, y)``."""
    x = lng * METERS_PER_DEGREE * math.cos(math.radians(lat))
    y = lat * METERS_PER_DEGREE
    return x, y


def unproject(x: float, y: float, ref_lat: float) -> Point:
    """Map planar meters back to lat/lng using ``ref_lat`` for the cosine factor."""
    lat = y / METERS_PER_DEGREE
    lng = x / (METERS_PER_DEGREE * math.cos(math.radians(ref_lat)))
    return Point(lat, lng)


def intersect_centers(lat1: float, lng1: float, r1: float,
                      lat2: float, lng2: float, r2: float) -> List[Point]:
    """Intersection points of two circles with radii already in meters.

    Returns an empty list when the circles are apart, nested or
    concentric, otherwise exactly two points. Tangent circles give two
    coincident points.
    """
    x1, y1 = project(lat1, lng1)
    x2, y2 = project(lat2, lng2)
    dx, dy = x2 - x1, y2 - y1
    d = math.hypot(dx, dy)

    if d == 0 or d > r1 + r2 or d < abs(r1 - r2):
        return []

    a = (r1 * r1 - r2 * r2 + d * d) / (2 * d)
    # Clamp: float noise at exact tangency can push r1² - a² below zero
    h = math.sqrt(max(r1 * r1 - a * a, 0.0))

    px = x1 + a * dx / d
    py = y1 + a * dy / d

    ref_lat = (lat1 + lat2) / 2
    return [
        unproject(px + h * dy / d, py - h * dx / d, ref_lat),
        unproject(px - h * dy / d, py + h * dx / d, ref_lat),
    ]


def intersect(circle_a: Circle, circle_b: Circle) -> List[Point]:
    """Return the 0 or 2 points where two circle boundaries cross."""
    return intersect_centers(
        circle_a.lat, circle_a.lng, circle_a.radius_meters,
        circle_b.lat, circle_b.lng, circle_b.radius_meters,
    )


def all_intersections(circles: Sequence[Circle]) -> List[Tuple[Circle, Circle, List[Point]]]:
    """Intersect every unordered pair, in list order.

    Pairs that do not intersect are included with an empty point list so
    callers can tell "checked, no crossing" from "not checked".
    """
    return [(a, b, intersect(a, b)) for a, b in itertools.combinations(circles, 2)]


def circle_bounds(circle: Circle) -> BoundingBox:
    """Axis-aligned lat/lng box around a single circle."""
    radius = circle.radius_meters
    lat_delta = radius / METERS_PER_DEGREE
    lng_delta = radius / (METERS_PER_DEGREE * math.cos(math.radians(circle.lat)))
    return BoundingBox(
        circle.lat - lat_delta,
        circle.lng - lng_delta,
        circle.lat + lat_delta,
        circle.lng + lng_delta,
    )


def bounding_region(circles: Iterable[Circle],
                    points: Optional[Iterable[Point]] = None) -> Optional[BoundingBox]:
    """Smallest box holding every circle and every pairwise intersection.

    Args:
        circles: Circles to frame
        points: Precomputed intersection points; computed here when omitted

    Returns:
        The enclosing BoundingBox, or None for an empty circle set so the
        caller can keep its previous view
    """
    circles = list(circles)
    if not circles:
        return None

    if points is None:
        points = [p for _, _, pts in all_intersections(circles) for p in pts]

    box = circle_bounds(circles[0])
    for circle in circles[1:]:
        box = box.union(circle_bounds(circle))
    for point in points:
        box = box.extend(point)
    return box


__all__ = [
    "METERS_PER_DEGREE",
    "METERS_PER_MILE",
    "METERS_PER_KILOMETER",
    "to_meters",
    "project",
    "unproject",
    "intersect_centers",
    "intersect",
    "all_intersections",
    "circle_bounds",
    "bounding_region",
]
