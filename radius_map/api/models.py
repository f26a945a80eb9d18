# radius_map/api/models.py
"""Shared data structures for radius circles and map framing.

Circle, Point and BoundingBox live here so the geometry engine, the
services and the routes share one definition.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional

MILES = "miles"
KILOMETERS = "kilometers"
UNITS = (MILES, KILOMETERS)

# Accepted spellings from the browser's unit selector
_UNIT_ALIASES = {
    "miles": MILES,
    "mi": MILES,
    "kilometers": KILOMETERS,
    "km": KILOMETERS,
}

SOURCES = ("geolocation", "address", "manual")


def normalize_unit(unit: str) -> str:
    """Return the canonical unit name for ``unit``.

    Raises:
        ValueError: If the unit is not miles or kilometers
    """
    key = str(unit).strip().lower() if unit is not None else ""
    if key not in _UNIT_ALIASES:
        raise ValueError(f"Unit must be one of: {', '.join(UNITS)}")
    return _UNIT_ALIASES[key]


def validate_radius(radius: Any) -> float:
    try:
        value = float(radius)
    except (TypeError, ValueError):
        raise ValueError("Radius must be a number")
    if not value > 0:
        raise ValueError("Radius must be greater than zero")
    return value


def validate_coordinates(lat: float, lng: float) -> bool:
    """Check that coordinates are within valid ranges."""
    return -90 <= lat <= 90 and -180 <= lng <= 180


@dataclass(frozen=True)
class Point:
    """A latitude/longitude pair in degrees."""

    lat: float
    lng: float

    def to_dict(self) -> dict:
        return {"lat": self.lat, "lng": self.lng}


@dataclass
class Circle:
    """A located point with a radius in its display unit.

    The center is fixed at creation; radius and unit can be edited.
    """

    lat: float
    lng: float
    radius: float
    unit: str = MILES
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    label: Optional[str] = None
    source: str = "manual"

    def __post_init__(self):
        lat, lng = float(self.lat), float(self.lng)
        if not validate_coordinates(lat, lng):
            raise ValueError(f"Coordinates out of range: {lat}, {lng}")
        object.__setattr__(self, "lat", lat)
        object.__setattr__(self, "lng", lng)
        self.radius = validate_radius(self.radius)
        self.unit = normalize_unit(self.unit)
        if self.source not in SOURCES:
            raise ValueError(f"Source must be one of: {', '.join(SOURCES)}")

    def __setattr__(self, name, value):
        if name in ("lat", "lng") and name in self.__dict__:
            raise AttributeError("Circle center cannot be changed once set")
        super().__setattr__(name, value)

    @property
    def center(self) -> Point:
        return Point(self.lat, self.lng)

    @property
    def radius_meters(self) -> float:
        # Local import keeps models free of a module-level cycle
        from radius_map.api.geometry import to_meters

        return to_meters(self.radius, self.unit)

    def update(self, radius: Optional[float] = None, unit: Optional[str] = None) -> "Circle":
        """Edit radius and/or unit in place, validating both first."""
        new_radius = validate_radius(radius) if radius is not None else self.radius
        new_unit = normalize_unit(unit) if unit is not None else self.unit
        self.radius = new_radius
        self.unit = new_unit
        return self

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "lat": self.lat,
            "lng": self.lng,
            "radius": self.radius,
            "unit": self.unit,
            "radius_meters": self.radius_meters,
            "label": self.label,
            "source": self.source,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Circle":
        kwargs = {
            "lat": data["lat"],
            "lng": data["lng"],
            "radius": data["radius"],
            "unit": data.get("unit", MILES),
            "label": data.get("label"),
            "source": data.get("source", "manual"),
        }
        if data.get("id"):
            kwargs["id"] = data["id"]
        return cls(**kwargs)


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned lat/lng box used to frame the map view."""

    min_lat: float
    min_lng: float
    max_lat: float
    max_lng: float

    @classmethod
    def from_point(cls, point: Point) -> "BoundingBox":
        return cls(point.lat, point.lng, point.lat, point.lng)

    def union(self, other: "BoundingBox") -> "BoundingBox":
        return BoundingBox(
            min(self.min_lat, other.min_lat),
            min(self.min_lng, other.min_lng),
            max(self.max_lat, other.max_lat),
            max(self.max_lng, other.max_lng),
        )

    def extend(self, point: Point) -> "BoundingBox":
        return self.union(BoundingBox.from_point(point))

    def contains(self, point: Point) -> bool:
        return (self.min_lat <= point.lat <= self.max_lat
                and self.min_lng <= point.lng <= self.max_lng)

    def contains_box(self, other: "BoundingBox") -> bool:
        return (self.min_lat <= other.min_lat and other.max_lat <= self.max_lat
                and self.min_lng <= other.min_lng and other.max_lng <= self.max_lng)

    @property
    def center(self) -> Point:
        return Point((self.min_lat + self.max_lat) / 2, (self.min_lng + self.max_lng) / 2)

    def to_dict(self) -> dict:
        return {
            "min_lat": self.min_lat,
            "min_lng": self.min_lng,
            "max_lat": self.max_lat,
            "max_lng": self.max_lng,
            "north": self.max_lat,
            "south": self.min_lat,
            "east": self.max_lng,
            "west": self.min_lng,
        }

    def to_leaflet(self) -> List[List[float]]:
        """Corner pair in the ``[[south, west], [north, east]]`` form Leaflet expects."""
        return [[self.min_lat, self.min_lng], [self.max_lat, self.max_lng]]


class CircleSet:
    """Ordered, owned collection of one user's circles."""

    def __init__(self, circles: Optional[Iterable[Circle]] = None):
        self._circles: Dict[str, Circle] = {}
        for circle in circles or ():
            self.add(circle)

    def __iter__(self) -> Iterator[Circle]:
        return iter(list(self._circles.values()))

    def __len__(self) -> int:
        return len(self._circles)

    def __contains__(self, circle_id: str) -> bool:
        return circle_id in self._circles

    def add(self, circle: Circle) -> Circle:
        if circle.id in self._circles:
            raise ValueError(f"Duplicate circle id: {circle.id}")
        self._circles[circle.id] = circle
        return circle

    def get(self, circle_id: str) -> Circle:
        try:
            return self._circles[circle_id]
        except KeyError:
            raise KeyError(f"Unknown circle: {circle_id}") from None

    def update(self, circle_id: str, radius: Optional[float] = None, unit: Optional[str] = None) -> Circle:
        return self.get(circle_id).update(radius=radius, unit=unit)

    def remove(self, circle_id: str) -> Circle:
        circle = self.get(circle_id)
        del self._circles[circle_id]
        return circle

    def clear(self) -> None:
        self._circles.clear()

    def to_list(self) -> List[Circle]:
        return list(self._circles.values())

    def to_dicts(self) -> List[dict]:
        return [c.to_dict() for c in self._circles.values()]

    @classmethod
    def from_dicts(cls, items: Iterable[Dict[str, Any]]) -> "CircleSet":
        return cls(Circle.from_dict(item) for item in items)

