# radius_map/api/services/circle_service.py
"""Service layer for the user's circle collection and session storage."""

import logging
import uuid
from typing import Any, Dict, Optional

from flask import request, session

from radius_map.api.config import get_map_config
from radius_map.api.models import Circle, CircleSet, Point
from radius_map.api.services.circle_store import get_circle_store
from radius_map.api.services.coordinate_service import CoordinateService

logger = logging.getLogger(__name__)

# Popup label used by the page for a device-located circle
DEVICE_LABEL = "Your Location"


def require_object(data: Any, what: str = "Request body") -> Dict[str, Any]:
    """Return ``data`` if it is a JSON object, else raise ValueError."""
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{what} must be a JSON object")
    return data


class CircleService:
    """Handles circle creation, editing and session management.

    Circles live in the server-side CircleStore under the Flask session
    id, so page requests and the WebSocket see the same set.
    """

    @staticmethod
    def owner_id() -> str:
        """Get the Flask session id that owns the circle set, creating it if needed."""
        owner = session.get('_id')
        if owner:
            return owner
        sid = getattr(request, 'sid', None)
        if sid is not None:
            # Socket opened without a page load: no cookie to write back to
            return f'anon_{sid}'
        owner = uuid.uuid4().hex
        session['_id'] = owner
        session.modified = True
        return owner

    @staticmethod
    def load() -> CircleSet:
        """Get the current circle set from the store.

        Returns:
            The stored circles, or an empty set
        """
        return CircleSet.from_dicts(get_circle_store().get(CircleService.owner_id()))

    @staticmethod
    def store(circles: CircleSet) -> None:
        """Store the circle set for the current session."""
        owner = CircleService.owner_id()
        get_circle_store().put(owner, [
            {k: v for k, v in c.to_dict().items() if k != 'radius_meters'}
            for c in circles
        ])
        logger.debug(f"Stored {len(circles)} circles for session {owner}")

    @staticmethod
    def resolve_center(data: Dict[str, Any]) -> Point:
        """Turn a create request into a center point.

        Args:
            data: Request body with a ``source`` of geolocation, address
                or manual

        Raises:
            CoordinateLookupError: If the coordinate provider fails
            ValueError: If the source or manual coordinates are invalid
        """
        data = require_object(data)
        source = data.get('source', 'manual')
        if source == 'geolocation':
            return CoordinateService.from_device(data.get('position'))
        if source == 'address':
            return CoordinateService.from_address(data.get('address'))
        if source == 'manual':
            try:
                return Point(float(data['lat']), float(data['lng']))
            except (KeyError, TypeError, ValueError):
                raise ValueError("Manual circles need numeric lat and lng")
        raise ValueError(f"Unknown source: {source}")

    @staticmethod
    def build_circle(data: Dict[str, Any]) -> Circle:
        """Build a validated circle from a create request, without storing it."""
        data = require_object(data)
        cfg = get_map_config()
        source = data.get('source', 'manual')
        center = CircleService.resolve_center(data)

        label = data.get('label')
        if not label:
            if source == 'geolocation':
                label = DEVICE_LABEL
            elif source == 'address':
                label = " ".join(str(data.get('address', '')).split())

        return Circle(
            lat=center.lat,
            lng=center.lng,
            radius=data.get('radius', cfg['default_radius']),
            unit=data.get('unit', cfg['default_unit']),
            label=label or None,
            source=source,
        )

    @staticmethod
    def add_circle(data: Dict[str, Any]) -> Circle:
        """Create a circle from a user action and add it to the session set."""
        circle = CircleService.build_circle(data)
        circles = CircleService.load()
        circles.add(circle)
        CircleService.store(circles)
        logger.info(f"Added circle {circle.id} at {circle.lat:.6f}, {circle.lng:.6f} "
                    f"({circle.radius} {circle.unit})")
        return circle

    @staticmethod
    def update_circle(circle_id: str, radius: Optional[float] = None,
                      unit: Optional[str] = None) -> Circle:
        """Edit radius and/or unit of a stored circle.

        Raises:
            KeyError: If the circle does not exist
            ValueError: If the new radius or unit is invalid
        """
        circles = CircleService.load()
        circle = circles.update(circle_id, radius=radius, unit=unit)
        CircleService.store(circles)
        logger.info(f"Updated circle {circle_id}: {circle.radius} {circle.unit}")
        return circle

    @staticmethod
    def remove_circle(circle_id: str) -> Circle:
        """Remove a stored circle.

        Raises:
            KeyError: If the circle does not exist
        """
        circles = CircleService.load()
        circle = circles.remove(circle_id)
        CircleService.store(circles)
        logger.info(f"Removed circle {circle_id}")
        return circle

    @staticmethod
    def clear() -> None:
        """Clear all circles for the current session."""
        get_circle_store().discard(CircleService.owner_id())
        logger.debug("Cleared circles for session")


__all__ = ['CircleService']
