# radius_map/api/services/map_service.py
"""Service layer for map-related operations."""

import logging
from typing import Any, Dict, Iterable, List, Optional

from radius_map.api.config import get_map_config
from radius_map.api.geometry import all_intersections, bounding_region
from radius_map.api.models import BoundingBox, Circle, Point

logger = logging.getLogger(__name__)


class MapService:
    """Packages circles, intersections and framing for the map renderer."""

    @staticmethod
    def compute_intersections(circles: List[Circle]) -> List[Dict[str, Any]]:
        """Intersection points for every circle pair that crosses.

        Args:
            circles: Circles in display order

        Returns:
            One entry per crossing pair with the two circle ids and points
        """
        crossings = []
        for a, b, points in all_intersections(circles):
            if not points:
                continue
            crossings.append({
                "circles": [a.id, b.id],
                "points": [p.to_dict() for p in points],
            })
        return crossings

    @staticmethod
    def calculate_bounds(circles: List[Circle],
                         points: Optional[Iterable[Point]] = None) -> Optional[BoundingBox]:
        """Bounding box for all circles and intersections, or None when empty."""
        return bounding_region(circles, points)

    @staticmethod
    def fit_options(bounds: Optional[BoundingBox]) -> Optional[Dict[str, Any]]:
        """Fit-to-view instruction for the renderer.

        Returns:
            Bounds plus padding and max zoom, or None so the page keeps
            its current view
        """
        if bounds is None:
            return None
        cfg = get_map_config()
        padding = cfg["fit_padding"]
        return {
            "bounds": bounds.to_leaflet(),
            "padding": [padding, padding],
            "max_zoom": cfg["max_zoom"],
        }

    @staticmethod
    def build_view(circles: Iterable[Circle]) -> Dict[str, Any]:
        """Recompute everything the map needs after a circle-set change.

        Args:
            circles: The user's current circles

        Returns:
            Dictionary with circles, intersections, bounds and fit
        """
        circles = list(circles)
        crossings = MapService.compute_intersections(circles)
        points = [Point(**p) for c in crossings for p in c["points"]]
        bounds = MapService.calculate_bounds(circles, points)

        logger.debug(f"Built view: {len(circles)} circles, {len(crossings)} crossing pairs")
        return {
            "circles": [c.to_dict() for c in circles],
            "intersections": crossings,
            "bounds": bounds.to_dict() if bounds else None,
            "fit": MapService.fit_options(bounds),
        }


# Export for use in other modules
__all__ = ['MapService']
