# radius_map/routes/radius.py
"""Radius map routes and blueprint configuration."""

import logging
import os

from flask import Blueprint, jsonify, render_template, request

from radius_map.api.config import get_map_config
from radius_map.api.errors import CoordinateLookupError
from radius_map.api.models import Circle
from radius_map.api.services.circle_service import CircleService, require_object
from radius_map.api.services.coordinate_service import CoordinateService
from radius_map.api.services.map_service import MapService

logger = logging.getLogger(__name__)


def create_radius_blueprint(base_dir):
    """Create and configure the radius map blueprint.

    Args:
        base_dir: Absolute path to the application directory

    Returns:
        Configured Flask Blueprint
    """
    radius_bp = Blueprint(
        "radius",
        __name__,
        template_folder=os.path.join(base_dir, 'templates'),
        static_folder=os.path.join(base_dir, 'static'),
        static_url_path='/static',
        url_prefix="/radius"
    )

    @radius_bp.errorhandler(CoordinateLookupError)
    def handle_lookup_error(e):
        logger.info(f"Coordinate lookup failed: {e.kind}: {e.message}")
        return jsonify(e.to_dict()), e.status_code

    @radius_bp.errorhandler(ValueError)
    def handle_value_error(e):
        return jsonify({"error": str(e), "kind": "InvalidCircle"}), 400

    @radius_bp.errorhandler(KeyError)
    def handle_key_error(e):
        return jsonify({"error": e.args[0] if e.args else "Not found", "kind": "NotFound"}), 404

    @radius_bp.route("/")
    def index():
        """Main radius map page."""
        # Give the browser a session id before its socket connects
        CircleService.owner_id()
        return render_template("map.html", map_config=get_map_config())

    @radius_bp.route("/api/config")
    def api_config():
        """Return map view policy for the frontend."""
        return jsonify(get_map_config())

    @radius_bp.route("/api/circles", methods=["GET", "POST", "DELETE"])
    def api_circles():
        """List, add or clear the session's circles; always returns the view."""
        if request.method == "POST":
            data = require_object(request.get_json(silent=True))
            circle = CircleService.add_circle(data)
            view = MapService.build_view(CircleService.load())
            view["added"] = circle.id
            return jsonify(view), 201

        if request.method == "DELETE":
            CircleService.clear()

        return jsonify(MapService.build_view(CircleService.load()))

    @radius_bp.route("/api/circles/<circle_id>", methods=["PATCH", "DELETE"])
    def api_circle(circle_id):
        """Edit or remove a single circle."""
        if request.method == "PATCH":
            data = require_object(request.get_json(silent=True))
            CircleService.update_circle(circle_id, radius=data.get("radius"), unit=data.get("unit"))
        else:
            CircleService.remove_circle(circle_id)
        return jsonify(MapService.build_view(CircleService.load()))

    @radius_bp.route("/api/geocode")
    def api_geocode():
        """Resolve an address without adding a circle."""
        point = CoordinateService.from_address(request.args.get("address"))
        return jsonify(point.to_dict())

    @radius_bp.route("/api/intersections", methods=["POST"])
    def api_intersections():
        """Stateless view for circles supplied in the request body."""
        data = require_object(request.get_json(silent=True))
        items = data.get("circles", [])
        if not isinstance(items, list):
            raise ValueError("circles must be a list")
        try:
            circles = [Circle.from_dict(require_object(item, "Circle")) for item in items]
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed circle: {e}") from e
        return jsonify(MapService.build_view(circles))

    @radius_bp.route("/health")
    def health():
        """Health check endpoint."""
        return jsonify({"status": "ok", "service": "radius"})

    return radius_bp


# Export for backward compatibility
__all__ = ['create_radius_blueprint']
