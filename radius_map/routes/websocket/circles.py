# radius_map/routes/websocket/circles.py
"""WebSocket handlers that edit the circle set and push the recomputed view."""

import logging
import time

from radius_map.api.errors import CoordinateLookupError
from radius_map.api.services.circle_service import CircleService, require_object
from radius_map.api.services.map_service import MapService

from .base import BaseWebSocketHandler, NAMESPACE

logger = logging.getLogger(__name__)


class CircleHandler(BaseWebSocketHandler):
    """Handles circle-set events from the map page."""

    def emit_view(self, reason):
        view = MapService.build_view(CircleService.load())
        view['reason'] = reason
        view['timestamp'] = time.time()
        self.emit_to_client('view_updated', view)

    def register_handlers(self):
        """Register circle-related event handlers."""

        @self.socketio.on('add_circle', namespace=NAMESPACE)
        def handle_add_circle(data=None):
            """Add a circle from a geolocation, address or manual payload."""
            try:
                data = require_object(data, "add_circle payload")
                self.log_event('add_circle', {'source': data.get('source')})
                CircleService.add_circle(data)
                self.emit_view('add_circle')
            except (CoordinateLookupError, ValueError) as exc:
                self.handle_error(exc, 'add_circle')

        @self.socketio.on('update_circle', namespace=NAMESPACE)
        def handle_update_circle(data=None):
            """Edit radius and/or unit of a circle."""
            try:
                data = require_object(data, "update_circle payload")
                self.log_event('update_circle', data)
                CircleService.update_circle(data.get('id'), radius=data.get('radius'), unit=data.get('unit'))
                self.emit_view('update_circle')
            except (KeyError, ValueError) as exc:
                self.handle_error(exc, 'update_circle')

        @self.socketio.on('remove_circle', namespace=NAMESPACE)
        def handle_remove_circle(data=None):
            """Remove a circle by id."""
            try:
                data = require_object(data, "remove_circle payload")
                self.log_event('remove_circle', data)
                CircleService.remove_circle(data.get('id'))
                self.emit_view('remove_circle')
            except (KeyError, ValueError) as exc:
                self.handle_error(exc, 'remove_circle')

        @self.socketio.on('clear_circles', namespace=NAMESPACE)
        def handle_clear_circles():
            """Remove every circle."""
            self.log_event('clear_circles')
            CircleService.clear()
            self.emit_view('clear_circles')

        @self.socketio.on('get_view', namespace=NAMESPACE)
        def handle_get_view():
            """Send the current view without changing anything."""
            self.emit_view('get_view')
