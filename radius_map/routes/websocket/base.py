# radius_map/routes/websocket/base.py
"""Base WebSocket handler with common functionality."""

import logging
from flask import request, session
from flask_socketio import emit

from radius_map.api.errors import CoordinateLookupError

logger = logging.getLogger(__name__)

# Define namespace constant
NAMESPACE = "/radius/ws"


class BaseWebSocketHandler:
    """Base class for WebSocket handlers with common functionality."""

    def __init__(self, socketio, namespace=NAMESPACE):
        self.socketio = socketio
        self.namespace = namespace

    def emit_to_client(self, event, data, room=None):
        """Emit event to a specific client or room."""
        try:
            if room:
                self.socketio.emit(event, data, to=room, namespace=self.namespace)
            else:
                emit(event, data, namespace=self.namespace)
        except Exception as e:
            logger.error(f"Failed to emit {event}: {e}")

    def get_client_info(self):
        """Get information about the connected client."""
        return {
            "sid": request.sid,
            "flask_session_id": session.get("_id", f"anon_{request.sid}"),
        }

    def log_event(self, event_name, data=None):
        """Log WebSocket events consistently."""
        client_info = self.get_client_info()
        if data:
            logger.info(f"[WS] {event_name} - Client: {client_info['sid']} ({client_info['flask_session_id']}), Data: {data}")
        else:
            logger.info(f"[WS] {event_name} - Client: {client_info['sid']}")

    def handle_error(self, error, event_name=""):
        """Handle and log errors consistently."""
        client_info = self.get_client_info()
        if isinstance(error, CoordinateLookupError):
            payload = error.to_dict()
        else:
            payload = {'error': error.args[0] if error.args else str(error), 'kind': type(error).__name__}
        logger.error(f"[WS] Error in {event_name} - Client: {client_info['sid']}, Error: {error}")
        payload['event'] = event_name
        self.emit_to_client('error', payload)
