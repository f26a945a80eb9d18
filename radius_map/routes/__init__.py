# radius_map/routes/__init__.py
from radius_map.routes.radius import create_radius_blueprint
from radius_map.routes.websocket import NAMESPACE, register_websocket_handlers

__all__ = ['create_radius_blueprint', 'register_websocket_handlers', 'NAMESPACE']
