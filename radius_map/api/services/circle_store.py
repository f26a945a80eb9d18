# radius_map/api/services/circle_store.py
"""Server-side circle storage shared by the HTTP and WebSocket channels."""

import threading
import logging
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


class CircleStore:
    """In-memory circle lists keyed by the owner's Flask session id."""

    def __init__(self):
        self._circles: Dict[str, List[dict]] = {}
        self.lock = threading.Lock()

    def get(self, owner_id: str) -> List[dict]:
        with self.lock:
            return [dict(item) for item in self._circles.get(owner_id, [])]

    def put(self, owner_id: str, circles: List[dict]) -> None:
        with self.lock:
            self._circles[owner_id] = [dict(item) for item in circles]

    def discard(self, owner_id: str) -> None:
        with self.lock:
            self._circles.pop(owner_id, None)

    def clear(self) -> None:
        with self.lock:
            self._circles.clear()
        logger.debug("Circle store cleared")


_circle_store: Optional[CircleStore] = None


def get_circle_store() -> CircleStore:
    """Get the global CircleStore instance."""
    global _circle_store
    if _circle_store is None:
        _circle_store = CircleStore()
    return _circle_store
