"""In-process change notifications for watched collections"""

import logging
import threading
from typing import Any, Callable, Dict, List, Tuple

Listener = Callable[[List[Dict[str, Any]]], None]

logger = logging.getLogger(__name__)


class ChangeFeed:
    """Registry of snapshot listeners keyed by (collection, user_id)"""

    def __init__(self):
        self._listeners: Dict[Tuple[str, str], List[Listener]] = {}
        self._lock = threading.Lock()

    def subscribe(self, collection: str, user_id: str, listener: Listener) -> Callable[[], None]:
        key = (collection, user_id)
        with self._lock:
            self._listeners.setdefault(key, []).append(listener)

        def unsubscribe() -> None:
            with self._lock:
                listeners = self._listeners.get(key, [])
                if listener in listeners:
                    listeners.remove(listener)
                if not listeners:
                    self._listeners.pop(key, None)

        return unsubscribe

    def has_listeners(self, collection: str, user_id: str) -> bool:
        with self._lock:
            return bool(self._listeners.get((collection, user_id)))

    def publish(self, collection: str, user_id: str, documents: List[Dict[str, Any]]) -> None:
        """Deliver a full snapshot; one failing listener does not block the rest"""
        with self._lock:
            listeners = list(self._listeners.get((collection, user_id), []))

        for listener in listeners:
            try:
                listener(documents)
            except Exception as e:
                logger.warning(
                    f"Watch listener failed: {e}",
                    extra={"collection": collection, "user_id": user_id},
                )


change_feed = ChangeFeed()
