# commerce/event_bus.py
import threading
from typing import Any, Callable, Dict, List

from utils.logger import logger


class EventBus:
    """
    Lightweight synchronous pub/sub for account/order updates.
    """

    def __init__(self) -> None:
        self._subs: Dict[str, List[Callable[[Any], None]]] = {}
        self._lock = threading.Lock()
        self._log = logger.bind(component="EventBus")

    def subscribe(self, topic: str, handler: Callable[[Any], None]) -> None:
        """Register a synchronous callback."""
        with self._lock:
            self._subs.setdefault(topic, []).append(handler)

    def publish(self, topic: str, payload: Any) -> None:
        """Publish an event to subscribers; a failing handler does not stop the rest."""
        with self._lock:
            handlers = list(self._subs.get(topic, []))
        for h in handlers:
            try:
                h(payload)
            except Exception:
                self._log.exception(f"handler {h!r} failed on topic {topic}")

# Common topics
TOPIC_ACCOUNT_CREATED = "account.created"
TOPIC_ACCOUNT_DEACTIVATED = "account.deactivated"
TOPIC_ORDER_CREATED = "order.created"
TOPIC_ORDER_STATUS = "order.status"
