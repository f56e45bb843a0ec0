"""Typed publish/subscribe notifications between dashboard pages."""

from __future__ import annotations

import logging
from collections import defaultdict
from enum import Enum
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class Topic(str, Enum):
    RECORD_CHANGED = "record_changed"
    PAYMENT_UPDATED = "payment_updated"
    PAYMENT_VIEWED = "payment_viewed"


Handler = Callable[[Topic, dict], None]


class EventBus:
    """In-process event bus; one instance is kept per Streamlit session."""

    def __init__(self) -> None:
        self._handlers: Dict[Topic, List[Handler]] = defaultdict(list)

    def subscribe(self, topic: Topic, handler: Handler) -> Callable[[], None]:
        """Register ``handler`` for ``topic`` and return an unsubscribe callable."""
        if handler not in self._handlers[topic]:
            self._handlers[topic].append(handler)
        return lambda: self.unsubscribe(topic, handler)

    def unsubscribe(self, topic: Topic, handler: Handler) -> None:
        if handler in self._handlers[topic]:
            self._handlers[topic].remove(handler)

    def publish(self, topic: Topic, payload: Optional[dict] = None) -> int:
        """Deliver ``payload`` to every handler of ``topic``; returns how many succeeded.

        A failing handler is logged and does not stop delivery to the others.
        """
        delivered = 0
        for handler in list(self._handlers[topic]):
            try:
                handler(topic, dict(payload or {}))
            except Exception:
                logger.exception("Handler %r failed for %s", handler, topic.value)
                continue
            delivered += 1
        return delivered
