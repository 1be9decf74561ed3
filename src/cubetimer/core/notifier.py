"""Observer-style event delivery for attempt notifications.

EventEmitter keeps one subscriber list per EventType.

Delivery rules:
- emit() iterates a snapshot, so subscribing or unsubscribing from inside a
  listener only affects the next emit()
- a listener that raises is logged and skipped; the remaining listeners
  still receive the event and the caller never sees the exception
- subscribing the same callable twice is a no-op
"""

import logging
from collections.abc import Callable
from typing import Any

from ..models import EventType

logger = logging.getLogger(__name__)

Listener = Callable[[Any], None]


class EventEmitter:
    """Subscribe/emit hub for controller notifications.

    Example:
        >>> emitter = EventEmitter()
        >>> unsubscribe = emitter.on(EventType.TICK, print)
        >>> emitter.emit(EventType.TICK, "payload")
        payload
        >>> unsubscribe()
    """

    def __init__(self) -> None:
        self._listeners: dict[EventType, list[Listener]] = {}

    def on(self, event_type: EventType, listener: Listener) -> Callable[[], None]:
        """Subscribe a listener.

        Returns:
            A callable that removes this subscription
        """
        listeners = self._listeners.setdefault(event_type, [])
        if listener not in listeners:
            listeners.append(listener)
        return lambda: self.off(event_type, listener)

    def off(self, event_type: EventType, listener: Listener) -> None:
        """Remove a listener. Unknown listeners are ignored."""
        listeners = self._listeners.get(event_type)
        if listeners and listener in listeners:
            listeners.remove(listener)

    def emit(self, event_type: EventType, payload: Any) -> None:
        for listener in list(self._listeners.get(event_type, ())):
            try:
                listener(payload)
            except Exception:
                name = getattr(listener, "__name__", repr(listener))
                logger.exception(f"Listener {name} failed on {event_type.value}")

    def listener_count(self, event_type: EventType) -> int:
        return len(self._listeners.get(event_type, ()))

    def clear(self, event_type: EventType | None = None) -> None:
        """Drop subscribers for one event type, or all of them."""
        if event_type is None:
            self._listeners.clear()
        else:
            self._listeners.pop(event_type, None)
