"""Periodic tick broadcaster."""

import logging
from collections.abc import Callable

from .clock import Cancellable, Scheduler, resolve_scheduler

logger = logging.getLogger(__name__)


class TickBroadcaster:
    """Calls ``callback`` immediately on start, then every ``interval`` ms.

    Repeats are anchored to the start instant. ``stop()`` cancels the pending
    repeat, so no callback runs after it returns.
    """

    def __init__(
        self,
        interval: int,
        callback: Callable[[], None],
        scheduler: Scheduler | None = None,
    ) -> None:
        self.interval = interval
        self._callback = callback
        self._scheduler = scheduler
        self._handle: Cancellable | None = None
        self._started_at = 0.0
        self._fired = 0

    @property
    def running(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        """Start broadcasting; no-op if already running."""
        if self._handle is not None:
            return
        self._started_at = resolve_scheduler(self._scheduler).time()
        self._fired = 0
        self._schedule_next()
        logger.debug(f"Tick broadcaster started every {self.interval}ms")
        self._callback()

    def stop(self) -> None:
        if self._handle is None:
            return
        self._handle.cancel()
        self._handle = None
        logger.debug("Tick broadcaster stopped")

    def _schedule_next(self) -> None:
        loop = resolve_scheduler(self._scheduler)
        self._fired += 1
        due = self._started_at + self._fired * self.interval / 1000
        self._handle = loop.call_later(max(0.0, due - loop.time()), self._fire)

    def _fire(self) -> None:
        self._schedule_next()
        self._callback()
