"""Countdown and stopwatch clocks driven by an event loop scheduler.

A Clock never blocks: it registers future callbacks with a Scheduler and
returns. The scheduler is any object exposing the ``time()`` and
``call_later()`` subset of ``asyncio.AbstractEventLoop``; when none is
injected the running asyncio loop is used.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any, Protocol

from ..constants import DEFAULT_CLOCK_INTERVAL_MS
from ..models import ClockStatus

logger = logging.getLogger(__name__)

TickCallback = Callable[[int], None]
DoneCallback = Callable[[], None]


class Cancellable(Protocol):
    """Handle returned by Scheduler.call_later."""

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Time source and callback scheduler (seconds, like asyncio)."""

    def time(self) -> float: ...

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> Cancellable: ...


def resolve_scheduler(scheduler: Scheduler | None) -> Scheduler:
    """Return the injected scheduler or the running asyncio loop.

    Raises:
        RuntimeError: If no scheduler was injected and no loop is running
    """
    if scheduler is not None:
        return scheduler
    return asyncio.get_running_loop()


class Clock:
    """A countdown (default) or stopwatch clock with periodic ticks.

    In countdown mode ``time`` is the remaining milliseconds; in stopwatch
    mode it is the elapsed milliseconds, capped at the duration. Ticks are
    anchored to the instant the clock was (re)started so they do not drift.
    When the duration is exhausted the clock stops itself and calls
    ``on_done``. After ``stop()`` the clock keeps reporting the time it had
    when stopped.
    """

    def __init__(
        self,
        *,
        stopwatch: bool = False,
        interval: int = DEFAULT_CLOCK_INTERVAL_MS,
        scheduler: Scheduler | None = None,
        on_tick: TickCallback | None = None,
        on_done: DoneCallback | None = None,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"Clock interval must be positive, got {interval}")
        self.stopwatch = stopwatch
        self.interval = interval
        self.on_tick = on_tick
        self.on_done = on_done
        self._scheduler = scheduler

        self._status = ClockStatus.STOPPED
        self._duration = 0
        self._banked_ms = 0.0  # elapsed before the current running stretch
        self._resumed_at = 0.0  # scheduler time the current stretch began
        self._ticks = 0
        self._tick_handle: Cancellable | None = None
        self._done_handle: Cancellable | None = None

    @property
    def status(self) -> ClockStatus:
        return self._status

    @property
    def duration(self) -> int:
        return self._duration

    @property
    def elapsed(self) -> int:
        """Milliseconds run so far, excluding paused stretches."""
        elapsed = self._banked_ms
        if self._status is ClockStatus.RUNNING:
            elapsed += (self._loop.time() - self._resumed_at) * 1000
        return min(round(elapsed), self._duration)

    @property
    def time(self) -> int:
        if self.stopwatch:
            return self.elapsed
        return self._duration - self.elapsed

    @property
    def _loop(self) -> Scheduler:
        return resolve_scheduler(self._scheduler)

    def start(self, duration: int) -> None:
        """Start (or restart) the clock for ``duration`` milliseconds."""
        if duration <= 0:
            raise ValueError(f"Clock duration must be positive, got {duration}")
        self._cancel_callbacks()
        self._duration = duration
        self._banked_ms = 0.0
        self._run()
        logger.debug(f"Clock started: {'stopwatch' if self.stopwatch else 'countdown'} {duration}ms")

    def pause(self) -> None:
        if self._status is not ClockStatus.RUNNING:
            return
        self._banked_ms += (self._loop.time() - self._resumed_at) * 1000
        self._cancel_callbacks()
        self._status = ClockStatus.PAUSED

    def resume(self) -> None:
        if self._status is not ClockStatus.PAUSED:
            return
        self._run()

    def stop(self) -> None:
        """Stop the clock and cancel every pending callback."""
        if self._status is ClockStatus.STOPPED:
            return
        if self._status is ClockStatus.RUNNING:
            self._banked_ms += (self._loop.time() - self._resumed_at) * 1000
        self._cancel_callbacks()
        self._status = ClockStatus.STOPPED

    def _run(self) -> None:
        loop = self._loop
        self._status = ClockStatus.RUNNING
        self._resumed_at = loop.time()
        self._ticks = 0
        remaining_s = max(0.0, self._duration - self._banked_ms) / 1000
        self._done_handle = loop.call_later(remaining_s, self._handle_done)
        self._schedule_tick()

    def _schedule_tick(self) -> None:
        loop = self._loop
        self._ticks += 1
        due = self._resumed_at + self._ticks * self.interval / 1000
        self._tick_handle = loop.call_later(max(0.0, due - loop.time()), self._handle_tick)

    def _handle_tick(self) -> None:
        self._tick_handle = None
        if self._status is not ClockStatus.RUNNING:
            return
        self._schedule_tick()
        if self.on_tick is not None:
            self.on_tick(self.time)

    def _handle_done(self) -> None:
        self._done_handle = None
        if self._status is not ClockStatus.RUNNING:
            return
        self._banked_ms = float(self._duration)
        self._cancel_callbacks()
        self._status = ClockStatus.STOPPED
        if self.on_done is not None:
            self.on_done()

    def _cancel_callbacks(self) -> None:
        for handle in (self._tick_handle, self._done_handle):
            if handle is not None:
                handle.cancel()
        self._tick_handle = None
        self._done_handle = None


class DisabledClock:
    """Stand-in for the inspection clock when inspection is turned off.

    Always stopped with zero time, so phase derivation needs no special case.
    """

    stopwatch = False
    status = ClockStatus.STOPPED
    duration = 0
    elapsed = 0
    time = 0

    def start(self, duration: int) -> None:
        raise RuntimeError("Inspection is disabled; the inspection clock cannot start")

    def pause(self) -> None:
        pass

    def resume(self) -> None:
        pass

    def stop(self) -> None:
        pass
