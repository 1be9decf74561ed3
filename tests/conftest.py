"""Shared test fixtures for cubetimer tests."""

import heapq
import itertools
from collections.abc import Callable
from typing import Any

import pytest
from typer.testing import CliRunner

from cubetimer import AttemptController, EventType, TimerConfig

# Float slack when comparing virtual deadlines built from summed intervals
_EPSILON = 1e-9


class FakeHandle:
    """Cancellable handle returned by FakeScheduler.call_later."""

    def __init__(self, when: float, callback: Callable[..., Any], args: tuple[Any, ...]) -> None:
        self.when = when
        self.callback = callback
        self.args = args
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled


class FakeScheduler:
    """Virtual-time stand-in for an asyncio event loop.

    Nothing runs until ``advance()`` is called; callbacks due at the same
    instant run in scheduling order, like asyncio.
    """

    def __init__(self) -> None:
        self._now = 0.0
        self._queue: list[tuple[float, int, FakeHandle]] = []
        self._seq = itertools.count()

    def time(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> FakeHandle:
        handle = FakeHandle(self._now + delay, callback, args)
        heapq.heappush(self._queue, (handle.when, next(self._seq), handle))
        return handle

    def advance(self, ms: float) -> None:
        """Run every callback due within the next ``ms`` milliseconds."""
        target = self._now + ms / 1000
        while self._queue and self._queue[0][0] <= target + _EPSILON:
            when, _, handle = heapq.heappop(self._queue)
            if handle.cancelled():
                continue
            self._now = max(self._now, when)
            handle.callback(*handle.args)
        self._now = target

    @property
    def pending(self) -> int:
        """Number of callbacks still scheduled."""
        return sum(1 for _, _, handle in self._queue if not handle.cancelled())


class EventRecorder:
    """Collects every notification a controller emits, in order."""

    def __init__(self, controller: AttemptController) -> None:
        self.events: list[tuple[EventType, Any]] = []
        for event_type in EventType:
            controller.on(event_type, self._recorder(event_type))

    def _recorder(self, event_type: EventType) -> Callable[[Any], None]:
        return lambda payload: self.events.append((event_type, payload))

    def of(self, event_type: EventType) -> list[Any]:
        return [payload for kind, payload in self.events if kind is event_type]

    def types(self) -> list[EventType]:
        return [kind for kind, _ in self.events]

    def clear(self) -> None:
        self.events.clear()


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def make_controller(scheduler: FakeScheduler) -> Callable[..., AttemptController]:
    """Build controllers bound to the virtual scheduler.

    Keyword arguments are passed to TimerConfig.
    """

    def _make(**options: Any) -> AttemptController:
        return AttemptController(TimerConfig(**options), scheduler=scheduler)

    return _make


@pytest.fixture
def controller(make_controller: Callable[..., AttemptController]) -> AttemptController:
    """Controller with default options (inspection on, 100ms ticks)."""
    return make_controller()


@pytest.fixture
def recorder(controller: AttemptController) -> EventRecorder:
    return EventRecorder(controller)


@pytest.fixture
def record() -> Callable[[AttemptController], EventRecorder]:
    """Attach an EventRecorder to any controller."""
    return EventRecorder
