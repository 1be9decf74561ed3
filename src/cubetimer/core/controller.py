"""Attempt controller: the inspection/solve state machine.

The controller composes an inspection countdown and a solve stopwatch,
derives the current phase from which of them is running, escalates
inspection penalties, and publishes notifications through an EventEmitter.

Phase transitions:

    STOPPED --start_inspection--> INSPECTING --start_solve--> SOLVING
    STOPPED --start_solve (inspection disabled)--> SOLVING
    INSPECTING | SOLVING --stop / abort / overrun / time limit--> STOPPED

All callbacks run serially on the event loop thread.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, NoReturn

from ..config import TimerConfig
from ..constants import INSPECTION_BUDGET_MS, INSPECTION_GRACE_MS
from ..errors import CubeTimerError, ErrorReason
from ..models import (
    AttemptResult,
    ClockStatus,
    EventType,
    InspectionWarningEvent,
    PenaltyEvent,
    PenaltyType,
    StatusChangeEvent,
    TickEvent,
    TimerStatus,
)
from .clock import Clock, DisabledClock, Scheduler
from .escalation import EscalationAction, InspectionEscalator
from .notifier import EventEmitter, Listener
from .ticker import TickBroadcaster

logger = logging.getLogger(__name__)


@dataclass
class _AttemptDraft:
    """Mutable attempt record, owned by the controller until finalized."""

    inspection_time: int | None = None
    is_dnf: bool = False
    aborted: bool = False
    penalized: bool = False
    solve_time: int | None = None

    def freeze(self) -> AttemptResult:
        return AttemptResult(
            inspection_time=self.inspection_time,
            is_dnf=self.is_dnf,
            aborted=self.aborted,
            penalized=self.penalized,
            solve_time=self.solve_time,
        )


class AttemptController:
    """Drives one speedcubing attempt at a time.

    Args:
        config: Timer options; defaults to ``TimerConfig()``
        scheduler: Event loop (or test double) used by the clocks and the
            tick broadcaster; defaults to the running asyncio loop

    Example:
        >>> controller = AttemptController(TimerConfig(no_inspect=True))
        >>> unsubscribe = controller.on(EventType.SOLVE_END, print)
        >>> controller.start_solve()  # inside a running event loop
        >>> result = controller.stop()
    """

    def __init__(
        self,
        config: TimerConfig | None = None,
        *,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._config = config or TimerConfig()
        self._events = EventEmitter()
        self._escalator = InspectionEscalator()
        self._attempt = _AttemptDraft()

        self._inspection_clock: Clock | DisabledClock
        if self._config.no_inspect:
            self._inspection_clock = DisabledClock()
        else:
            self._inspection_clock = Clock(
                interval=self._config.interval,
                scheduler=scheduler,
                on_tick=self._on_inspection_tick,
                on_done=self._on_inspection_done,
            )
        self._solve_clock = Clock(
            stopwatch=True,
            interval=self._config.interval,
            scheduler=scheduler,
            on_done=self._on_time_limit,
        )
        self._ticker = TickBroadcaster(self._config.interval, self._broadcast_tick, scheduler)

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def configuration(self) -> TimerConfig:
        return self._config

    @property
    def status(self) -> TimerStatus:
        if self._inspection_clock.status is not ClockStatus.STOPPED:
            return TimerStatus.INSPECTING
        if self._solve_clock.status is not ClockStatus.STOPPED:
            return TimerStatus.SOLVING
        return TimerStatus.STOPPED

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def on(self, event_type: EventType, listener: Listener) -> Callable[[], None]:
        """Subscribe to a notification; returns an unsubscribe callable."""
        return self._events.on(event_type, listener)

    def off(self, event_type: EventType, listener: Listener) -> None:
        self._events.off(event_type, listener)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start_inspection(self) -> None:
        """Begin a new attempt with the 15 + 2 second inspection countdown.

        Raises:
            CubeTimerError: If inspection is disabled, already running, or a
                solve is in progress. The controller is reset to STOPPED
                before the error is raised.
        """
        if self._config.no_inspect:
            self._fail(ErrorReason.INSPECTION_DISABLED)
        if self._inspection_clock.status is ClockStatus.RUNNING:
            self._fail(ErrorReason.INSPECTION_ALREADY_RUNNING)
        if self.status is TimerStatus.SOLVING:
            self._fail(ErrorReason.INVALID_PHASE_FOR_INSPECTION)

        self._attempt = _AttemptDraft()
        self._escalator.reset()
        self._inspection_clock.start(INSPECTION_BUDGET_MS)
        logger.debug("Inspection started")
        self._emit_status(TimerStatus.INSPECTING)
        self._ticker.start()

    def start_solve(self) -> None:
        """Start the solve stopwatch, ending inspection if it is running.

        Raises:
            CubeTimerError: If a solve is already running, or inspection is
                enabled but was never started. State is left untouched.

        If a warning or penalty listener ends the attempt, the solve is not
        started.
        """
        if self._solve_clock.status is ClockStatus.RUNNING:
            raise CubeTimerError(ErrorReason.SOLVE_ALREADY_RUNNING)

        if self.status is TimerStatus.INSPECTING:
            remaining = self._inspection_clock.time
            if not self._escalate(remaining):
                logger.debug("Attempt ended by a listener before the solve started")
                return
            self._attempt.inspection_time = INSPECTION_BUDGET_MS - remaining
            self._inspection_clock.stop()
            logger.debug(f"Inspection ended after {self._attempt.inspection_time}ms")
        elif self._config.no_inspect:
            self._attempt = _AttemptDraft()
        else:
            raise CubeTimerError(ErrorReason.INSPECTION_NOT_STARTED)

        self._solve_clock.start(self._config.time_limit * 1000)
        logger.debug("Solve started")
        self._emit_status(TimerStatus.SOLVING)
        self._ticker.start()

    def stop(self) -> AttemptResult:
        """End the attempt normally.

        Returns:
            The finalized result (also delivered to SOLVE_END listeners)

        Raises:
            CubeTimerError: If the controller is already stopped
        """
        if self.status is TimerStatus.STOPPED:
            raise CubeTimerError(ErrorReason.ALREADY_STOPPED)
        return self._finalize()

    def abort(self) -> AttemptResult:
        """Cancel the attempt; the result is an aborted DNF.

        Raises:
            CubeTimerError: If the controller is already stopped
        """
        if self.status is TimerStatus.STOPPED:
            raise CubeTimerError(ErrorReason.ALREADY_STOPPED)
        self._attempt.aborted = True
        self._attempt.is_dnf = True
        logger.debug(f"Attempt aborted during {self.status.value}")
        return self._finalize()

    # ------------------------------------------------------------------
    # Clock callbacks
    # ------------------------------------------------------------------

    def _on_inspection_tick(self, remaining: int) -> None:
        if self.status is TimerStatus.INSPECTING:
            self._escalate(remaining)

    def _on_inspection_done(self) -> None:
        if not self._escalate(0):
            return
        self._attempt.inspection_time = INSPECTION_BUDGET_MS
        self._attempt.is_dnf = True
        logger.debug("Inspection overrun")
        self._finalize()

    def _on_time_limit(self) -> None:
        self._attempt.solve_time = self._config.time_limit * 1000
        self._attempt.is_dnf = True
        logger.debug(f"Solve exceeded the {self._config.time_limit}s time limit")
        self._finalize()

    def _broadcast_tick(self) -> None:
        if not self._events.listener_count(EventType.TICK):
            return
        status = self.status
        if status is TimerStatus.INSPECTING:
            time = self._inspection_clock.time
        elif status is TimerStatus.SOLVING:
            time = self._solve_clock.time
        else:
            return
        self._emit(EventType.TICK, TickEvent(status=status, time=time))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _escalate(self, remaining: int) -> bool:
        """Emit the warnings and penalty ``remaining`` has reached.

        Returns:
            False if a listener ended the attempt, in which case the
            remaining actions are dropped
        """
        draft = self._attempt
        for action in self._escalator.advance(remaining):
            if self._attempt is not draft:
                return False
            if action is EscalationAction.WARN:
                time_remaining = remaining - INSPECTION_GRACE_MS
                logger.debug(f"Inspection warning: {time_remaining}ms left")
                self._emit(
                    EventType.INSPECTION_WARNING,
                    InspectionWarningEvent(time_remaining=time_remaining),
                )
            else:
                draft.penalized = True
                logger.debug("Inspection +2 penalty")
                self._emit(EventType.PENALTY, PenaltyEvent(type=PenaltyType.PLUS_TWO))
        return self._attempt is draft

    def _finalize(self) -> AttemptResult:
        if self._solve_clock.status is ClockStatus.RUNNING:
            self._attempt.solve_time = self._solve_clock.time
        self._halt()
        result = self._attempt.freeze()
        self._attempt = idle = _AttemptDraft()
        logger.info(
            f"Attempt finished: solve={result.solve_time}ms inspection={result.inspection_time}ms "
            f"dnf={result.is_dnf} aborted={result.aborted} penalized={result.penalized}"
        )
        self._emit(EventType.SOLVE_END, result)
        # A SOLVE_END listener may already have begun the next attempt
        if self._attempt is idle:
            self._emit_status(TimerStatus.STOPPED)
        return result

    def _halt(self) -> None:
        """Stop both clocks and the broadcaster and reset escalation."""
        self._inspection_clock.stop()
        self._solve_clock.stop()
        self._ticker.stop()
        self._escalator.reset()

    def _fail(self, reason: ErrorReason) -> NoReturn:
        was_active = self.status is not TimerStatus.STOPPED
        self._halt()
        if was_active:
            self._attempt = _AttemptDraft()
            self._emit_status(TimerStatus.STOPPED)
        raise CubeTimerError(reason)

    def _emit_status(self, status: TimerStatus) -> None:
        self._emit(EventType.STATUS_CHANGE, StatusChangeEvent(status=status))

    def _emit(self, event_type: EventType, payload: Any) -> None:
        self._events.emit(event_type, payload)
