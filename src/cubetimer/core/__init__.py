"""Core timing logic for cubetimer.

This package contains the attempt engine with no terminal I/O:
- clock: countdown/stopwatch clocks on an asyncio-style scheduler
- notifier: subscribe/emit delivery of controller notifications
- escalation: inspection warning and +2 penalty state machine
- ticker: periodic status/time sampler
- controller: the inspection/solve attempt state machine
"""

from .clock import Cancellable, Clock, DisabledClock, Scheduler, resolve_scheduler
from .controller import AttemptController
from .escalation import ESCALATION_TABLE, Escalation, EscalationAction, InspectionEscalator
from .notifier import EventEmitter, Listener
from .ticker import TickBroadcaster

__all__ = [
    "ESCALATION_TABLE",
    "AttemptController",
    "Cancellable",
    "Clock",
    "DisabledClock",
    "Escalation",
    "EscalationAction",
    "EventEmitter",
    "InspectionEscalator",
    "Listener",
    "Scheduler",
    "TickBroadcaster",
    "resolve_scheduler",
]
