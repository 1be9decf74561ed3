"""Pydantic data models for cubetimer.

This package defines the data structures that leave the attempt controller:
- Phase and clock states (TimerStatus, ClockStatus)
- Notification payloads (TickEvent, InspectionWarningEvent, PenaltyEvent,
  StatusChangeEvent)
- The finalized attempt record (AttemptResult)

All payload models are frozen and dump with camelCase aliases:
    >>> from cubetimer.models import AttemptResult
    >>> AttemptResult(is_dnf=True).model_dump(by_alias=True)["isDNF"]
    True
"""

from .events import (
    EventType,
    InspectionWarningEvent,
    PenaltyEvent,
    PenaltyType,
    StatusChangeEvent,
    TickEvent,
)
from .result import AttemptResult
from .status import ClockStatus, TimerStatus

__all__ = [
    "AttemptResult",
    "ClockStatus",
    "EventType",
    "InspectionWarningEvent",
    "PenaltyEvent",
    "PenaltyType",
    "StatusChangeEvent",
    "TickEvent",
    "TimerStatus",
]
