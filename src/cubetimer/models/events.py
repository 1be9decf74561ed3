"""Notification types and payloads emitted by the attempt controller."""

from enum import Enum

from pydantic import Field

from .base import FrozenModel
from .status import TimerStatus


class EventType(str, Enum):
    """Notifications a listener can subscribe to."""

    STATUS_CHANGE = "statusChange"
    TICK = "tick"
    INSPECTION_WARNING = "inspectionWarning"
    PENALTY = "penalty"
    SOLVE_END = "solveEnd"


class PenaltyType(str, Enum):
    """Scoring penalties that can accrue during inspection."""

    PLUS_TWO = "PENALTY_PLUS_TWO"


class StatusChangeEvent(FrozenModel):
    """Payload for EventType.STATUS_CHANGE."""

    status: TimerStatus = Field(description="Phase entered")


class TickEvent(FrozenModel):
    """Payload for EventType.TICK.

    Attributes:
        status: Phase at the time of sampling
        time: Remaining ms while inspecting, elapsed ms while solving
    """

    status: TimerStatus
    time: int


class InspectionWarningEvent(FrozenModel):
    """Payload for EventType.INSPECTION_WARNING."""

    time_remaining: int = Field(description="Nominal inspection time left in ms")


class PenaltyEvent(FrozenModel):
    """Payload for EventType.PENALTY."""

    type: PenaltyType = PenaltyType.PLUS_TWO
