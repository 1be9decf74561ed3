"""cubetimer: inspection and solve timing for a single speedcubing attempt."""

__version__ = "0.1.0"

from .config import TimerConfig
from .core import AttemptController
from .errors import CubeTimerError, ErrorReason
from .models import (
    AttemptResult,
    EventType,
    InspectionWarningEvent,
    PenaltyEvent,
    PenaltyType,
    StatusChangeEvent,
    TickEvent,
    TimerStatus,
)

__all__ = [
    "AttemptController",
    "AttemptResult",
    "CubeTimerError",
    "ErrorReason",
    "EventType",
    "InspectionWarningEvent",
    "PenaltyEvent",
    "PenaltyType",
    "StatusChangeEvent",
    "TickEvent",
    "TimerConfig",
    "TimerStatus",
    "__version__",
]
