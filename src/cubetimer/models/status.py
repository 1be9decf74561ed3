"""Phase and clock status enumerations."""

from enum import Enum


class TimerStatus(str, Enum):
    """Phase of an attempt, derived from which clock is running."""

    STOPPED = "STOPPED"
    INSPECTING = "INSPECTING"
    SOLVING = "SOLVING"


class ClockStatus(str, Enum):
    """State of a single countdown or stopwatch clock."""

    RUNNING = "running"
    PAUSED = "paused"
    STOPPED = "stopped"
