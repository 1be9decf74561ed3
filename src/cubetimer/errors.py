"""Errors raised by the attempt controller."""

from enum import Enum


class ErrorReason(str, Enum):
    """Reason codes distinguishing controller precondition failures."""

    INSPECTION_DISABLED = "inspection_disabled"
    INSPECTION_ALREADY_RUNNING = "inspection_already_running"
    INVALID_PHASE_FOR_INSPECTION = "invalid_phase_for_inspection"
    SOLVE_ALREADY_RUNNING = "solve_already_running"
    INSPECTION_NOT_STARTED = "inspection_not_started"
    ALREADY_STOPPED = "already_stopped"


_MESSAGES: dict[ErrorReason, str] = {
    ErrorReason.INSPECTION_DISABLED: (
        "Tried calling 'start_inspection' with the 'no_inspect' option set to true!"
    ),
    ErrorReason.INSPECTION_ALREADY_RUNNING: (
        "Tried calling 'start_inspection' more than once during a single solve!"
    ),
    ErrorReason.INVALID_PHASE_FOR_INSPECTION: (
        "Tried calling 'start_inspection' while in the 'Solving' phase!"
    ),
    ErrorReason.SOLVE_ALREADY_RUNNING: "Tried calling 'start_solve' while in the 'Solving' phase!",
    ErrorReason.INSPECTION_NOT_STARTED: (
        "Tried calling 'start_solve' before 'start_inspection' with inspection enabled!"
    ),
    ErrorReason.ALREADY_STOPPED: "Tried to stop an attempt while the timer is already stopped!",
}


class CubeTimerError(Exception):
    """Invalid call sequence on an attempt controller.

    Attributes:
        reason: Machine-readable reason code
    """

    def __init__(self, reason: ErrorReason, message: str | None = None) -> None:
        self.reason = reason
        super().__init__(message or _MESSAGES[reason])
