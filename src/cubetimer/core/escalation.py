"""Inspection penalty escalation.

Escalation is a small forward-only state machine keyed on the inspection
clock's remaining time:

    NONE --(<= 10s left)--> WARNED_ONCE --(<= 5s left)--> WARNED_TWICE
         --(<= 2s left)--> PENALIZED

Each edge fires at most once per attempt. Remaining time counts down the
full 17s budget, so "10s left" is 8s of nominal inspection remaining.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum

from ..constants import FIRST_WARNING_MS, PENALTY_THRESHOLD_MS, SECOND_WARNING_MS


class Escalation(IntEnum):
    """How far an attempt has escalated during inspection."""

    NONE = 0
    WARNED_ONCE = 1
    WARNED_TWICE = 2
    PENALIZED = 3


class EscalationAction(str, Enum):
    """What the controller must do when a threshold is crossed."""

    WARN = "warn"
    PENALIZE = "penalize"


@dataclass(frozen=True)
class Threshold:
    """One edge of the escalation table."""

    at_or_below_ms: int
    action: EscalationAction
    next_state: Escalation


ESCALATION_TABLE: dict[Escalation, Threshold] = {
    Escalation.NONE: Threshold(FIRST_WARNING_MS, EscalationAction.WARN, Escalation.WARNED_ONCE),
    Escalation.WARNED_ONCE: Threshold(
        SECOND_WARNING_MS, EscalationAction.WARN, Escalation.WARNED_TWICE
    ),
    Escalation.WARNED_TWICE: Threshold(
        PENALTY_THRESHOLD_MS, EscalationAction.PENALIZE, Escalation.PENALIZED
    ),
}


class InspectionEscalator:
    """Tracks escalation state for the current attempt."""

    def __init__(self) -> None:
        self.state = Escalation.NONE

    def advance(self, remaining_ms: int) -> list[EscalationAction]:
        """Move through every threshold ``remaining_ms`` has reached.

        Args:
            remaining_ms: Inspection countdown time left

        Returns:
            Actions for the thresholds crossed by this call, in table order
        """
        actions = []
        threshold = ESCALATION_TABLE.get(self.state)
        while threshold is not None and remaining_ms <= threshold.at_or_below_ms:
            actions.append(threshold.action)
            self.state = threshold.next_state
            threshold = ESCALATION_TABLE.get(self.state)
        return actions

    def reset(self) -> None:
        self.state = Escalation.NONE
