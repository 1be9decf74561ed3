"""Attempt result model.

An AttemptResult is handed to SOLVE_END listeners and returned from
``stop()``/``abort()`` exactly once per attempt. It is frozen: the controller
builds it from its own private draft at finalization.
"""

from pydantic import Field

from .base import FrozenModel


class AttemptResult(FrozenModel):
    """Outcome of one inspection + solve attempt.

    Attributes:
        inspection_time: Inspection ms elapsed, None if inspection never ran
            to a solve start or overrun.
        is_dnf: Attempt was forcibly failed (overrun, time limit or abort).
        aborted: Failure was an explicit user cancellation.
        penalized: The +2 second penalty was incurred during inspection.
        solve_time: Solve ms elapsed, None if solving never started.

    Note:
        ``is_dnf`` serializes as ``isDNF`` to match the established payload
        shape; the remaining fields use plain camelCase.
    """

    inspection_time: int | None = Field(default=None, description="Inspection time in ms")
    is_dnf: bool = Field(default=False, alias="isDNF", description="Did not finish")
    aborted: bool = Field(default=False, description="Cancelled by the user")
    penalized: bool = Field(default=False, description="+2 penalty incurred")
    solve_time: int | None = Field(default=None, description="Solve time in ms")
