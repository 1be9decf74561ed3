"""Constants for cubetimer."""

# Inspection budget (milliseconds)
NOMINAL_INSPECTION_MS = 15_000
INSPECTION_GRACE_MS = 2_000  # +2 window before the attempt is DNF
INSPECTION_BUDGET_MS = NOMINAL_INSPECTION_MS + INSPECTION_GRACE_MS

# Remaining-time thresholds on the inspection countdown (milliseconds)
FIRST_WARNING_MS = 10_000  # 8 seconds of nominal inspection left
SECOND_WARNING_MS = 5_000  # 3 seconds of nominal inspection left
PENALTY_THRESHOLD_MS = INSPECTION_GRACE_MS

PLUS_TWO_MS = 2_000

# Timer configuration defaults
DEFAULT_INTERVAL_MS = 100
DEFAULT_TIME_LIMIT_S = 10 * 60

# Clock tick period when none is given
DEFAULT_CLOCK_INTERVAL_MS = 1_000
