"""Human-readable rendering of attempt times."""

from .constants import PLUS_TWO_MS
from .models import AttemptResult


def format_duration(ms: int, decimals: int = 2) -> str:
    """Format milliseconds as ``S.ss`` below a minute, ``M:SS.ss`` above.

    Digits beyond ``decimals`` are truncated, not rounded, so a displayed
    time never exceeds the measured one.
    """
    if ms < 0:
        return "-" + format_duration(-ms, decimals)
    scale = 10 ** (3 - decimals)
    ms = ms // scale * scale
    minutes, rem_ms = divmod(ms, 60_000)
    seconds, millis = divmod(rem_ms, 1000)
    fraction = f".{millis // scale:0{decimals}d}" if decimals else ""
    if minutes:
        return f"{minutes}:{seconds:02d}{fraction}"
    return f"{seconds}{fraction}"


def format_result(result: AttemptResult, decimals: int = 2) -> str:
    """Render a finalized attempt the way a scorecard would show it.

    Examples:
        DNF, DNF (aborted), 12.34, 14.34+ (penalized, two seconds added)
    """
    if result.is_dnf:
        return "DNF (aborted)" if result.aborted else "DNF"
    if result.solve_time is None:
        return "-"
    if result.penalized:
        return format_duration(result.solve_time + PLUS_TWO_MS, decimals) + "+"
    return format_duration(result.solve_time, decimals)
