"""
Time arithmetic for the timer and the reports.

All timestamps are integer milliseconds since the epoch. Workday attribution
uses local time with a 04:00 boundary, so a session running past midnight
is booked on the previous day.
"""

import datetime
import time

WORKDAY_START_HOUR = 4
MS_PER_MINUTE = 60000
MINUTES_PER_HOUR = 60


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds"""
    return int(time.time() * 1000)


def elapsed_minutes(start_ms: int, end_ms: int) -> int:
    """
    Whole minutes between two timestamps.

    The caller guarantees end_ms >= start_ms. If that is violated the result
    is a negative integer; it is not clamped here.
    """
    return (end_ms - start_ms) // MS_PER_MINUTE


def workday_anchor(timestamp_ms: int) -> str:
    """
    Return the logical workday (YYYY-MM-DD) a timestamp belongs to.

    Args:
        timestamp_ms: Epoch milliseconds, interpreted in local time

    Returns:
        ISO date of the previous calendar day when the local hour is before
        WORKDAY_START_HOUR, otherwise of the current calendar day.
    """
    moment = datetime.datetime.fromtimestamp(timestamp_ms / 1000)
    anchor = moment.date()
    if moment.hour < WORKDAY_START_HOUR:
        anchor -= datetime.timedelta(days=1)
    return anchor.isoformat()


def format_duration(total_minutes: int) -> str:
    """Format minutes as HH:MM (hours are not capped at 24)"""
    hours, minutes = divmod(total_minutes, MINUTES_PER_HOUR)
    return f"{hours:02d}:{minutes:02d}"
