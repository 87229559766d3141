from __future__ import annotations

import math
from datetime import datetime, time, timedelta
from typing import Tuple


# PUBLIC_INTERFACE
def get_now() -> datetime:
    """
    Current naive local time. Used as a FastAPI dependency so tests can pin
    the clock through app.dependency_overrides.
    """
    return datetime.now()


def start_of_day(moment: datetime) -> datetime:
    """Midnight of the calendar day containing `moment`."""
    return datetime.combine(moment.date(), time.min)


# PUBLIC_INTERFACE
def incoming_window(days: float, now: datetime) -> Tuple[datetime, datetime]:
    """
    Compute the inclusive [start, end] window for incoming todos.

    Args:
        days: Extra days to look ahead; 0 means the rest of today. Fractions
            move the upper bound by part of a day.
        now: The current moment.

    Returns:
        (now, midnight of today + days + 1)

    Raises:
        ValueError: if `days` is not finite or the window end falls outside
            the representable datetime range.
    """
    if not math.isfinite(days):
        raise ValueError("days must be a finite number")
    try:
        return now, start_of_day(now) + timedelta(days=days + 1)
    except OverflowError as e:
        raise ValueError("days is out of range") from e
