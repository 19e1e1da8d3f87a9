"""Period windowing and nearest-point lookup.

Both functions are pure and run on every pointer drag or period switch, so
they take plain observation lists and keep no state between calls.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional, Sequence

from .models import DataPoint, Period


def select_window(update_cycle: int, period: Period) -> Optional[int]:
    """Translate a period into a trailing sample count.

    Args:
        update_cycle: Months between releases (1 = monthly, 3 = quarterly).
        period: Requested display window.

    Returns:
        Number of most recent samples to keep, or None when the whole series
        should be shown.
    """
    return period.window_size(update_cycle)


def apply_window(observations: Sequence[DataPoint], count: Optional[int]) -> list[DataPoint]:
    """Keep the trailing ``count`` observations; the whole series if count is None or too large."""
    if count is None:
        return list(observations)
    if count <= 0:
        raise ValueError(f"window size must be positive, got {count}")
    return list(observations[-count:])


def _distance(point_date: date, target: date) -> timedelta:
    if isinstance(target, datetime):
        return abs(target - datetime.combine(point_date, time.min, tzinfo=target.tzinfo))
    return abs(target - point_date)


def locate_nearest(observations: Sequence[DataPoint], target: date) -> DataPoint:
    """Find the observation closest in time to ``target``.

    A ``datetime`` target compares against midnight of each observation's day.
    On a tie the earlier observation wins, since ``min`` keeps the first
    minimal element.
    """
    if not observations:
        raise ValueError("Cannot locate a point in an empty series")
    return min(observations, key=lambda o: _distance(o.date, target))
