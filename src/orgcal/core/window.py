"""Relative time-window filter.

Pure functions - "now" is always passed in by the caller.
"""

from datetime import datetime

from .timestamp import PointInTime, as_datetime


def is_n_days_before(point: PointInTime, ndays: int, now: datetime) -> bool:
    """True when ``point`` lies at least ``ndays`` whole days before ``now``."""
    if ndays <= 0:
        return False
    # timedelta.days is the floor of the span in days
    return (now - as_datetime(point)).days >= ndays


def is_n_days_after(point: PointInTime, ndays: int, now: datetime) -> bool:
    """True when ``point`` lies at least ``ndays`` whole days after ``now``."""
    if ndays <= 0:
        return False
    return (as_datetime(point) - now).days >= ndays


def included(
    point: PointInTime,
    before_days: int,
    after_days: int,
    now: datetime,
) -> bool:
    """
    Decide whether a point falls inside the inclusion window around ``now``.

    A bound of zero or less disables that side of the window.
    """
    return not is_n_days_before(point, before_days, now) and not is_n_days_after(
        point, after_days, now
    )
