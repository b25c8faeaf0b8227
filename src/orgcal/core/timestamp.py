"""Timestamp and recurrence value types - no I/O dependencies.

A point in time is a plain ``date`` (date-only) or ``datetime`` (date with a
time of day). Whether a point carries a time is decided when the source
timestamp is parsed and never changes afterward.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum

logger = logging.getLogger(__name__)

PointInTime = date | datetime


class TimeUnit(Enum):
    """Repeater unit, keyed by its Org-mode letter."""

    YEAR = "y"
    MONTH = "m"
    WEEK = "w"
    DAY = "d"
    HOUR = "h"


@dataclass(frozen=True)
class Repeater:
    """A recurrence specification such as ``+1w``.

    ``mark`` keeps the Org repeater style (``+``, ``++``, ``.+``); the
    calendar recurrence rule only uses unit and interval.
    """

    unit: TimeUnit
    interval: int
    mark: str = "+"


@dataclass(frozen=True)
class Timestamp:
    """A single planning timestamp, optionally repeating."""

    start: PointInTime
    repeater: Repeater | None = None
    active: bool = True


@dataclass(frozen=True)
class TimeRange:
    """A start/end pair. The repeater belongs to the start point."""

    start: PointInTime
    end: PointInTime
    repeater: Repeater | None = None
    active: bool = True


def has_time(point: PointInTime) -> bool:
    """True when the point carries a time of day."""
    return isinstance(point, datetime)


def as_datetime(point: PointInTime) -> datetime:
    """Force a point into date-time form (date-only points become midnight)."""
    if has_time(point):
        return point
    return datetime.combine(point, time(0, 0))


def format_point(point: PointInTime) -> str:
    """Render as ``YYYY-MM-DD`` or ``YYYY-MM-DDTHH:MM:SS``."""
    if has_time(point):
        return point.strftime("%Y-%m-%dT%H:%M:%S")
    return point.strftime("%Y-%m-%d")


def format_duration(start: PointInTime, end: PointInTime) -> str:
    """
    Format the span between two points as ``H:MM:00``.

    Hours are not wrapped into days. A range whose end precedes its start
    produces a negative value, which is returned unchanged.
    """
    total_seconds = int((as_datetime(end) - as_datetime(start)).total_seconds())
    if total_seconds < 0:
        logger.warning(f"Range ends before it starts: {format_point(start)} -> {format_point(end)}")
    hours = total_seconds // 3600
    minutes = (total_seconds - hours * 3600) // 60
    return f"{hours}:{minutes:02d}:00"
