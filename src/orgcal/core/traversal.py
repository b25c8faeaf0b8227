"""Walk a parsed document and collect calendar events.

Pure functions - no I/O. Events come back in document order.
"""

import logging
from datetime import datetime
from typing import Iterator

from .events import (
    OutputEvent,
    event_from_clock,
    event_from_deadline,
    event_from_deadline_range,
    event_from_scheduled,
    event_from_scheduled_range,
)
from .outline import EMPTY_HEADING, Clock, Document, Heading, Marker, Planning
from .timestamp import TimeRange, format_point
from .window import included

logger = logging.getLogger(__name__)


def _planning_event(
    heading: Heading,
    planning: Planning,
    is_deadline: bool,
    file_path: str,
) -> OutputEvent:
    if isinstance(planning, TimeRange):
        build_range = event_from_deadline_range if is_deadline else event_from_scheduled_range
        return build_range(heading, planning.start, planning.end, planning.repeater, file_path)
    build_point = event_from_deadline if is_deadline else event_from_scheduled
    return build_point(heading, planning.start, planning.repeater, file_path)


def planning_events(
    document: Document,
    before_days: int,
    after_days: int,
    now: datetime,
    file_path: str = "",
) -> list[OutputEvent]:
    """
    Collect deadline and scheduled events.

    Each heading yields up to two events, deadline first. Only active
    timestamps count, and each candidate is kept only if its start falls
    inside the window around ``now``.
    """
    events = []
    for marker, node in document.iter():
        if marker is not Marker.OPEN or not isinstance(node, Heading):
            continue
        for planning, is_deadline in ((node.deadline, True), (node.scheduled, False)):
            if planning is None or not planning.active:
                continue
            if not included(planning.start, before_days, after_days, now):
                logger.debug(f"Outside window: {node.raw!r} at {format_point(planning.start)}")
                continue
            event = _planning_event(node, planning, is_deadline, file_path)
            logger.debug(f"Emitting {event.title!r} at {format_point(planning.start)}")
            events.append(event)
    return events


def clocks_with_heading(document: Document) -> Iterator[tuple[Heading, Clock]]:
    """Pair every clock with the nearest heading opened before it."""
    heading = EMPTY_HEADING
    for marker, node in document.iter():
        if marker is not Marker.OPEN:
            continue
        if isinstance(node, Heading):
            heading = node
        else:
            yield heading, node


def clock_events(
    document: Document,
    before_days: int,
    after_days: int,
    now: datetime,
    file_path: str = "",
) -> list[OutputEvent]:
    """Collect one event per closed clock entry. Open clocks are skipped."""
    events = []
    for heading, clock in clocks_with_heading(document):
        if not clock.is_closed:
            continue
        if not included(clock.start, before_days, after_days, now):
            logger.debug(f"Outside window: clock under {heading.raw!r} at {format_point(clock.start)}")
            continue
        event = event_from_clock(heading, clock.start, clock.end, file_path)
        logger.debug(f"Emitting clock {event.title!r} at {format_point(clock.start)}")
        events.append(event)
    return events
