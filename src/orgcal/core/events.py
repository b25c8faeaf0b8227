"""Calendar event synthesis - pure business logic with no I/O."""

from dataclasses import dataclass
from datetime import datetime

from .outline import Heading
from .properties import (
    make_color,
    make_description,
    make_text_color,
    title_with_keyword,
    title_without_keyword,
)
from .timestamp import (
    PointInTime,
    Repeater,
    TimeUnit,
    as_datetime,
    format_duration,
    format_point,
)

DEADLINE_PREFIX = "DL: "
SCHEDULED_PREFIX = "SCL: "

FREQUENCIES = {
    TimeUnit.YEAR: "yearly",
    TimeUnit.MONTH: "monthly",
    TimeUnit.WEEK: "weekly",
    TimeUnit.DAY: "daily",
    TimeUnit.HOUR: "hourly",
}


@dataclass(frozen=True)
class RRule:
    """Recurrence rule in the shape calendar widgets expect."""

    dtstart: PointInTime
    freq: str
    interval: int

    def to_dict(self) -> dict:
        return {
            "dtstart": format_point(self.dtstart),
            "freq": self.freq,
            "interval": self.interval,
        }


@dataclass(frozen=True)
class OutputEvent:
    """A calendar event ready for encoding. Unset optional fields are omitted."""

    title: str
    start: PointInTime
    end: datetime | None = None
    duration: str | None = None
    description: str | None = None
    rrule: RRule | None = None
    color: str | None = None
    text_color: str | None = None
    file_path: str | None = None

    def to_dict(self) -> dict:
        """Serialize with camelCase keys, dropping fields that have no value."""
        fields = {
            "title": self.title,
            "rrule": self.rrule.to_dict() if self.rrule else None,
            "start": format_point(self.start),
            "end": format_point(self.end) if self.end else None,
            "duration": self.duration,
            "description": self.description,
            "color": self.color,
            "textColor": self.text_color,
            "filePath": self.file_path,
        }
        return {key: value for key, value in fields.items() if value is not None}


def make_rrule(start: PointInTime, repeater: Repeater | None) -> RRule | None:
    """Translate an Org repeater into a recurrence rule anchored at ``start``."""
    if repeater is None:
        return None
    return RRule(dtstart=start, freq=FREQUENCIES[repeater.unit], interval=repeater.interval)


def make_file_path(file_path: str) -> str | None:
    return file_path or None


def _make_event(
    heading: Heading,
    title: str,
    start: PointInTime,
    end: datetime | None,
    duration: str | None,
    rrule: RRule | None,
    file_path: str,
) -> OutputEvent:
    return OutputEvent(
        title=title,
        start=start,
        end=end,
        duration=duration,
        description=make_description(heading),
        rrule=rrule,
        color=make_color(heading),
        text_color=make_text_color(heading),
        file_path=make_file_path(file_path),
    )


def event_from_point(
    heading: Heading,
    start: PointInTime,
    repeater: Repeater | None,
    prefix: str,
    file_path: str = "",
) -> OutputEvent:
    """Deadline or scheduled entry without a range: start only, never a duration."""
    return _make_event(
        heading,
        title_with_keyword(heading, prefix),
        start,
        None,
        None,
        make_rrule(start, repeater),
        file_path,
    )


def event_from_range(
    heading: Heading,
    start: PointInTime,
    end: PointInTime,
    repeater: Repeater | None,
    prefix: str,
    file_path: str = "",
) -> OutputEvent:
    """
    Deadline or scheduled entry with a range.

    Start and end are forced to date-time form. Only repeating ranges carry
    a duration.
    """
    rrule = make_rrule(start, repeater)
    duration = format_duration(start, end) if rrule else None
    return _make_event(
        heading,
        title_with_keyword(heading, prefix),
        as_datetime(start),
        as_datetime(end),
        duration,
        rrule,
        file_path,
    )


def event_from_deadline(heading: Heading, start: PointInTime, repeater: Repeater | None, file_path: str = "") -> OutputEvent:
    return event_from_point(heading, start, repeater, DEADLINE_PREFIX, file_path)


def event_from_scheduled(heading: Heading, start: PointInTime, repeater: Repeater | None, file_path: str = "") -> OutputEvent:
    return event_from_point(heading, start, repeater, SCHEDULED_PREFIX, file_path)


def event_from_deadline_range(
    heading: Heading,
    start: PointInTime,
    end: PointInTime,
    repeater: Repeater | None,
    file_path: str = "",
) -> OutputEvent:
    return event_from_range(heading, start, end, repeater, DEADLINE_PREFIX, file_path)


def event_from_scheduled_range(
    heading: Heading,
    start: PointInTime,
    end: PointInTime,
    repeater: Repeater | None,
    file_path: str = "",
) -> OutputEvent:
    return event_from_range(heading, start, end, repeater, SCHEDULED_PREFIX, file_path)


def event_from_clock(
    heading: Heading,
    start: PointInTime,
    end: PointInTime,
    file_path: str = "",
) -> OutputEvent:
    """Closed clock entry: titled without keyword, always carries a duration."""
    return _make_event(
        heading,
        title_without_keyword(heading, ""),
        as_datetime(start),
        as_datetime(end),
        format_duration(start, end),
        None,
        file_path,
    )
