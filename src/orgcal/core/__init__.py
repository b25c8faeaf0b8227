"""Functional core - pure business logic with no I/O."""

from .timestamp import Repeater, TimeRange, TimeUnit, Timestamp, format_duration, format_point
from .window import included
from .outline import Clock, Document, Heading, Marker
from .properties import make_color, make_description, make_text_color
from .events import OutputEvent, RRule, make_rrule
from .traversal import clock_events, planning_events

__all__ = [
    # Timestamps
    "Repeater",
    "TimeRange",
    "TimeUnit",
    "Timestamp",
    "format_duration",
    "format_point",
    # Window
    "included",
    # Outline
    "Clock",
    "Document",
    "Heading",
    "Marker",
    # Properties
    "make_color",
    "make_description",
    "make_text_color",
    # Events
    "OutputEvent",
    "RRule",
    "make_rrule",
    "planning_events",
    "clock_events",
]
