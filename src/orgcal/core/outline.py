"""Parsed outline model handed to the core by a parser adapter."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from .timestamp import PointInTime, TimeRange, Timestamp

Planning = Timestamp | TimeRange


class Marker(Enum):
    """Position of a node in the flattened document stream."""

    OPEN = "open"
    CLOSE = "close"


@dataclass(frozen=True)
class Heading:
    """
    A titled outline node with its planning data and property drawer.

    ``level``, ``priority``, ``tags`` and ``closed`` are carried through from
    the parser for callers; event synthesis does not read them.
    """

    raw: str
    level: int = 1
    keyword: str | None = None
    priority: str | None = None
    tags: tuple[str, ...] = ()
    properties: tuple[tuple[str, str], ...] = ()
    deadline: Planning | None = None
    scheduled: Planning | None = None
    closed: Planning | None = None
    children: tuple["Heading | Clock", ...] = ()


@dataclass(frozen=True)
class Clock:
    """A time-log entry. Open clocks have no end.

    ``duration`` is the text recorded after ``=>``, kept as written; event
    durations are always recomputed from start and end.
    """

    start: PointInTime
    end: PointInTime | None = None
    duration: str | None = None

    @property
    def is_closed(self) -> bool:
        return self.end is not None


EMPTY_HEADING = Heading(raw="", level=0)


@dataclass(frozen=True)
class Document:
    """
    A parsed outline.

    ``nodes`` holds the top-level headings (and any clocks that appear before
    the first heading). ``iter()`` flattens the tree depth-first, emitting an
    OPEN marker before a node's children and a CLOSE marker after them.
    """

    nodes: tuple[Heading | Clock, ...] = field(default_factory=tuple)

    def iter(self) -> Iterator[tuple[Marker, Heading | Clock]]:
        for node in self.nodes:
            yield from _walk(node)


def _walk(node: Heading | Clock) -> Iterator[tuple[Marker, Heading | Clock]]:
    yield Marker.OPEN, node
    if isinstance(node, Heading):
        for child in node.children:
            yield from _walk(child)
    yield Marker.CLOSE, node
