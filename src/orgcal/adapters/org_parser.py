"""Org-mode text parser adapter.

Understands the subset of Org syntax the calendar export needs: headlines,
planning lines, property drawers, CLOCK lines and in-buffer TODO keywords.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime

from orgcal.core.outline import Clock, Document, Heading, Planning
from orgcal.core.timestamp import PointInTime, Repeater, TimeRange, TimeUnit, Timestamp

logger = logging.getLogger(__name__)

DEFAULT_TODO_KEYWORDS = ("TODO", "DONE")

HEADLINE_RE = re.compile(r"^(?P<stars>\*+)(?:[ \t]+(?P<rest>.*))?$")
PRIORITY_RE = re.compile(r"^\[#(?P<priority>[A-Za-z0-9])\]\s*")
TAGS_RE = re.compile(r"(?:^|\s+)(?P<tags>:(?:[\w@#%]+:)+)\s*$")
PLANNING_RE = re.compile(r"^\s*(?:DEADLINE|SCHEDULED|CLOSED):")
PLANNING_SPLIT_RE = re.compile(r"\b(DEADLINE|SCHEDULED|CLOSED):")
PROPERTY_RE = re.compile(r"^\s*:(?P<key>[^:\s]+):(?:[ \t]+(?P<value>.*))?$")
CLOCK_RE = re.compile(r"^\s*CLOCK:\s*(?P<timestamp>\[[^\]]*\](?:--\[[^\]]*\])?)(?:\s*=>\s*(?P<duration>-?\d+:\d{2}))?\s*$")
TODO_SETTING_RE = re.compile(r"^\s*#\+(?:SEQ_|TYP_)?TODO:(?P<words>.*)$", re.IGNORECASE)

TIMESTAMP_RE = re.compile(
    r"(?P<open>[<\[])"
    r"(?P<date>\d{4}-\d{2}-\d{2})"
    r"(?:[ \t]+(?P<dow>[^\s\d>\]+-]+))?"
    r"(?:[ \t]+(?P<time>\d{1,2}:\d{2})(?:-(?P<time_end>\d{1,2}:\d{2}))?)?"
    r"(?P<modifiers>(?:[ \t]+(?:\.\+|\+\+|\+|--|-)\d+[hdwmy])*)"
    r"[ \t]*(?P<close>[>\]])"
)
REPEATER_RE = re.compile(r"^(?P<mark>\.\+|\+\+|\+)(?P<value>\d+)(?P<unit>[hdwmy])$")
DIARY_RE = re.compile(r"^<%%\(.*\)>$")


class OrgSourceError(Exception):
    """Base error for Org sources that cannot be turned into events."""


class OrgParseError(OrgSourceError):
    """Raised when Org text cannot be parsed."""


def parse_timestamp(text: str) -> Planning:
    """
    Parse an Org timestamp such as ``<2022-07-26 Tue 10:00-11:00 +1w>``.

    Returns a Timestamp, or a TimeRange for ``<a>--<b>`` and same-day
    ``HH:MM-HH:MM`` forms.
    """
    text = text.strip()
    first = TIMESTAMP_RE.match(text)
    if not first or not _brackets_match(first):
        raise OrgParseError(f"Invalid timestamp: {text!r}")

    active = first["open"] == "<"
    start = _point(first["date"], first["time"])
    repeater = _repeater(first["modifiers"])
    rest = text[first.end():]

    if rest.startswith("--"):
        second = TIMESTAMP_RE.match(rest[2:])
        if not second or not _brackets_match(second):
            raise OrgParseError(f"Invalid timestamp range: {text!r}")
        end = _point(second["date"], second["time"])
        return TimeRange(start=start, end=end, repeater=repeater, active=active)

    if first["time_end"]:
        end = _point(first["date"], first["time_end"])
        return TimeRange(start=start, end=end, repeater=repeater, active=active)

    return Timestamp(start=start, repeater=repeater, active=active)


def _brackets_match(match: re.Match) -> bool:
    return (match["open"] == "<") == (match["close"] == ">")


def _point(date_text: str, time_text: str | None) -> PointInTime:
    try:
        day = date.fromisoformat(date_text)
        if time_text is None:
            return day
        hour, _, minute = time_text.partition(":")
        return datetime(day.year, day.month, day.day, int(hour), int(minute))
    except ValueError as e:
        raise OrgParseError(f"Invalid date {date_text} {time_text or ''}: {e}") from e


def _repeater(modifiers: str) -> Repeater | None:
    for modifier in modifiers.split():
        m = REPEATER_RE.match(modifier)
        if m:
            return Repeater(unit=TimeUnit(m["unit"]), interval=int(m["value"]), mark=m["mark"])
    return None


def parse_todo_keywords(text: str) -> list[str]:
    """Collect keywords declared with ``#+TODO:`` style lines."""
    keywords = []
    for line in text.splitlines():
        m = TODO_SETTING_RE.match(line)
        if not m:
            continue
        for word in m["words"].split():
            if word == "|":
                continue
            # Strip fast-access keys: TODO(t), DONE(d!)
            keyword = word.split("(", 1)[0]
            if keyword and keyword not in keywords:
                keywords.append(keyword)
    return keywords


@dataclass
class _HeadingBuilder:
    level: int
    raw: str
    keyword: str | None = None
    priority: str | None = None
    tags: tuple[str, ...] = ()
    planning: dict[str, Planning] = field(default_factory=dict)
    properties: list[tuple[str, str]] = field(default_factory=list)
    children: list = field(default_factory=list)

    def build(self) -> Heading:
        return Heading(
            raw=self.raw,
            level=self.level,
            keyword=self.keyword,
            priority=self.priority,
            tags=self.tags,
            properties=tuple(self.properties),
            deadline=self.planning.get("DEADLINE"),
            scheduled=self.planning.get("SCHEDULED"),
            closed=self.planning.get("CLOSED"),
            children=tuple(
                child.build() if isinstance(child, _HeadingBuilder) else child
                for child in self.children
            ),
        )


class OrgParser:
    """
    Org-mode parser.

    Implements OutlineParser protocol.
    """

    def __init__(self, todo_keywords: list[str] | tuple[str, ...] | None = None):
        self.todo_keywords = tuple(todo_keywords or DEFAULT_TODO_KEYWORDS)

    def parse(self, text: str) -> Document:
        """Parse Org text into a Document tree."""
        keywords = set(self.todo_keywords) | set(parse_todo_keywords(text))
        lines = text.splitlines()
        top: list = []
        stack: list[_HeadingBuilder] = []

        i = 0
        while i < len(lines):
            line = lines[i]
            headline = HEADLINE_RE.match(line)
            if headline:
                level = len(headline["stars"])
                while stack and stack[-1].level >= level:
                    stack.pop()
                builder = self._headline(level, headline["rest"] or "", keywords)
                (stack[-1].children if stack else top).append(builder)
                stack.append(builder)
                i = self._planning_and_properties(lines, i + 1, builder)
                continue

            clock = CLOCK_RE.match(line)
            if clock:
                (stack[-1].children if stack else top).append(self._clock(clock, i))
            i += 1

        return Document(
            nodes=tuple(node.build() if isinstance(node, _HeadingBuilder) else node for node in top)
        )

    def _headline(self, level: int, rest: str, keywords: set[str]) -> _HeadingBuilder:
        keyword = None
        word, _, remainder = rest.partition(" ")
        if word in keywords:
            keyword = word
            rest = remainder.lstrip()

        priority = None
        m = PRIORITY_RE.match(rest)
        if m:
            priority = m["priority"]
            rest = rest[m.end():]

        tags: tuple[str, ...] = ()
        m = TAGS_RE.search(rest)
        if m:
            tags = tuple(t for t in m["tags"].split(":") if t)
            rest = rest[: m.start()]

        return _HeadingBuilder(level=level, raw=rest.strip(), keyword=keyword, priority=priority, tags=tags)

    def _planning_and_properties(self, lines: list[str], i: int, builder: _HeadingBuilder) -> int:
        """Consume the planning line and property drawer following a headline."""
        if i < len(lines) and PLANNING_RE.match(lines[i]):
            parts = PLANNING_SPLIT_RE.split(lines[i])
            # parts: [prefix, KEYWORD, timestamp, KEYWORD, timestamp, ...]
            for name, value in zip(parts[1::2], parts[2::2]):
                if DIARY_RE.match(value.strip()):
                    logger.debug(f"line {i + 1}: skipping diary timestamp for {name}")
                    continue
                try:
                    builder.planning[name] = parse_timestamp(value)
                except OrgParseError as e:
                    raise OrgParseError(f"line {i + 1}: {e}") from e
            i += 1

        if i < len(lines) and lines[i].strip().upper() == ":PROPERTIES:":
            start = i
            i += 1
            while i < len(lines) and lines[i].strip().upper() != ":END:":
                m = PROPERTY_RE.match(lines[i])
                if m:
                    # :KEY+: continues the value of KEY
                    key = m["key"].removesuffix("+")
                    builder.properties.append((key, (m["value"] or "").strip()))
                i += 1
            if i >= len(lines):
                raise OrgParseError(f"line {start + 1}: property drawer has no :END:")
            i += 1
        return i

    def _clock(self, match: re.Match, i: int) -> Clock:
        try:
            parsed = parse_timestamp(match["timestamp"])
        except OrgParseError as e:
            raise OrgParseError(f"line {i + 1}: {e}") from e
        if isinstance(parsed, TimeRange):
            return Clock(start=parsed.start, end=parsed.end, duration=match["duration"])
        logger.debug(f"Open clock at line {i + 1}")
        return Clock(start=parsed.start)
