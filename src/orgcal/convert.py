"""Conversion workflows shared by the CLI and library callers.

Text in, calendar events (or their JSON) out. "now" defaults to the wall
clock here and nowhere deeper.
"""

import json
import logging
from datetime import datetime
from pathlib import Path

from .adapters.org_files import OrgFileSource
from .adapters.org_parser import OrgParser, OrgSourceError
from .core.events import OutputEvent
from .core.traversal import clock_events, planning_events

logger = logging.getLogger(__name__)


def org_to_events(
    text: str,
    before_days: int = 0,
    after_days: int = 0,
    file_path: str = "",
    now: datetime | None = None,
    parser: OrgParser | None = None,
) -> list[OutputEvent]:
    """Convert one document's deadline and scheduled entries to events."""
    document = (parser or OrgParser()).parse(text)
    return planning_events(document, before_days, after_days, now or datetime.now(), file_path)


def org_to_clock_events(
    text: str,
    before_days: int = 0,
    after_days: int = 0,
    file_path: str = "",
    now: datetime | None = None,
    parser: OrgParser | None = None,
) -> list[OutputEvent]:
    """Convert one document's closed CLOCK entries to events."""
    document = (parser or OrgParser()).parse(text)
    return clock_events(document, before_days, after_days, now or datetime.now(), file_path)


def events_to_json(events: list[OutputEvent]) -> str:
    """Encode events as a pretty-printed JSON array."""
    return json.dumps([e.to_dict() for e in events], indent=2, ensure_ascii=False)


def org_to_json(text: str, before_days: int = 0, after_days: int = 0, file_path: str = "", now: datetime | None = None) -> str:
    return events_to_json(org_to_events(text, before_days, after_days, file_path, now))


def org_to_clock_json(text: str, before_days: int = 0, after_days: int = 0, file_path: str = "", now: datetime | None = None) -> str:
    return events_to_json(org_to_clock_events(text, before_days, after_days, file_path, now))


def file_to_events(
    file: Path | str,
    before_days: int = 0,
    after_days: int = 0,
    clock: bool = False,
    now: datetime | None = None,
    source: OrgFileSource | None = None,
) -> list[OutputEvent]:
    """Read one Org file and convert it. Events are stamped with the path as given."""
    source = source or OrgFileSource()
    document = source.load(file)
    collect = clock_events if clock else planning_events
    return collect(document, before_days, after_days, now or datetime.now(), str(file))


def dir_to_events(
    directory: Path | str,
    before_days: int = 0,
    after_days: int = 0,
    clock: bool = False,
    now: datetime | None = None,
    source: OrgFileSource | None = None,
    keep_going: bool = False,
) -> list[OutputEvent]:
    """
    Convert every ``*.org`` file in a directory, concatenating the results.

    The first failing file aborts the run unless ``keep_going`` is set, in
    which case it is logged and skipped.
    """
    source = source or OrgFileSource()
    now = now or datetime.now()
    events = []
    for file in source.list_files(directory):
        try:
            events.extend(file_to_events(file, before_days, after_days, clock, now, source))
        except OrgSourceError as e:
            if not keep_going:
                raise
            logger.error(f"Skipping {file}: {e}")
    return events


def path_to_events(
    path: Path | str,
    before_days: int = 0,
    after_days: int = 0,
    clock: bool = False,
    now: datetime | None = None,
    source: OrgFileSource | None = None,
    keep_going: bool = False,
) -> list[OutputEvent]:
    """Dispatch to file or directory conversion."""
    if Path(path).expanduser().is_dir():
        return dir_to_events(path, before_days, after_days, clock, now, source, keep_going)
    return file_to_events(path, before_days, after_days, clock, now, source)
