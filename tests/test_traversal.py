"""Tests for document traversal."""

import logging
from datetime import date, datetime, timedelta

import pytest

from orgcal.core.outline import Clock, Document, Heading, Marker
from orgcal.core.timestamp import Repeater, TimeRange, TimeUnit, Timestamp
from orgcal.core.traversal import clock_events, clocks_with_heading, planning_events


@pytest.fixture
def now():
    return datetime(2022, 7, 20, 12, 0)


class TestDocumentIter:
    def test_depth_first_open_close(self):
        clock = Clock(start=datetime(2022, 7, 18, 9, 0), end=datetime(2022, 7, 18, 10, 0))
        child = Heading(raw="Child", level=2, children=(clock,))
        parent = Heading(raw="Parent", children=(child,))
        stream = list(Document(nodes=(parent,)).iter())
        assert stream == [
            (Marker.OPEN, parent),
            (Marker.OPEN, child),
            (Marker.OPEN, clock),
            (Marker.CLOSE, clock),
            (Marker.CLOSE, child),
            (Marker.CLOSE, parent),
        ]


class TestPlanningEvents:
    def test_deadline_and_scheduled(self, now):
        heading = Heading(
            raw="Both",
            deadline=Timestamp(start=date(2022, 7, 25)),
            scheduled=Timestamp(start=date(2022, 7, 21)),
        )
        events = planning_events(Document(nodes=(heading,)), 0, 0, now)
        assert [e.title for e in events] == ["DL: Both", "SCL: Both"]

    def test_range_dispatch(self, now):
        heading = Heading(
            raw="Range",
            deadline=TimeRange(
                start=datetime(2022, 7, 26, 10, 0),
                end=datetime(2022, 7, 26, 11, 0),
                repeater=Repeater(TimeUnit.WEEK, 1),
            ),
        )
        [event] = planning_events(Document(nodes=(heading,)), 0, 0, now)
        assert event.end == datetime(2022, 7, 26, 11, 0)
        assert event.duration == "1:00:00"

    def test_inactive_timestamps_are_ignored(self, now):
        heading = Heading(raw="Inactive", deadline=Timestamp(start=date(2022, 7, 25), active=False))
        assert planning_events(Document(nodes=(heading,)), 0, 0, now) == []

    def test_window_applies_to_start(self, now):
        near = Heading(raw="Near", deadline=Timestamp(start=now + timedelta(hours=2)))
        far = Heading(raw="Far", deadline=Timestamp(start=now + timedelta(days=5)))
        events = planning_events(Document(nodes=(near, far)), 0, 3, now)
        assert [e.title for e in events] == ["DL: Near"]

    def test_nested_headings_in_document_order(self, now):
        child = Heading(raw="Child", level=2, scheduled=Timestamp(start=date(2022, 7, 22)))
        parent = Heading(raw="Parent", deadline=Timestamp(start=date(2022, 7, 23)), children=(child,))
        sibling = Heading(raw="Sibling", deadline=Timestamp(start=date(2022, 7, 21)))
        events = planning_events(Document(nodes=(parent, sibling)), 0, 0, now)
        assert [e.title for e in events] == ["DL: Parent", "SCL: Child", "DL: Sibling"]

    def test_file_path_stamped(self, now):
        heading = Heading(raw="X", deadline=Timestamp(start=date(2022, 7, 25)))
        [event] = planning_events(Document(nodes=(heading,)), 0, 0, now, "x.org")
        assert event.file_path == "x.org"


class TestClockEvents:
    def _clock(self, day: int, start_hour: int, end_hour: int | None) -> Clock:
        start = datetime(2022, 7, day, start_hour, 0)
        end = datetime(2022, 7, day, end_hour, 0) if end_hour is not None else None
        return Clock(start=start, end=end)

    def test_two_clocks_in_order(self, now):
        heading = Heading(
            raw="Work",
            properties=(("DESCRIPTION", "notes"), ("FC_BG_COLOR", "blue")),
            children=(self._clock(18, 9, 10), self._clock(17, 13, 15)),
        )
        events = clock_events(Document(nodes=(heading,)), 0, 0, now)
        assert [e.duration for e in events] == ["1:00:00", "2:00:00"]
        assert all(e.description == "notes<br>" for e in events)
        assert all(e.color == "blue" for e in events)
        assert all(e.rrule is None for e in events)

    def test_open_clock_ignored(self, now):
        heading = Heading(raw="Open", children=(self._clock(18, 9, None),))
        assert clock_events(Document(nodes=(heading,)), 0, 0, now) == []

    def test_clock_before_any_heading(self, now):
        document = Document(nodes=(self._clock(18, 9, 10),))
        [event] = clock_events(document, 0, 0, now)
        assert event.title == ""
        assert event.description == ""

    def test_clock_belongs_to_nearest_preceding_heading(self, now):
        child = Heading(raw="Child", level=2, children=(self._clock(18, 9, 10),))
        parent = Heading(raw="Parent", children=(child,))
        pairs = list(clocks_with_heading(Document(nodes=(parent,))))
        assert [h.raw for h, _ in pairs] == ["Child"]

    def test_heading_with_planning_only_yields_nothing(self, now):
        heading = Heading(raw="Plan", deadline=Timestamp(start=date(2022, 7, 25)))
        assert clock_events(Document(nodes=(heading,)), 0, 0, now) == []

    def test_window_applies_to_clock_start(self, now):
        heading = Heading(raw="Old", children=(self._clock(10, 9, 10), self._clock(20, 9, 10)))
        events = clock_events(Document(nodes=(heading,)), 2, 0, now)
        assert [e.start for e in events] == [datetime(2022, 7, 20, 9, 0)]

    def test_logs_emitted_and_filtered(self, now, caplog):
        caplog.set_level(logging.DEBUG, logger="orgcal.core.traversal")
        heading = Heading(raw="Work", children=(self._clock(10, 9, 10), self._clock(20, 9, 10)))
        clock_events(Document(nodes=(heading,)), 2, 0, now)
        assert "Emitting clock 'Work'" in caplog.text
        assert "Outside window" in caplog.text

    def test_idempotent(self, now):
        heading = Heading(raw="Work", children=(self._clock(18, 9, 10),))
        document = Document(nodes=(heading,))
        assert clock_events(document, 1, 1, now) == clock_events(document, 1, 1, now)
