"""Unit tests for the events document encoder."""

from datetime import UTC, datetime
from itertools import count

import pytest

from pocketcal.calendar.ics_encoder import PRODUCT_ID, encode_day_index, encode_events
from pocketcal.calendar.models import Event

pytestmark = pytest.mark.unit


def _sequential_uids():
    counter = count(1)
    return lambda: f"UID-{next(counter)}"


class TestEncodeEvents:
    """Tests for encode_events()."""

    def test_empty_collection(self, fixed_now):
        text = encode_events([], now=fixed_now)
        assert text == f"BEGIN:VCALENDAR\nVERSION:2.0\nPRODID:{PRODUCT_ID}\nEND:VCALENDAR"

    def test_meeting_block_fields(self, meeting_event, fixed_now):
        text = encode_events([meeting_event], now=fixed_now)
        lines = text.split("\n")

        assert "X-EVENT-ID:U1" in lines
        assert "DTSTART:20250510T090000Z" in lines
        assert "DTEND:20250510T100000Z" in lines
        assert "SUMMARY:Meeting\\; Q&A\\, notes\\nline2" in lines
        assert "CATEGORIES:work-1" in lines
        assert "DTSTAMP:20250501T120000Z" in lines

    def test_exact_document_layout(self, meeting_event, fixed_now):
        text = encode_events([meeting_event], now=fixed_now, uid_factory=_sequential_uids())
        assert text == "\n".join(
            [
                "BEGIN:VCALENDAR",
                "VERSION:2.0",
                "PRODID:-//pocketcal//EN",
                "BEGIN:VEVENT",
                "X-EVENT-ID:U1",
                "UID:UID-1",
                "DTSTAMP:20250501T120000Z",
                "DTSTART:20250510T090000Z",
                "DTEND:20250510T100000Z",
                "SUMMARY:Meeting\\; Q&A\\, notes\\nline2",
                "CATEGORIES:work-1",
                "END:VEVENT",
                "END:VCALENDAR",
            ]
        )

    def test_categories_omitted_without_category(self, fixed_now):
        event = Event(
            id="E-1",
            title="Run",
            start_time=datetime(2025, 5, 11, 7, 0, tzinfo=UTC),
            end_time=datetime(2025, 5, 11, 8, 0, tzinfo=UTC),
        )
        text = encode_events([event], now=fixed_now)
        assert "CATEGORIES" not in text

    def test_empty_category_treated_as_uncategorised(self, fixed_now):
        event = Event(
            id="E-1",
            title="Run",
            start_time=datetime(2025, 5, 11, 7, 0, tzinfo=UTC),
            end_time=datetime(2025, 5, 11, 8, 0, tzinfo=UTC),
            category_id="",
        )
        assert event.category_id is None
        assert "CATEGORIES" not in encode_events([event], now=fixed_now)

    def test_category_is_escaped(self, fixed_now):
        event = Event(
            id="E-1",
            title="Run",
            start_time=datetime(2025, 5, 11, 7, 0, tzinfo=UTC),
            end_time=datetime(2025, 5, 11, 8, 0, tzinfo=UTC),
            category_id="a,b",
        )
        assert "CATEGORIES:a\\,b" in encode_events([event], now=fixed_now).split("\n")

    def test_uid_regenerated_per_block(self, sample_events, fixed_now):
        text = encode_events(sample_events, now=fixed_now)
        uids = [line for line in text.split("\n") if line.startswith("UID:")]
        assert len(uids) == 3
        assert len(set(uids)) == 3

    def test_uid_differs_from_event_id(self, meeting_event, fixed_now):
        text = encode_events([meeting_event], now=fixed_now)
        uid_line = next(line for line in text.split("\n") if line.startswith("UID:"))
        assert uid_line != "UID:U1"

    def test_blocks_follow_collection_order(self, sample_events, fixed_now):
        text = encode_events(sample_events, now=fixed_now)
        ids = [line for line in text.split("\n") if line.startswith("X-EVENT-ID:")]
        assert ids == ["X-EVENT-ID:E-LUNCH", "X-EVENT-ID:E-STANDUP", "X-EVENT-ID:E-GYM"]

    def test_no_trailing_newline(self, meeting_event, fixed_now):
        assert encode_events([meeting_event], now=fixed_now).endswith("END:VCALENDAR")

    def test_title_newline_does_not_split_line(self, meeting_event, fixed_now):
        lines = encode_events([meeting_event], now=fixed_now).split("\n")
        assert len(lines) == 13

    def test_long_title_not_folded(self, fixed_now):
        event = Event(
            title="x" * 500,
            start_time=datetime(2025, 5, 11, 7, 0, tzinfo=UTC),
            end_time=datetime(2025, 5, 11, 8, 0, tzinfo=UTC),
        )
        assert f"SUMMARY:{'x' * 500}" in encode_events([event], now=fixed_now).split("\n")

    def test_dtstamp_defaults_to_clock(self, meeting_event, monkeypatch):
        monkeypatch.setenv("POCKETCAL_TEST_TIME", "2025-06-01T08:30:00Z")
        text = encode_events([meeting_event])
        assert "DTSTAMP:20250601T083000Z" in text.split("\n")

    def test_accepts_generator(self, sample_events, fixed_now):
        text = encode_events((event for event in sample_events), now=fixed_now)
        assert text.count("BEGIN:VEVENT") == 3


def test_encode_day_index_flattens_in_bucket_order(sample_events, fixed_now):
    index = {
        "2025-05-11": [sample_events[2]],
        "2025-05-10": [sample_events[1], sample_events[0]],
    }
    text = encode_day_index(index, now=fixed_now)
    ids = [line for line in text.split("\n") if line.startswith("X-EVENT-ID:")]
    assert ids == ["X-EVENT-ID:E-GYM", "X-EVENT-ID:E-STANDUP", "X-EVENT-ID:E-LUNCH"]
