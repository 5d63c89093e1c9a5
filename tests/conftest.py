"""Shared fixtures for pocketcal tests."""

from collections.abc import Generator
from datetime import UTC, datetime
from typing import Any

import pytest

from pocketcal.calendar.models import Event


def pytest_configure(config: Any) -> None:
    """Register test markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "integration: Tests touching the filesystem or CLI")


@pytest.fixture(autouse=True)
def clean_test_environment(monkeypatch: Any) -> Generator[None, Any, None]:
    """Clear pocketcal environment variables so host settings never leak into tests."""
    for name in (
        "POCKETCAL_TEST_TIME",
        "POCKETCAL_DATA_DIR",
        "POCKETCAL_EVENTS_FILE",
        "POCKETCAL_DAY_TIMEZONE",
        "POCKETCAL_LOG_LEVEL",
        "POCKETCAL_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def fixed_now() -> datetime:
    """Deterministic save time used as DTSTAMP."""
    return datetime(2025, 5, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def meeting_event() -> Event:
    """Event whose title uses every reserved character."""
    return Event(
        id="U1",
        title="Meeting; Q&A, notes\nline2",
        start_time=datetime(2025, 5, 10, 9, 0, 0, tzinfo=UTC),
        end_time=datetime(2025, 5, 10, 10, 0, 0, tzinfo=UTC),
        category_id="work-1",
    )


@pytest.fixture
def sample_events() -> list[Event]:
    """Three events over two days, deliberately out of start order."""
    return [
        Event(
            id="E-LUNCH",
            title="Lunch",
            start_time=datetime(2025, 5, 10, 12, 0, tzinfo=UTC),
            end_time=datetime(2025, 5, 10, 13, 0, tzinfo=UTC),
        ),
        Event(
            id="E-STANDUP",
            title="Standup",
            start_time=datetime(2025, 5, 10, 9, 0, tzinfo=UTC),
            end_time=datetime(2025, 5, 10, 9, 15, tzinfo=UTC),
            category_id="work-1",
        ),
        Event(
            id="E-GYM",
            title="Gym",
            start_time=datetime(2025, 5, 11, 7, 30, tzinfo=UTC),
            end_time=datetime(2025, 5, 11, 8, 30, tzinfo=UTC),
            category_id="health",
        ),
    ]


@pytest.fixture
def sample_ics() -> str:
    """Events document as written by the encoder, two events."""
    return """BEGIN:VCALENDAR
VERSION:2.0
PRODID:-//pocketcal//EN
BEGIN:VEVENT
X-EVENT-ID:E-1
UID:11111111-1111-1111-1111-111111111111
DTSTAMP:20250501T120000Z
DTSTART:20250510T090000Z
DTEND:20250510T100000Z
SUMMARY:Team sync
CATEGORIES:work-1
END:VEVENT
BEGIN:VEVENT
X-EVENT-ID:E-2
UID:22222222-2222-2222-2222-222222222222
DTSTAMP:20250501T120000Z
DTSTART:20250511T070000Z
DTEND:20250511T080000Z
SUMMARY:Run
END:VEVENT
END:VCALENDAR"""
