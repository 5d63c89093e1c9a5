"""Group events into calendar-day buckets for display.

A day index maps ``YYYY-MM-DD`` keys to the events starting on that day in a
reference timezone. Buckets are never empty and are kept sorted by start time.
Sorting is stable, so events with equal start times stay in the order they
were given (for a decoded file, the order of blocks in the file).

The editing helpers return new indexes and never mutate their input.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import tzinfo

from pocketcal.core.timezone_utils import resolve_timezone

from .exceptions import EventNotFoundError
from .models import Event

logger = logging.getLogger(__name__)

DayIndex = dict[str, list[Event]]


def day_key(event: Event, tz: str | tzinfo | None = None) -> str:
    """Return the ``YYYY-MM-DD`` key of the day the event starts on in tz."""
    return event.start_time.astimezone(resolve_timezone(tz)).date().isoformat()


def _sort_bucket(bucket: list[Event]) -> list[Event]:
    return sorted(bucket, key=lambda event: event.start_time)


def build_day_index(events: Iterable[Event], tz: str | tzinfo | None = None) -> DayIndex:
    """Group events by the calendar day of their start time.

    Args:
        events: Flat event collection, typically DecodeResult.events
        tz: Reference timezone for day boundaries (IANA name or tzinfo, UTC if None)

    Returns:
        Mapping of day key to events sorted ascending by start_time
    """
    zone = resolve_timezone(tz)
    index: DayIndex = {}
    for event in events:
        index.setdefault(day_key(event, zone), []).append(event)

    return {key: _sort_bucket(bucket) for key, bucket in index.items()}


def flatten_day_index(index: Mapping[str, Sequence[Event]]) -> list[Event]:
    """Return all events of an index, bucket by bucket."""
    return [event for bucket in index.values() for event in bucket]


def add_event(
    index: Mapping[str, Sequence[Event]], event: Event, tz: str | tzinfo | None = None
) -> DayIndex:
    """Return a copy of index with event inserted into its day bucket."""
    key = day_key(event, tz)
    updated: DayIndex = {k: list(bucket) for k, bucket in index.items()}
    updated[key] = _sort_bucket([*updated.get(key, []), event])
    return updated


def remove_event(index: Mapping[str, Sequence[Event]], event_id: str) -> DayIndex:
    """Return a copy of index without the event whose id is event_id.

    Buckets left empty are removed.

    Raises:
        EventNotFoundError: If no event has that id
    """
    updated: DayIndex = {}
    found = False
    for key, bucket in index.items():
        kept = [event for event in bucket if event.id != event_id]
        if len(kept) != len(bucket):
            found = True
        if kept:
            updated[key] = kept

    if not found:
        raise EventNotFoundError(event_id)
    logger.debug("Removed event %s from day index", event_id)
    return updated


def replace_event(
    index: Mapping[str, Sequence[Event]], event: Event, tz: str | tzinfo | None = None
) -> DayIndex:
    """Return a copy of index with the event sharing event.id replaced.

    The replacement moves to another bucket when its start day changed.

    Raises:
        EventNotFoundError: If no event has that id
    """
    return add_event(remove_event(index, event.id), event, tz)
