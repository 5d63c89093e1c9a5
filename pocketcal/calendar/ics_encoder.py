"""Serialize events into the pocketcal events file format.

The output is a VCALENDAR document with one VEVENT block per event. Field
order inside a block is fixed and lines are joined with a bare ``\\n``. Long
lines are not folded.

Only text is produced here; writing it to disk is the job of
``pocketcal.domain.event_store.EventFileStore``.
"""

import logging
import uuid
from collections.abc import Callable, Iterable, Mapping, Sequence
from datetime import datetime
from typing import Optional

from pocketcal.core.timezone_utils import now_utc

from .ics_escape import escape_text
from .ics_instant import format_instant
from .models import Event

logger = logging.getLogger(__name__)

PRODUCT_ID = "-//pocketcal//EN"
ICS_VERSION = "2.0"


def _default_uid() -> str:
    return str(uuid.uuid4()).upper()


def _event_lines(event: Event, uid: str, stamp: str) -> list[str]:
    lines = [
        "BEGIN:VEVENT",
        f"X-EVENT-ID:{event.id}",
        f"UID:{uid}",
        f"DTSTAMP:{stamp}",
        f"DTSTART:{format_instant(event.start_time)}",
        f"DTEND:{format_instant(event.end_time)}",
        f"SUMMARY:{escape_text(event.title)}",
    ]
    if event.category_id is not None:
        lines.append(f"CATEGORIES:{escape_text(event.category_id)}")
    lines.append("END:VEVENT")
    return lines


def encode_events(
    events: Iterable[Event],
    *,
    now: Optional[datetime] = None,
    uid_factory: Optional[Callable[[], str]] = None,
) -> str:
    """Encode events as a complete events document.

    Every block carries two identifiers: ``X-EVENT-ID`` holds the event's own
    id and is what decoding restores, ``UID`` is freshly generated on every
    call and is never read back.

    Args:
        events: Events in the order they should appear in the file
        now: Save time written as DTSTAMP on every block (defaults to now_utc())
        uid_factory: Generator for per-block UID values (defaults to uuid4)

    Returns:
        Document text without a trailing newline
    """
    stamp = format_instant(now if now is not None else now_utc())
    make_uid = uid_factory or _default_uid

    lines = [
        "BEGIN:VCALENDAR",
        f"VERSION:{ICS_VERSION}",
        f"PRODID:{PRODUCT_ID}",
    ]
    count = 0
    for event in events:
        lines.extend(_event_lines(event, make_uid(), stamp))
        count += 1
    lines.append("END:VCALENDAR")

    logger.debug("Encoded %d events (DTSTAMP=%s)", count, stamp)
    return "\n".join(lines)


def encode_day_index(
    index: Mapping[str, Sequence[Event]],
    *,
    now: Optional[datetime] = None,
    uid_factory: Optional[Callable[[], str]] = None,
) -> str:
    """Encode a day-keyed index, bucket by bucket, in the index's own order."""
    return encode_events(
        (event for bucket in index.values() for event in bucket),
        now=now,
        uid_factory=uid_factory,
    )
