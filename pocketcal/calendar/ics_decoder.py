"""Best-effort parser for the pocketcal events file format.

Decoding never fails on malformed input. A VEVENT block that reaches
``END:VEVENT`` without a SUMMARY, a valid DTSTART and a valid DTEND is dropped
as a whole, and so is a block that is never closed. Dropped blocks are
reported in ``DecodeResult.discarded`` so callers can see data loss.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .ics_escape import unescape_text
from .ics_instant import parse_field_instant
from .models import DecodeResult, DiscardedBlock, Event, new_event_id

logger = logging.getLogger(__name__)

BEGIN_EVENT = "BEGIN:VEVENT"
END_EVENT = "END:VEVENT"

SUMMARY_PREFIX = "SUMMARY:"
DTSTART_PREFIX = "DTSTART"
DTEND_PREFIX = "DTEND"
CATEGORIES_PREFIX = "CATEGORIES:"
EVENT_ID_PREFIX = "X-EVENT-ID:"


@dataclass
class _BlockScratch:
    """Fields collected for the VEVENT block currently being read."""

    title: Optional[str] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    category_id: Optional[str] = None
    event_id: Optional[str] = None

    def missing_fields(self) -> list[str]:
        missing = []
        if self.title is None:
            missing.append("SUMMARY")
        if self.start is None:
            missing.append("DTSTART")
        if self.end is None:
            missing.append("DTEND")
        return missing

    def to_event(self) -> Optional[Event]:
        if self.title is None or self.start is None or self.end is None:
            return None
        return Event(
            id=self.event_id or new_event_id(),
            title=self.title,
            start_time=self.start,
            end_time=self.end,
            category_id=self.category_id,
        )


def _apply_field(scratch: _BlockScratch, line: str) -> None:
    """Store a recognised content line into the scratch fields."""
    if line.startswith(SUMMARY_PREFIX):
        scratch.title = unescape_text(line[len(SUMMARY_PREFIX) :])
    elif line.startswith(DTSTART_PREFIX):
        # Prefix match only: DTSTART;PARAM=...:value is accepted too
        scratch.start = parse_field_instant(line)
    elif line.startswith(DTEND_PREFIX):
        scratch.end = parse_field_instant(line)
    elif line.startswith(CATEGORIES_PREFIX):
        # Keys never carry surrounding whitespace; hand-edited padding is dropped
        category = unescape_text(line[len(CATEGORIES_PREFIX) :]).strip()
        scratch.category_id = category or None
    elif line.startswith(EVENT_ID_PREFIX):
        scratch.event_id = line[len(EVENT_ID_PREFIX) :].strip() or None


def decode_events(text: str) -> DecodeResult:
    """Decode an events document into a flat list of events.

    Args:
        text: Full document text

    Returns:
        DecodeResult with the accepted events in file order and one
        DiscardedBlock per dropped block
    """
    events: list[Event] = []
    discarded: list[DiscardedBlock] = []
    scratch: Optional[_BlockScratch] = None
    line_number = 0

    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line:
            continue

        if line == BEGIN_EVENT:
            if scratch is not None:
                logger.debug("VEVENT reopened at line %d before END:VEVENT", line_number)
                discarded.append(
                    DiscardedBlock(
                        line_number=line_number,
                        missing_fields=scratch.missing_fields(),
                        reason="unterminated",
                    )
                )
            scratch = _BlockScratch()
        elif line == END_EVENT:
            if scratch is None:
                continue
            event = scratch.to_event()
            if event is None:
                missing = scratch.missing_fields()
                logger.debug(
                    "Dropping VEVENT ending at line %d, missing %s",
                    line_number,
                    ", ".join(missing),
                )
                discarded.append(DiscardedBlock(line_number=line_number, missing_fields=missing))
            else:
                events.append(event)
            scratch = None
        elif scratch is not None:
            _apply_field(scratch, line)

    if scratch is not None:
        logger.debug("Input ended inside a VEVENT at line %d", line_number)
        discarded.append(
            DiscardedBlock(
                line_number=line_number,
                missing_fields=scratch.missing_fields(),
                reason="unterminated",
            )
        )

    if discarded:
        logger.warning("Discarded %d malformed VEVENT block(s)", len(discarded))
    logger.debug("Decoded %d events", len(events))

    return DecodeResult(events=events, discarded=discarded)
