"""Fixed-pattern UTC timestamp codec for DTSTART, DTEND and DTSTAMP values.

Only the basic UTC form ``YYYYMMDDTHHMMSSZ`` is written and accepted. Floating
times, date-only values and TZID-qualified local times are rejected rather
than guessed at.
"""

import logging
import re
from datetime import UTC, datetime
from typing import Optional

logger = logging.getLogger(__name__)

INSTANT_FORMAT = "%Y%m%dT%H%M%SZ"

_INSTANT_PATTERN = re.compile(r"\d{8}T\d{6}Z", re.ASCII)


def ensure_utc(dt: datetime) -> datetime:
    """Return dt as an aware UTC datetime (naive values are taken as UTC)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def format_instant(dt: datetime) -> str:
    """Format an instant as ``YYYYMMDDTHHMMSSZ`` in UTC.

    Sub-second precision is truncated. The year is always four digits;
    ``%Y`` is not zero-padded below 1000 on every platform.

    Examples:
        >>> format_instant(datetime(2025, 5, 10, 9, 0, tzinfo=UTC))
        '20250510T090000Z'
    """
    dt = ensure_utc(dt)
    return f"{dt.year:04d}{dt:%m%dT%H%M%S}Z"


def parse_instant(value: str) -> Optional[datetime]:
    """Parse a ``YYYYMMDDTHHMMSSZ`` value into an aware UTC datetime.

    Returns:
        The parsed instant, or None if the value deviates from the pattern in
        any way or names an impossible date/time
    """
    if not _INSTANT_PATTERN.fullmatch(value):
        return None
    try:
        return datetime.strptime(value, INSTANT_FORMAT).replace(tzinfo=UTC)
    except ValueError:
        logger.debug("Rejected out-of-range instant %r", value)
        return None


def parse_field_instant(line: str) -> Optional[datetime]:
    """Parse the instant at the end of a DTSTART/DTEND content line.

    Any parameters between the property name and the value (for example
    ``DTSTART;X-FOO=bar:20250101T090000Z``) are skipped: only the text after
    the last colon is parsed. Their meaning is discarded.

    Args:
        line: Complete content line, property name included

    Returns:
        Parsed instant or None
    """
    if ":" not in line:
        return None
    return parse_instant(line.rsplit(":", 1)[-1])
