"""Clock and timezone helpers for pocketcal."""

from __future__ import annotations

import datetime
import logging
import os
import zoneinfo

logger = logging.getLogger(__name__)

# Reference timezone for day keys when nothing is configured
DEFAULT_DAY_TIMEZONE = "UTC"


def now_utc() -> datetime.datetime:
    """Return current UTC time with tzinfo.

    Can be overridden for testing via POCKETCAL_TEST_TIME environment variable.
    Format: ISO 8601 datetime string (e.g., "2025-05-10T09:00:00+09:00").
    Naive values are taken as UTC.

    Returns:
        Current time in UTC with timezone info
    """
    test_time = os.environ.get("POCKETCAL_TEST_TIME")
    if test_time:
        try:
            from dateutil import parser as date_parser

            dt = date_parser.isoparse(test_time)
            if dt.tzinfo is not None:
                return dt.astimezone(datetime.UTC)
            return dt.replace(tzinfo=datetime.UTC)
        except (ValueError, OverflowError) as e:
            logger.warning("Failed to parse POCKETCAL_TEST_TIME=%r: %s", test_time, e)

    return datetime.datetime.now(datetime.UTC)


def resolve_timezone(tz: str | datetime.tzinfo | None) -> datetime.tzinfo:
    """Resolve a timezone name or tzinfo into a tzinfo.

    Unknown names fall back to UTC with a warning so that grouping events by
    day never fails on a bad setting.

    Args:
        tz: IANA name, tzinfo instance, or None for UTC

    Returns:
        A tzinfo instance
    """
    if tz is None:
        return datetime.UTC
    if isinstance(tz, datetime.tzinfo):
        return tz
    if tz.upper() in ("UTC", "Z", "ETC/UTC"):
        return datetime.UTC
    try:
        return zoneinfo.ZoneInfo(tz)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError):
        logger.warning("Invalid timezone %r, falling back to UTC", tz)
        return datetime.UTC


def get_day_timezone(fallback: str = DEFAULT_DAY_TIMEZONE) -> str:
    """Get the day-key timezone name from environment with validation.

    Checks POCKETCAL_DAY_TIMEZONE and falls back to ``fallback`` when it is
    unset or not a valid IANA name.
    """
    timezone = os.environ.get("POCKETCAL_DAY_TIMEZONE", fallback)
    if timezone.upper() == "UTC":
        return "UTC"

    try:
        zoneinfo.ZoneInfo(timezone)
        return timezone
    except (zoneinfo.ZoneInfoNotFoundError, ValueError):
        logger.warning("Invalid timezone %r, falling back to %r", timezone, fallback)
        return fallback
