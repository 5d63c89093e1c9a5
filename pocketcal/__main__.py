"""Command-line entry for pocketcal.

Small CLI over the events file: list events by day, check a file for dropped
blocks, add or remove an event.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from dateutil import parser as date_parser
from pydantic import ValidationError

from . import _init_logging
from .cal_logging import configure_logging
from .calendar.day_index import add_event, remove_event
from .calendar.exceptions import EventNotFoundError, EventStoreError
from .calendar.models import Event
from .core.config_manager import ConfigManager, get_config_value
from .core.timezone_utils import resolve_timezone
from .domain.event_store import EventFileStore, default_events_path

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_DISCARDED = 1
EXIT_NOT_FOUND = 1
EXIT_STORE_ERROR = 2


def _create_parser() -> argparse.ArgumentParser:
    """Create argument parser for pocketcal CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="pocketcal",
        description="pocketcal - personal calendar events file tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pocketcal list                                  # Events grouped by day
  pocketcal check --file ~/events.ics             # Report dropped VEVENT blocks
  pocketcal add --title "Standup" --start 2025-05-10T09:00Z --end 2025-05-10T09:15Z
  pocketcal remove 6F1C...                        # Remove by event id
        """,
    )
    parser.add_argument(
        "--file",
        type=Path,
        metavar="PATH",
        help="Events file (default: $POCKETCAL_DATA_DIR/events.ics)",
    )
    parser.add_argument(
        "--tz",
        metavar="NAME",
        help="Timezone for day grouping (default: POCKETCAL_DAY_TIMEZONE or UTC)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="Print events grouped by day")
    sub.add_parser("check", help="Decode the file and report discarded blocks")

    add = sub.add_parser("add", help="Add an event and save")
    add.add_argument("--title", required=True)
    add.add_argument("--start", required=True, help="ISO 8601 start (naive values are UTC)")
    add.add_argument("--end", required=True, help="ISO 8601 end (naive values are UTC)")
    add.add_argument("--category", default=None, help="Category key")
    add.add_argument("--id", dest="event_id", default=None, help="Explicit event id")

    remove = sub.add_parser("remove", help="Remove an event by id and save")
    remove.add_argument("event_id")

    return parser


def _parse_datetime(value: str) -> datetime:
    try:
        return date_parser.isoparse(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid ISO 8601 datetime: {value!r}") from exc


def _cmd_list(store: EventFileStore, tz: Any) -> int:
    index = store.load_day_index(tz)
    zone = resolve_timezone(tz)
    for key in sorted(index):
        print(key)
        for event in index[key]:
            start = event.start_time.astimezone(zone).strftime("%H:%M")
            end = event.end_time.astimezone(zone).strftime("%H:%M")
            suffix = f" [{event.category_id}]" if event.category_id else ""
            title = event.title.replace("\n", " / ")
            print(f"  {start}-{end}  {title}{suffix}  ({event.id})")
    return EXIT_OK


def _cmd_check(store: EventFileStore) -> int:
    result = store.load()
    print(f"{store.path}: {len(result.events)} events, {result.discarded_count} discarded blocks")
    for block in result.discarded:
        missing = ", ".join(block.missing_fields) or "-"
        print(f"  line {block.line_number}: {block.reason} (missing: {missing})")
    return EXIT_OK if result.is_clean else EXIT_DISCARDED


def _cmd_add(store: EventFileStore, args: argparse.Namespace, tz: Any) -> int:
    fields: dict[str, Any] = {
        "title": args.title,
        "start_time": _parse_datetime(args.start),
        "end_time": _parse_datetime(args.end),
        "category_id": args.category,
    }
    if args.event_id:
        fields["id"] = args.event_id
    try:
        event = Event(**fields)
    except ValidationError as exc:
        reasons = "; ".join(err["msg"] for err in exc.errors())
        raise argparse.ArgumentTypeError(f"invalid event: {reasons}") from exc

    index = add_event(store.load_day_index(tz), event, tz)
    store.save_day_index(index)
    print(event.id)
    return EXIT_OK


def _cmd_remove(store: EventFileStore, args: argparse.Namespace, tz: Any) -> int:
    index = remove_event(store.load_day_index(tz), args.event_id)
    store.save_day_index(index)
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the pocketcal CLI and return its exit status."""
    parser = _create_parser()
    args = parser.parse_args(argv)

    cfg = ConfigManager().load_full_config()
    _init_logging("DEBUG" if args.debug else get_config_value(cfg, "log_level"))
    configure_logging(debug_mode=args.debug)

    path = args.file or default_events_path(cfg)
    tz = args.tz or get_config_value(cfg, "day_timezone")
    store = EventFileStore(path)
    logger.debug("Using events file %s (day timezone %s)", path, tz)

    try:
        if args.command == "list":
            return _cmd_list(store, tz)
        if args.command == "check":
            return _cmd_check(store)
        if args.command == "add":
            return _cmd_add(store, args, tz)
        return _cmd_remove(store, args, tz)
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))
    except EventNotFoundError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_NOT_FOUND
    except EventStoreError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return EXIT_STORE_ERROR
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
