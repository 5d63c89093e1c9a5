"""Events file codec: escaping, instants, encoding, decoding and day grouping."""

from .day_index import (
    add_event,
    build_day_index,
    day_key,
    flatten_day_index,
    remove_event,
    replace_event,
)
from .exceptions import (
    EventNotFoundError,
    EventStoreError,
    EventStoreReadError,
    EventStoreWriteError,
    PocketCalError,
)
from .ics_decoder import decode_events
from .ics_encoder import PRODUCT_ID, encode_day_index, encode_events
from .ics_escape import escape_text, unescape_text
from .ics_instant import format_instant, parse_field_instant, parse_instant
from .models import DecodeResult, DiscardedBlock, Event

__all__ = [
    "PRODUCT_ID",
    "DecodeResult",
    "DiscardedBlock",
    "Event",
    "EventNotFoundError",
    "EventStoreError",
    "EventStoreReadError",
    "EventStoreWriteError",
    "PocketCalError",
    "add_event",
    "build_day_index",
    "day_key",
    "decode_events",
    "encode_day_index",
    "encode_events",
    "escape_text",
    "flatten_day_index",
    "format_instant",
    "parse_field_instant",
    "parse_instant",
    "remove_event",
    "replace_event",
    "unescape_text",
]
