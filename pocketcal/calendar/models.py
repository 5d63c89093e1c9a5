"""Data models for calendar events and decode results."""

import uuid
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_serializer, field_validator

from .ics_escape import escape_text
from .ics_instant import ensure_utc


def new_event_id() -> str:
    """Generate a fresh opaque event identifier."""
    return str(uuid.uuid4()).upper()


class Event(BaseModel):
    """One calendar entry."""

    id: str = Field(default_factory=new_event_id, description="Opaque event identifier")
    title: str = Field(..., description="Event title, any text")
    start_time: datetime = Field(..., description="Start instant")
    end_time: datetime = Field(..., description="End instant (not checked against start)")
    category_id: Optional[str] = Field(
        default=None, description="Key of an externally owned category, passed through as-is"
    )

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Validate the event id.

        The id is written unescaped on its own content line, so it must be
        non-empty, single-line and free of surrounding whitespace.

        Raises:
            ValueError: If the id cannot be stored as written
        """
        if not v:
            raise ValueError("Event id must not be empty")
        if v != v.strip():
            raise ValueError(f"Event id must not have surrounding whitespace: {v!r}")
        if len(v.splitlines()) != 1:
            raise ValueError(f"Event id must be a single line: {v!r}")
        return v

    @field_validator("category_id")
    @classmethod
    def validate_category_id(cls, v: Optional[str]) -> Optional[str]:
        """Validate the category key; an empty key means uncategorised.

        Raises:
            ValueError: If the key has surrounding whitespace or a line
                separator the escaping does not cover
        """
        if v is None or v == "":
            return None
        if v != v.strip():
            raise ValueError(f"Category id must not have surrounding whitespace: {v!r}")
        if len(escape_text(v).splitlines()) != 1:
            raise ValueError(f"Category id contains a line separator: {v!r}")
        return v

    @field_validator("start_time", "end_time")
    @classmethod
    def _coerce_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @field_serializer("start_time", "end_time")
    def serialize_datetime(self, dt: datetime) -> str:
        """Serialize datetime fields to ISO format."""
        return dt.isoformat()


class DiscardedBlock(BaseModel):
    """A VEVENT block dropped during decoding."""

    line_number: int = Field(..., description="1-based line where the block ended or input ran out")
    missing_fields: list[str] = Field(default_factory=list)
    reason: Literal["missing-fields", "unterminated"] = "missing-fields"


class DecodeResult(BaseModel):
    """Events decoded from an events file plus a report of what was dropped.

    ``as_tuple()`` gives the plain ``(events, discarded_count)`` pair.
    """

    events: list[Event] = Field(default_factory=list)
    discarded: list[DiscardedBlock] = Field(default_factory=list)

    @property
    def discarded_count(self) -> int:
        """Number of blocks dropped as malformed."""
        return len(self.discarded)

    @property
    def is_clean(self) -> bool:
        """True when no block was dropped."""
        return not self.discarded

    def as_tuple(self) -> tuple[list[Event], int]:
        """Return (events, discarded_count)."""
        return self.events, self.discarded_count
