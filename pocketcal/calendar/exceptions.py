"""Exceptions for event persistence and day-index editing."""

from pathlib import Path
from typing import Optional, Union


class PocketCalError(Exception):
    """Base exception for pocketcal errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EventStoreError(PocketCalError):
    """Base exception for event file storage failures."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class EventStoreReadError(EventStoreError):
    """Raised when an existing events file cannot be read or decoded as UTF-8.

    A missing file is not an error: the store returns an empty collection.
    """


class EventStoreWriteError(EventStoreError):
    """Raised when the events file cannot be written atomically."""


class EventNotFoundError(PocketCalError, KeyError):
    """Raised when a day-index edit refers to an event id that is not present."""

    def __init__(self, event_id: str):
        super().__init__(f"Event not found: {event_id}")
        self.event_id = event_id

    def __str__(self) -> str:
        return self.message
