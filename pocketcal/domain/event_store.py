"""File-backed storage for the events document with atomic writes.

The store is owned by its caller and holds no state besides the path. It does
no locking: two overlapping save() calls on the same path are not coordinated
and the later replace wins. Callers must serialise writes to one path (a
single writer) to avoid lost updates.
"""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from collections.abc import Iterable, Mapping, Sequence
from datetime import tzinfo
from pathlib import Path
from typing import Any

from pocketcal.calendar.day_index import DayIndex, build_day_index, flatten_day_index
from pocketcal.calendar.exceptions import EventStoreReadError, EventStoreWriteError
from pocketcal.calendar.ics_decoder import decode_events
from pocketcal.calendar.ics_encoder import encode_events
from pocketcal.calendar.models import DecodeResult, Event
from pocketcal.core.config_manager import get_config_value

logger = logging.getLogger(__name__)

DEFAULT_EVENTS_FILE = "events.ics"
DEFAULT_DATA_DIR = Path.home() / ".local" / "share" / "pocketcal"


def default_events_path(config: Any = None) -> Path:
    """Resolve ``<data_dir>/<events_file>`` from a config dict or object.

    Args:
        config: Optional configuration (dict or attribute object) with
            ``data_dir`` and ``events_file`` keys

    Returns:
        Path of the events file
    """
    data_dir = get_config_value(config, "data_dir") or DEFAULT_DATA_DIR
    file_name = get_config_value(config, "events_file") or DEFAULT_EVENTS_FILE
    return Path(data_dir).expanduser() / file_name


class EventFileStore:
    """Load and save the whole event collection as one events file.

    A missing file loads as an empty collection. Any other read failure, and
    every write failure, raises an EventStoreError subclass.
    """

    def __init__(self, path: str | Path) -> None:
        """Create an EventFileStore.

        Args:
            path: Location of the events file. The parent directory is created
                on first save.
        """
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> DecodeResult:
        """Read and decode the events file.

        Returns:
            DecodeResult; empty when the file does not exist

        Raises:
            EventStoreReadError: If the file exists but cannot be read or is not UTF-8
        """
        try:
            content = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("Events file not found; starting empty: %s", self._path)
            return DecodeResult()
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Failed to read events file %s: %s", self._path, exc)
            raise EventStoreReadError(
                f"Failed to read events file {self._path}: {exc}", self._path
            ) from exc

        result = decode_events(content)
        logger.debug(
            "Loaded events file %s (%d events, %d discarded blocks)",
            self._path,
            len(result.events),
            result.discarded_count,
        )
        return result

    def load_day_index(self, tz: str | tzinfo | None = None) -> DayIndex:
        """Load the events file and group it by day."""
        return build_day_index(self.load().events, tz)

    def save(self, events: Iterable[Event]) -> int:
        """Encode events and replace the events file atomically.

        Writes to a temporary file in the same directory, fsyncs it, then
        os.replace()s it over the target so readers never see a half-written
        file.

        Args:
            events: Full event collection to persist

        Returns:
            Number of events written

        Raises:
            EventStoreWriteError: If the directory, temp file or replace fails
        """
        items = list(events)
        content = encode_events(items)

        dirpath = self._path.parent
        tmp_path: Path | None = None
        try:
            dirpath.mkdir(parents=True, exist_ok=True)
            # Same directory as the target so the replace stays on one filesystem
            with tempfile.NamedTemporaryFile(
                "w",
                dir=dirpath,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
                encoding="utf-8",
                newline="",
            ) as tf:
                tmp_path = Path(tf.name)
                tf.write(content)
                tf.flush()
                os.fsync(tf.fileno())

            tmp_path.replace(self._path)
        except OSError as exc:
            logger.warning("Failed to save events file %s: %s", self._path, exc)
            if tmp_path is not None:
                with contextlib.suppress(OSError):
                    tmp_path.unlink(missing_ok=True)
            raise EventStoreWriteError(
                f"Failed to save events file {self._path}: {exc}", self._path
            ) from exc

        logger.info("Saved %d events to %s", len(items), self._path)
        return len(items)

    def save_day_index(self, index: Mapping[str, Sequence[Event]]) -> int:
        """Persist every event of a day index."""
        return self.save(flatten_day_index(index))
