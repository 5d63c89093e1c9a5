"""Storage adapter and category collaborators."""

from .category_lookup import CategoryLookup, category_name, visible_events
from .event_store import EventFileStore, default_events_path

__all__ = [
    "CategoryLookup",
    "EventFileStore",
    "category_name",
    "default_events_path",
    "visible_events",
]
