"""Category lookup interface and category-based event visibility.

Categories are owned by an external store. Events only carry the category's
string key, so lookups may miss (the category was deleted) and that is never
treated as corruption.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterable
from typing import Optional, Protocol

from pocketcal.calendar.models import Event

logger = logging.getLogger(__name__)


class CategoryLookup(Protocol):
    """Anything that can turn a category key into a display name."""

    def lookup(self, category_id: str) -> Optional[str]:
        """Return the category name, or None if the key is unknown."""
        ...


def category_name(event: Event, lookup: CategoryLookup | None) -> Optional[str]:
    """Resolve the display name of an event's category.

    This safely handles:
    - Uncategorised events (returns None)
    - A None lookup (returns None)
    - Dangling keys the lookup does not know (returns None)
    - Exceptions from lookup (logs warning, returns None)

    Args:
        event: Event whose category_id is resolved
        lookup: Optional category store

    Returns:
        Category name or None
    """
    if event.category_id is None or lookup is None:
        return None

    try:
        return lookup.lookup(event.category_id)
    except Exception as e:
        logger.warning("category lookup for %r raised: %s", event.category_id, e)
        return None


def visible_events(
    events: Iterable[Event],
    known_ids: Collection[str],
    enabled_ids: Collection[str],
) -> list[Event]:
    """Filter events by the category on/off toggles.

    - No categories defined at all: every event is visible.
    - Categories defined but none enabled: only uncategorised events.
    - Otherwise: uncategorised events plus events whose category is enabled.

    A category key that is not in known_ids is simply not enabled.

    Args:
        events: Events to filter, order is preserved
        known_ids: Keys of all categories in the store
        enabled_ids: Keys of the categories switched on

    Returns:
        Visible events
    """
    items = list(events)
    if not known_ids:
        return items

    enabled = set(enabled_ids)
    return [event for event in items if event.category_id is None or event.category_id in enabled]
