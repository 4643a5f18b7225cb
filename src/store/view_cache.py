"""Memoization layer for derived views.

This module caches recomputed views keyed by the full tuple of upstream
inputs and selection parameters. Entries are evicted least recently used
first and dropped wholesale whenever a dataset changes.
"""

from __future__ import annotations

from collections import OrderedDict
from typing import Any, Callable, Hashable, TypeVar

from core.logging_config import get_logger

_LOGGER = get_logger(__name__)

ViewValue = TypeVar("ViewValue")


class ViewCache:
    """Bounded LRU cache of derived views."""

    def __init__(self, max_entries: int) -> None:
        self._max_entries = max_entries
        self._entries: OrderedDict[Hashable, Any] = OrderedDict()
        self._hits = 0
        self._misses = 0

    @property
    def hits(self) -> int:
        """Number of lookups served from the cache."""
        return self._hits

    @property
    def misses(self) -> int:
        """Number of lookups that recomputed the view."""
        return self._misses

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def get_or_compute(self, key: Hashable, compute: Callable[[], ViewValue]) -> ViewValue:
        """Return the cached view for a key, computing it on first use.

        Args:
            key: Hashable tuple of every input the view depends on.
            compute: Zero-argument function building the view.

        Returns:
            Cached or freshly computed view.
        """
        if key in self._entries:
            self._entries.move_to_end(key)
            self._hits += 1
            _LOGGER.debug("view_cache_hit", view=_view_name(key))
            return self._entries[key]
        self._misses += 1
        _LOGGER.debug("view_cache_miss", view=_view_name(key))
        value = compute()
        self._entries[key] = value
        if len(self._entries) > self._max_entries:
            self._entries.popitem(last=False)
        return value

    def invalidate(self) -> None:
        """Drop every cached view."""
        if self._entries:
            _LOGGER.info("view_cache_invalidated", entry_count=len(self._entries))
        self._entries.clear()


def _view_name(key: Hashable) -> str:
    if isinstance(key, tuple) and key:
        return str(key[0])
    return str(key)
