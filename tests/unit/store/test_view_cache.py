"""Unit tests for the derived-view memoization cache."""

from __future__ import annotations

from store.payload_fingerprint import fingerprint_payload
from store.view_cache import ViewCache


def test_get_or_compute_reuses_cached_value() -> None:
    """Second lookup with the same key should not recompute."""
    cache = ViewCache(max_entries=4)
    calls: list[int] = []

    def compute() -> int:
        calls.append(1)
        return 42

    first = cache.get_or_compute(("series", "abc"), compute)
    second = cache.get_or_compute(("series", "abc"), compute)

    assert first == second == 42
    assert len(calls) == 1
    assert (cache.hits, cache.misses) == (1, 1)


def test_cache_evicts_least_recently_used() -> None:
    """Oldest untouched entry should be evicted first."""
    cache = ViewCache(max_entries=2)
    cache.get_or_compute("a", lambda: 1)
    cache.get_or_compute("b", lambda: 2)
    cache.get_or_compute("a", lambda: 1)

    cache.get_or_compute("c", lambda: 3)

    assert "a" in cache and "c" in cache
    assert "b" not in cache


def test_invalidate_drops_every_entry() -> None:
    """Invalidation should empty the cache."""
    cache = ViewCache(max_entries=2)
    cache.get_or_compute("a", lambda: 1)

    cache.invalidate()

    assert len(cache) == 0


def test_fingerprint_ignores_key_order() -> None:
    """Payload fingerprints should not depend on mapping order."""
    first = fingerprint_payload({"a": {"1": 2}, "b": {"3": 4}})
    second = fingerprint_payload({"b": {"3": 4}, "a": {"1": 2}})

    assert first == second
    assert first != fingerprint_payload({"a": {"1": 3}, "b": {"3": 4}})
