"""Transition aggregator.

This module reduces status-to-status movement counts for one scope into a
ranked list of (from, to) pairs. By default only the transitions recorded
for a single poll day are read; ``all_days`` flattens every poll day.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from core.logging_config import get_logger
from core.types import MalformedKey, Scope, TransitionEdge, TransitionRecord
from ingest.transition_parser import parse_transition_entries

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class TransitionAggregation:
    """Ranked transition pairs for one scope.

    Attributes:
        edges: Pairs sorted by count descending, ties in encounter order.
        malformed: Keys skipped because they could not be parsed.
        poll_days: Poll-day keys that were read from the dataset.
    """

    edges: tuple[TransitionEdge, ...] = ()
    malformed: tuple[MalformedKey, ...] = ()
    poll_days: tuple[str, ...] = ()

    @property
    def total(self) -> int:
        """Sum of every aggregated transition count."""
        return sum(edge.count for edge in self.edges)


def select_transition_entries(
    payload: Mapping[str, Any],
    poll_day: int | None,
    all_days: bool = False,
) -> tuple[list[tuple[str, Any]], list[MalformedKey], tuple[str, ...]]:
    """Collect ``(key, count)`` pairs for one poll day or for every poll day.

    Returns:
        Entries in dataset order, malformed day groups, and poll-day keys read.
    """
    if all_days:
        day_keys = tuple(payload)
    elif poll_day is not None and str(poll_day) in payload:
        day_keys = (str(poll_day),)
    else:
        day_keys = ()
    entries: list[tuple[str, Any]] = []
    malformed: list[MalformedKey] = []
    for day_key in day_keys:
        day_entries = payload[day_key]
        if not isinstance(day_entries, Mapping):
            malformed.append(
                MalformedKey(key=day_key, reason="transition counts must be an object")
            )
            continue
        entries.extend(day_entries.items())
    return entries, malformed, day_keys


def merge_transition_edges(records: Iterable[TransitionRecord]) -> tuple[TransitionEdge, ...]:
    """Sum counts per (from, to) pair and rank them.

    Python's sort is stable, so pairs with equal counts keep the order in
    which they were first encountered.
    """
    totals: dict[tuple[str, str], int] = {}
    for record in records:
        pair = (record.from_status, record.to_status)
        totals[pair] = totals.get(pair, 0) + record.count
    edges = [
        TransitionEdge(from_status=from_status, to_status=to_status, count=count)
        for (from_status, to_status), count in totals.items()
    ]
    edges.sort(key=lambda edge: edge.count, reverse=True)
    return tuple(edges)


def aggregate_transitions(
    payload: Mapping[str, Any],
    scope: Scope,
    poll_day: int | None,
    format_tag: str,
    all_days: bool = False,
) -> TransitionAggregation:
    """Aggregate scoped transitions into ranked (from, to) pairs.

    Args:
        payload: Transition dataset mapping poll day to key counts.
        scope: Active form, office, and year.
        poll_day: Poll day to read; ignored when ``all_days`` is set.
        format_tag: Receipt-number format the transitions were computed for.
        all_days: Flatten transitions across every poll day.

    Returns:
        Ranked transition pairs and any skipped keys.
    """
    entries, malformed_days, day_keys = select_transition_entries(payload, poll_day, all_days)
    parsed = parse_transition_entries(entries)
    scoped_records = [
        record
        for record in parsed.records
        if record.year == scope.year
        and record.office == scope.office
        and record.form == scope.form
        and record.format == format_tag
    ]
    malformed = tuple(malformed_days) + parsed.malformed
    if malformed:
        _LOGGER.warning(
            "malformed_transition_keys_skipped",
            skipped_count=len(malformed),
            sample_key=malformed[0].key,
            sample_reason=malformed[0].reason,
        )
    return TransitionAggregation(
        edges=merge_transition_edges(scoped_records),
        malformed=malformed,
        poll_days=day_keys,
    )
