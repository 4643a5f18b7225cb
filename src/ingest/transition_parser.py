"""Transition dataset key parsing.

This module turns ``format|form|office|year|code|day|from|to`` keys into
typed transition records. Status labels are canonicalized so transitions
line up with the day-series legend.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from core.constants import TRANSITION_KEY_FIELD_COUNT
from core.types import MalformedKey, TransitionRecord
from ingest.key_fields import is_count, parse_ordinal, split_key
from transforms.status_canonicalizer import canonicalize


@dataclass(frozen=True)
class ParsedTransitions:
    """Parsed transition records in encounter order plus skipped keys."""

    records: tuple[TransitionRecord, ...]
    malformed: tuple[MalformedKey, ...]


def parse_transition_key(key: str, raw_count: Any) -> TransitionRecord | MalformedKey:
    """Parse one transition key and its count.

    Args:
        key: Raw eight-field transition key.
        raw_count: JSON count value stored under the key.

    Returns:
        Parsed transition record, or a malformed-key marker.
    """
    parts = split_key(key, TRANSITION_KEY_FIELD_COUNT)
    if isinstance(parts, MalformedKey):
        return parts
    format_tag, form, office, year, code, raw_day, from_status, to_status = parts
    receipt_day = parse_ordinal(raw_day)
    if receipt_day is None:
        return MalformedKey(key=key, reason=f"receipt day '{raw_day}' is not an integer")
    if not is_count(raw_count):
        return MalformedKey(key=key, reason=f"count {raw_count!r} is not a valid count")
    return TransitionRecord(
        format=format_tag,
        form=form,
        office=office,
        year=year,
        classification_code=code,
        receipt_day=receipt_day,
        from_status=canonicalize(from_status),
        to_status=canonicalize(to_status),
        count=raw_count,
    )


def parse_transition_entries(entries: Iterable[tuple[str, Any]]) -> ParsedTransitions:
    """Parse ``(key, count)`` pairs, keeping encounter order."""
    records: list[TransitionRecord] = []
    malformed: list[MalformedKey] = []
    for key, raw_count in entries:
        parsed = parse_transition_key(key, raw_count)
        if isinstance(parsed, MalformedKey):
            malformed.append(parsed)
            continue
        records.append(parsed)
    return ParsedTransitions(records=tuple(records), malformed=tuple(malformed))
