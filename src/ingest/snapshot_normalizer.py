"""Snapshot dataset normalization.

This module parses composite snapshot keys into typed case-count records.
Keys that do not parse are skipped and reported, never raised, so one bad
row cannot blank the whole dashboard.
"""

from __future__ import annotations

from typing import Any, Mapping

from core.constants import CASE_KEY_FIELD_COUNT
from core.logging_config import get_logger
from core.types import (
    DEFAULT_KEY_ORDER,
    CaseCountRecord,
    KeyOrder,
    MalformedKey,
    NormalizeResult,
    ParsedCaseKey,
)
from ingest.key_fields import is_count, parse_ordinal, split_key
from transforms.status_canonicalizer import canonicalize

_LOGGER = get_logger(__name__)


def parse_case_key(
    key: str,
    key_order: KeyOrder = DEFAULT_KEY_ORDER,
) -> ParsedCaseKey | MalformedKey:
    """Parse one composite snapshot key.

    Args:
        key: Raw ``office|year|day|code|form|status`` key.
        key_order: Whether receipt day precedes the classification code.

    Returns:
        Parsed key, or a malformed-key marker describing the failure.
    """
    parts = split_key(key, CASE_KEY_FIELD_COUNT)
    if isinstance(parts, MalformedKey):
        return parts
    if key_order == "center_year_code_day_serial":
        office, year, code, raw_day, form, raw_status = parts
    else:
        office, year, raw_day, code, form, raw_status = parts
    receipt_day = parse_ordinal(raw_day)
    if receipt_day is None:
        return MalformedKey(key=key, reason=f"receipt day '{raw_day}' is not an integer")
    return ParsedCaseKey(
        office=office,
        year=year,
        receipt_day=receipt_day,
        classification_code=code,
        form=form,
        raw_status=raw_status,
    )


def normalize_snapshot(
    payload: Mapping[str, Any],
    key_order: KeyOrder = DEFAULT_KEY_ORDER,
) -> NormalizeResult:
    """Fan a snapshot payload out into canonical case-count records.

    Args:
        payload: Mapping of composite key to ``{poll_day: count}``.
        key_order: Composite key field order of the payload.

    Returns:
        Records in payload order plus the skipped malformed keys.
    """
    records: list[CaseCountRecord] = []
    malformed: list[MalformedKey] = []
    for key, poll_counts in payload.items():
        parsed = parse_case_key(key, key_order)
        if isinstance(parsed, MalformedKey):
            malformed.append(parsed)
            continue
        if not isinstance(poll_counts, Mapping):
            malformed.append(MalformedKey(key=key, reason="poll-day counts must be an object"))
            continue
        key_records = _fan_out(key, parsed, poll_counts)
        if isinstance(key_records, MalformedKey):
            malformed.append(key_records)
            continue
        records.extend(key_records)
    result = NormalizeResult(records=tuple(records), malformed=tuple(malformed))
    _log_normalize_result(result)
    return result


def _fan_out(
    key: str,
    parsed: ParsedCaseKey,
    poll_counts: Mapping[str, Any],
) -> list[CaseCountRecord] | MalformedKey:
    status = canonicalize(parsed.raw_status)
    records: list[CaseCountRecord] = []
    for raw_poll_day, raw_count in poll_counts.items():
        poll_day = parse_ordinal(raw_poll_day)
        if poll_day is None:
            return MalformedKey(key=key, reason=f"poll day '{raw_poll_day}' is not an integer")
        if not is_count(raw_count):
            return MalformedKey(
                key=key,
                reason=f"count {raw_count!r} for poll day {raw_poll_day} is not a valid count",
            )
        records.append(
            CaseCountRecord(
                office=parsed.office,
                year=parsed.year,
                receipt_day=parsed.receipt_day,
                classification_code=parsed.classification_code,
                form=parsed.form,
                status=status,
                poll_day=poll_day,
                count=raw_count,
            )
        )
    return records


def _log_normalize_result(result: NormalizeResult) -> None:
    _LOGGER.info(
        "snapshot_normalized",
        record_count=len(result.records),
        malformed_count=result.skipped_count,
    )
    if result.malformed:
        _LOGGER.warning(
            "malformed_snapshot_keys_skipped",
            skipped_count=result.skipped_count,
            sample_key=result.malformed[0].key,
            sample_reason=result.malformed[0].reason,
        )
