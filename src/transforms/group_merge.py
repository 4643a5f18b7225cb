"""Group-merge reducer for case-count records.

This module sums records that share a canonical identity. Two historical
wordings of one status land on the same identity after canonicalization
and must be added together, not overwritten.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from core.types import CaseCountRecord, CaseIdentity
from transforms.status_canonicalizer import canonicalize


def merge_records(records: Iterable[CaseCountRecord]) -> tuple[CaseCountRecord, ...]:
    """Merge records by identity, summing counts.

    Args:
        records: Normalized records in any order.

    Returns:
        One record per identity, ordered by identity so the output does not
        depend on input order.
    """
    totals: dict[CaseIdentity, int] = {}
    exemplars: dict[CaseIdentity, CaseCountRecord] = {}
    for record in records:
        canonical_record = _with_canonical_status(record)
        identity = canonical_record.identity
        if identity in totals:
            totals[identity] += canonical_record.count
            continue
        totals[identity] = canonical_record.count
        exemplars[identity] = canonical_record
    return tuple(
        replace(exemplars[identity], count=totals[identity]) for identity in sorted(totals)
    )


def _with_canonical_status(record: CaseCountRecord) -> CaseCountRecord:
    status = canonicalize(record.status)
    if status == record.status:
        return record
    return replace(record, status=status)
