"""Selector and legend catalogs derived from merged records."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Sequence

from core.constants import EXCLUDED_OFFICE_NAMES
from core.types import CaseCountRecord, Scope
from transforms.day_series import filter_scope


@dataclass(frozen=True)
class ScopeCatalog:
    """Values used to populate selectors and order legend series.

    Attributes:
        forms: Every known form, sorted.
        offices: Every known office, sorted.
        statuses: Statuses seen in the scope, most frequent first.
        poll_days: Poll days available for the scope, ascending.
    """

    forms: tuple[str, ...] = ()
    offices: tuple[str, ...] = ()
    statuses: tuple[str, ...] = ()
    poll_days: tuple[int, ...] = ()

    @property
    def latest_poll_day(self) -> int | None:
        """Most recent poll day for the scope."""
        if not self.poll_days:
            return None
        return self.poll_days[-1]


def known_forms(records: Sequence[CaseCountRecord]) -> tuple[str, ...]:
    """Return every non-empty form name, sorted."""
    return tuple(sorted({record.form for record in records if record.form}))


def known_offices(records: Sequence[CaseCountRecord]) -> tuple[str, ...]:
    """Return every non-empty office code except placeholder offices, sorted."""
    return tuple(
        sorted(
            {
                record.office
                for record in records
                if record.office and record.office not in EXCLUDED_OFFICE_NAMES
            }
        )
    )


def statuses_by_frequency(scoped_records: Sequence[CaseCountRecord]) -> tuple[str, ...]:
    """Order statuses by how many records carry them, ties by label."""
    frequency = Counter(record.status for record in scoped_records)
    return tuple(sorted(frequency, key=lambda status: (-frequency[status], status)))


def build_scope_catalog(records: Sequence[CaseCountRecord], scope: Scope) -> ScopeCatalog:
    """Build selector values and the legend order for a scope."""
    scoped_records = filter_scope(records, scope)
    return ScopeCatalog(
        forms=known_forms(records),
        offices=known_offices(records),
        statuses=statuses_by_frequency(scoped_records),
        poll_days=tuple(sorted({record.poll_day for record in scoped_records})),
    )
