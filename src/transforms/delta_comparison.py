"""Delta comparator between a poll day and the day before it.

This module groups scoped records at poll day N and N-1 by receipt day and
status. A missing previous day yields empty groups, and every percentage
derived from them reports ``None`` instead of dividing by zero.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

from core.constants import LATEST_POLL_DAY
from core.types import CaseCountRecord, PollDaySelector, Scope
from transforms.day_series import (
    filter_scope,
    freeze_counts,
    group_by_receipt_day,
    resolve_poll_day,
)
from transforms.group_merge import merge_records
from transforms.percentages import safe_share

DayStatusCounts = Mapping[int, Mapping[str, int]]


@dataclass(frozen=True)
class StatusDelta:
    """One status of one receipt day compared against the previous poll day."""

    receipt_day: int
    status: str
    current_count: int
    current_day_total: int
    previous_count: int
    previous_day_total: int

    @property
    def current_share(self) -> float | None:
        """Share of the receipt day's cases at the current poll day."""
        return safe_share(self.current_count, self.current_day_total)

    @property
    def previous_share(self) -> float | None:
        """Share of the receipt day's cases at the previous poll day."""
        return safe_share(self.previous_count, self.previous_day_total)


@dataclass(frozen=True)
class DeltaComparison:
    """Grouped counts at a poll day and the poll day before it.

    Attributes:
        poll_day: Resolved poll day, ``None`` for an empty scope.
        current_by_day: Receipt day to status counts at ``poll_day``.
        previous_by_day: Receipt day to status counts at ``poll_day - 1``.
    """

    poll_day: int | None
    current_by_day: DayStatusCounts = field(default_factory=lambda: MappingProxyType({}))
    previous_by_day: DayStatusCounts = field(default_factory=lambda: MappingProxyType({}))

    @property
    def current_totals(self) -> dict[str, int]:
        """Status totals at the current poll day."""
        return _sum_by_status(self.current_by_day)

    @property
    def previous_totals(self) -> dict[str, int]:
        """Status totals at the previous poll day, zero for unseen statuses."""
        totals = _sum_by_status(self.previous_by_day)
        for status in self.current_totals:
            if status not in totals:
                totals[status] = 0
        return totals

    def percent_of_previous(self, status: str) -> float | None:
        """Current total of a status as a percentage of its previous total."""
        current = self.current_totals.get(status, 0)
        previous = self.previous_totals.get(status, 0)
        return safe_share(current, previous)

    def status_delta(self, receipt_day: int, status: str) -> StatusDelta:
        """Compare one status of one receipt day across both poll days."""
        current_counts = _day_counts(self.current_by_day, receipt_day)
        previous_counts = _day_counts(self.previous_by_day, receipt_day)
        return StatusDelta(
            receipt_day=receipt_day,
            status=status,
            current_count=current_counts.get(status, 0),
            current_day_total=sum(current_counts.values()),
            previous_count=previous_counts.get(status, 0),
            previous_day_total=sum(previous_counts.values()),
        )

    def day_deltas(self, receipt_day: int) -> list[StatusDelta]:
        """Compare every status present on a receipt day at the current poll day."""
        current_counts = _day_counts(self.current_by_day, receipt_day)
        return [self.status_delta(receipt_day, status) for status in current_counts]


def compare_delta(
    records: Iterable[CaseCountRecord],
    scope: Scope,
    selector: PollDaySelector = LATEST_POLL_DAY,
) -> DeltaComparison:
    """Group scoped records at a poll day and at the poll day before it.

    Args:
        records: Case-count records, merged by identity before grouping.
        scope: Active form and office.
        selector: Explicit poll day or ``"latest"``.

    Returns:
        Comparison with empty groups when the scope or a day has no records.
    """
    scoped_records = filter_scope(merge_records(records), scope)
    poll_day = resolve_poll_day(scoped_records, selector)
    if poll_day is None:
        return DeltaComparison(poll_day=None)
    return DeltaComparison(
        poll_day=poll_day,
        current_by_day=_freeze_groups(group_by_receipt_day(scoped_records, poll_day)),
        previous_by_day=_freeze_groups(group_by_receipt_day(scoped_records, poll_day - 1)),
    )


def _day_counts(grouped: DayStatusCounts, receipt_day: int) -> Mapping[str, int]:
    if receipt_day in grouped:
        return grouped[receipt_day]
    return {}


def _freeze_groups(grouped: Mapping[int, Mapping[str, int]]) -> DayStatusCounts:
    return MappingProxyType(
        {receipt_day: freeze_counts(counts) for receipt_day, counts in grouped.items()}
    )


def _sum_by_status(grouped: DayStatusCounts) -> dict[str, int]:
    totals: dict[str, int] = {}
    for day_counts in grouped.values():
        for status, count in day_counts.items():
            totals[status] = totals.get(status, 0) + count
    return totals
