"""Day-series builder.

This module projects merged case-count records for one scope and poll day
into one row per receipt-day bucket. Buckets missing at the chosen poll day
are backfilled with empty rows across the contiguous range of days that
appear anywhere in the scope, so the chart axis never has gaps.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping, Sequence

from core.constants import LATEST_POLL_DAY
from core.errors import CaseWatchTransformError
from core.types import CaseCountRecord, DaySeriesRow, PollDaySelector, Scope
from transforms.group_merge import merge_records


def filter_scope(records: Iterable[CaseCountRecord], scope: Scope) -> list[CaseCountRecord]:
    """Keep records matching the scope form and office.

    Year is not filtered here; snapshot datasets are already per year.
    """
    return [
        record
        for record in records
        if record.form == scope.form and record.office == scope.office
    ]


def resolve_poll_day(
    scoped_records: Sequence[CaseCountRecord],
    selector: PollDaySelector,
) -> int | None:
    """Resolve a poll-day selector against scoped records.

    Args:
        scoped_records: Records already filtered to one scope.
        selector: Explicit poll day or ``"latest"``.

    Returns:
        Poll day to project, or ``None`` when the scope has no records.

    Raises:
        CaseWatchTransformError: If selector is neither an int nor ``"latest"``.
    """
    if not scoped_records:
        return None
    if selector == LATEST_POLL_DAY:
        return max(record.poll_day for record in scoped_records)
    if isinstance(selector, int) and not isinstance(selector, bool):
        return selector
    raise CaseWatchTransformError(
        f"Unsupported poll day selector {selector!r}. Use an integer or '{LATEST_POLL_DAY}'."
    )


def group_by_receipt_day(
    records: Iterable[CaseCountRecord],
    poll_day: int,
) -> dict[int, dict[str, int]]:
    """Build receipt day to status counts for records at one poll day.

    Raises:
        CaseWatchTransformError: If a status repeats within one day, which
            means the records were not merged first.
    """
    grouped: dict[int, dict[str, int]] = {}
    for record in records:
        if record.poll_day != poll_day:
            continue
        day_counts = grouped.setdefault(record.receipt_day, {})
        if record.status in day_counts:
            raise CaseWatchTransformError(
                f"Duplicate status '{record.status}' for receipt day {record.receipt_day} "
                f"at poll day {poll_day}. Merge records before building the day series."
            )
        day_counts[record.status] = record.count
    return grouped


def build_day_series(
    records: Iterable[CaseCountRecord],
    scope: Scope,
    selector: PollDaySelector = LATEST_POLL_DAY,
) -> tuple[DaySeriesRow, ...]:
    """Build the backfilled day series for a scope and poll day.

    Args:
        records: Case-count records; they are merged by identity first, so
            normalized records with synonym statuses are accepted.
        scope: Active form and office.
        selector: Explicit poll day or ``"latest"``.

    Returns:
        Rows sorted by receipt day covering every day between the smallest
        and largest receipt day seen in the scope across all poll days.
    """
    scoped_records = filter_scope(merge_records(records), scope)
    poll_day = resolve_poll_day(scoped_records, selector)
    if poll_day is None:
        return ()
    grouped = group_by_receipt_day(scoped_records, poll_day)
    first_day = min(record.receipt_day for record in scoped_records)
    last_day = max(record.receipt_day for record in scoped_records)
    rows: list[DaySeriesRow] = []
    for receipt_day in range(first_day, last_day + 1):
        if receipt_day in grouped:
            rows.append(
                DaySeriesRow(receipt_day=receipt_day, counts=freeze_counts(grouped[receipt_day]))
            )
        else:
            rows.append(DaySeriesRow(receipt_day=receipt_day))
    return tuple(rows)


def freeze_counts(counts: Mapping[str, int]) -> Mapping[str, int]:
    """Return a read-only copy of a status to count mapping."""
    return MappingProxyType(dict(counts))


def select_day_window(
    rows: Sequence[DaySeriesRow],
    start: int | None = None,
    end: int | None = None,
) -> tuple[DaySeriesRow, ...]:
    """Slice the day series by row index.

    The window is ``rows[start:end]`` when ``start < end``; any other
    combination selects every row, matching the range slider behavior.
    """
    if start is not None and end is not None and start < end:
        return tuple(rows[start:end])
    return tuple(rows)
