"""Summary totalizer for the day series.

This module sums every status column of the day series into per-status
totals and a grand total used for percentage shares.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Sequence

from core.types import DaySeriesRow
from transforms.day_series import freeze_counts, select_day_window
from transforms.percentages import safe_share


@dataclass(frozen=True)
class SummaryTotals:
    """Per-status totals over a window of the day series.

    Attributes:
        per_status: Status to summed count.
        grand_total: Sum of every per-status total.
    """

    per_status: Mapping[str, int] = field(default_factory=lambda: freeze_counts({}))
    grand_total: int = 0

    @property
    def has_data(self) -> bool:
        """Whether any case was counted."""
        return self.grand_total > 0

    def share(self, status: str) -> float | None:
        """Percentage of the grand total for one status, ``None`` without data."""
        if status in self.per_status:
            return safe_share(self.per_status[status], self.grand_total)
        return safe_share(0, self.grand_total)

    def ranked(self) -> list[tuple[str, int, float | None]]:
        """Return ``(status, total, share)`` rows, largest total first."""
        ordered = sorted(self.per_status.items(), key=lambda item: (-item[1], item[0]))
        return [(status, total, self.share(status)) for status, total in ordered]


def totalize(
    rows: Sequence[DaySeriesRow],
    day_index_range: tuple[int, int] | None = None,
) -> SummaryTotals:
    """Sum status counts across day-series rows.

    Args:
        rows: Day-series rows, typically the backfilled output.
        day_index_range: Optional ``(start, end)`` row window; the full
            series is used when omitted or when ``start >= end``.

    Returns:
        Per-status totals and their grand total.
    """
    if day_index_range is None:
        window = tuple(rows)
    else:
        window = select_day_window(rows, day_index_range[0], day_index_range[1])
    per_status: dict[str, int] = {}
    for row in window:
        for status, count in row.counts.items():
            per_status[status] = per_status.get(status, 0) + count
    return SummaryTotals(
        per_status=freeze_counts(per_status), grand_total=sum(per_status.values())
    )
