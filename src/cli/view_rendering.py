"""Tab-separated text rendering of derived views."""

from __future__ import annotations

from typing import Sequence

from core.receipt_labels import format_poll_day, poll_day_to_date, receipt_number_pattern
from core.types import DaySeriesRow, KeyOrder, Scope
from transforms.delta_comparison import DeltaComparison
from transforms.percentages import format_share
from transforms.scope_catalog import ScopeCatalog
from transforms.summary_totals import SummaryTotals
from transforms.transition_aggregation import TransitionAggregation


def render_poll_day(poll_day: int | None) -> str:
    """Render the resolved poll day with its calendar date."""
    if poll_day is None:
        return "poll_day\t-\tno data for this form and office"
    return f"poll_day\t{poll_day}\t{poll_day_to_date(poll_day).isoformat()}"


def render_series(
    rows: Sequence[DaySeriesRow],
    scope: Scope,
    key_order: KeyOrder,
    status_order: Sequence[str],
) -> list[str]:
    """Render one line per receipt day, statuses in legend order."""
    lines = []
    for row in rows:
        pattern = receipt_number_pattern(scope.office, scope.year, row.receipt_day, key_order)
        counts = "; ".join(
            f"{status}={row.count(status)}" for status in status_order if status in row.counts
        )
        lines.append(f"{row.receipt_day}\t{pattern}\t{row.total}\t{counts or '-'}")
    return lines


def render_summary(summary: SummaryTotals) -> list[str]:
    """Render per-status totals with shares, then the grand total."""
    lines = [
        f"{status}\t{total}\t{format_share(share)}" for status, total, share in summary.ranked()
    ]
    lines.append(f"total\t{summary.grand_total}")
    return lines


def render_delta(delta: DeltaComparison) -> list[str]:
    """Render each status of each receipt day against the previous poll day."""
    lines = []
    for receipt_day in sorted(delta.current_by_day):
        for status_delta in delta.day_deltas(receipt_day):
            lines.append(
                f"{receipt_day}\t{status_delta.status}\t"
                f"{status_delta.current_count} of {status_delta.current_day_total} "
                f"({format_share(status_delta.current_share)})\t"
                f"previous {status_delta.previous_count} of {status_delta.previous_day_total} "
                f"({format_share(status_delta.previous_share)})"
            )
    return lines


def render_transitions(aggregation: TransitionAggregation) -> list[str]:
    """Render ranked transitions as ``from => to : count`` rows."""
    lines = [
        f"{edge.from_status}\t=>\t{edge.to_status}\t{edge.count}" for edge in aggregation.edges
    ]
    lines.append(f"total\t{aggregation.total}")
    return lines


def render_catalog(catalog: ScopeCatalog) -> list[str]:
    """Render selector values, legend order, and available poll days."""
    poll_days = " ".join(f"{day}({format_poll_day(day)})" for day in catalog.poll_days)
    return [
        f"forms\t{' '.join(catalog.forms) or '-'}",
        f"offices\t{' '.join(catalog.offices) or '-'}",
        f"statuses\t{'; '.join(catalog.statuses) or '-'}",
        f"poll_days\t{poll_days or '-'}",
        render_poll_day(catalog.latest_poll_day).replace("poll_day", "latest_poll_day", 1),
    ]
