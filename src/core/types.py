"""Shared typed models.

This module defines immutable data models used by ingest, transforms,
store, and CLI layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Literal, Mapping, Union

KeyOrder = Literal["center_year_day_code_serial", "center_year_code_day_serial"]
SUPPORTED_KEY_ORDERS: tuple[KeyOrder, ...] = (
    "center_year_day_code_serial",
    "center_year_code_day_serial",
)
DEFAULT_KEY_ORDER: KeyOrder = "center_year_day_code_serial"

PollDaySelector = Union[int, Literal["latest"]]

CaseIdentity = tuple[str, str, int, str, str, str, int]


@dataclass(frozen=True)
class Scope:
    """Active subset of the loaded datasets.

    Attributes:
        form: Form type, e.g. ``I-765``.
        office: Processing center code, e.g. ``LIN``.
        year: Two-digit fiscal year carried in receipt numbers.
    """

    form: str
    office: str
    year: str


@dataclass(frozen=True)
class CaseCountRecord:
    """Count of cases sharing one status in one receipt-day bucket.

    Attributes:
        office: Processing center code.
        year: Fiscal year field of the composite key.
        receipt_day: Ordinal receipt-day bucket.
        classification_code: Receipt classification code.
        form: Form type.
        status: Canonical status label.
        poll_day: Epoch day on which the snapshot was taken.
        count: Non-negative case count.
    """

    office: str
    year: str
    receipt_day: int
    classification_code: str
    form: str
    status: str
    poll_day: int
    count: int

    @property
    def identity(self) -> CaseIdentity:
        """Return the merge identity tuple, excluding the count."""
        return (
            self.office,
            self.year,
            self.receipt_day,
            self.classification_code,
            self.form,
            self.status,
            self.poll_day,
        )


@dataclass(frozen=True)
class ParsedCaseKey:
    """Successfully parsed snapshot composite key."""

    office: str
    year: str
    receipt_day: int
    classification_code: str
    form: str
    raw_status: str


@dataclass(frozen=True)
class MalformedKey:
    """Dataset key that could not be parsed and was skipped.

    Attributes:
        key: Raw key text as found in the dataset.
        reason: Human readable description of the failure.
    """

    key: str
    reason: str


@dataclass(frozen=True)
class NormalizeResult:
    """Output of snapshot normalization.

    Attributes:
        records: Typed records fanned out per poll day.
        malformed: Keys skipped because they could not be parsed.
    """

    records: tuple[CaseCountRecord, ...]
    malformed: tuple[MalformedKey, ...] = ()

    @property
    def skipped_count(self) -> int:
        """Number of skipped dataset keys."""
        return len(self.malformed)


@dataclass(frozen=True)
class TransitionRecord:
    """Status movement count between two consecutive snapshots."""

    format: str
    form: str
    office: str
    year: str
    classification_code: str
    receipt_day: int
    from_status: str
    to_status: str
    count: int


@dataclass(frozen=True)
class TransitionEdge:
    """Aggregated movement count for one (from, to) status pair."""

    from_status: str
    to_status: str
    count: int


@dataclass(frozen=True)
class DaySeriesRow:
    """One receipt-day bucket of the day series.

    Attributes:
        receipt_day: Ordinal receipt-day bucket.
        counts: Read-only sparse status to count mapping; absent statuses
            are zero.
    """

    receipt_day: int
    counts: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))

    def count(self, status: str) -> int:
        """Return the count for a status, zero when absent."""
        if status in self.counts:
            return self.counts[status]
        return 0

    @property
    def total(self) -> int:
        """Sum of all status counts in this row."""
        return sum(self.counts.values())
