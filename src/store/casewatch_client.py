"""Python SDK for case-progress views.

This module exposes the aggregation pipeline behind one client object.
Every view is a pure recomputation over the loaded datasets, memoized by
the dataset fingerprints and the selection that produced it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from core.config import CaseWatchConfig
from core.constants import LATEST_POLL_DAY
from core.types import (
    CaseCountRecord,
    DaySeriesRow,
    KeyOrder,
    NormalizeResult,
    PollDaySelector,
    Scope,
)
from ingest.dataset_reader import read_snapshot_payload, read_transition_payload
from ingest.snapshot_normalizer import normalize_snapshot
from store.dataset_session import DatasetKind, DatasetSession, LoadTicket
from store.view_cache import ViewCache
from transforms.day_series import (
    build_day_series,
    filter_scope,
    resolve_poll_day,
    select_day_window,
)
from transforms.delta_comparison import DeltaComparison, compare_delta
from transforms.group_merge import merge_records
from transforms.scope_catalog import ScopeCatalog, build_scope_catalog
from transforms.summary_totals import SummaryTotals, totalize
from transforms.transition_aggregation import TransitionAggregation, aggregate_transitions


@dataclass(frozen=True)
class DashboardView:
    """Every derived view for one scope and poll-day selection.

    Attributes:
        scope: Scope the views were built for.
        poll_day: Resolved poll day, ``None`` for an empty scope.
        rows: Full backfilled day series.
        window: Day series restricted to the requested row window.
        summary: Totals over the window.
        delta: Comparison against the previous poll day.
        transitions: Ranked status transitions.
        catalog: Selector values and legend order.
        skipped_keys: Malformed snapshot keys skipped during normalization.
    """

    scope: Scope
    poll_day: int | None
    rows: tuple[DaySeriesRow, ...]
    window: tuple[DaySeriesRow, ...]
    summary: SummaryTotals
    delta: DeltaComparison
    transitions: TransitionAggregation
    catalog: ScopeCatalog
    skipped_keys: int


class CaseWatchClient:
    """Primary SDK entry point for case-progress views."""

    def __init__(self, config: CaseWatchConfig | None = None) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
        """
        self._config = config or CaseWatchConfig.from_env()
        self._session = DatasetSession()
        self._cache = ViewCache(self._config.view_cache_size)
        self._loaded_selection: tuple[str, KeyOrder, int, bool] | None = None

    @property
    def config(self) -> CaseWatchConfig:
        """Runtime configuration of this client."""
        return self._config

    @property
    def cache(self) -> ViewCache:
        """Memoization cache shared by every view."""
        return self._cache

    @property
    def key_order(self) -> KeyOrder:
        """Key order of the loaded snapshot, or the configured default."""
        dataset = self._session.dataset("snapshot")
        if dataset is None or dataset.key_order is None:
            return self._config.key_order
        return dataset.key_order

    def load_datasets(
        self,
        year: str | None = None,
        key_order: KeyOrder | None = None,
        transition_delta: int | None = None,
        include_transitions: bool = True,
    ) -> bool:
        """Read the datasets from the data root unless already loaded.

        Args:
            year: Fiscal year of the snapshot file.
            key_order: Composite key order of the snapshot file.
            transition_delta: Snapshot delta of the transition file.
            include_transitions: Also read the transition file.

        Returns:
            True when files were read, False when the selection was unchanged.

        Raises:
            CaseWatchIngestError: If a dataset file cannot be read.
        """
        selection = (
            year or self._config.default_scope.year,
            key_order or self._config.key_order,
            transition_delta or self._config.transition_delta,
            include_transitions,
        )
        if selection == self._loaded_selection:
            return False
        selected_year, selected_order, selected_delta, _ = selection
        snapshot_path = self._config.snapshot_path(selected_year, selected_order)
        snapshot_ticket = self.begin_load("snapshot", selected_order)
        self.complete_load(
            snapshot_ticket, read_snapshot_payload(snapshot_path), str(snapshot_path)
        )
        if include_transitions:
            transition_path = self._config.transition_path(selected_delta)
            transition_ticket = self.begin_load("transition")
            self.complete_load(
                transition_ticket, read_transition_payload(transition_path), str(transition_path)
            )
        self._loaded_selection = selection
        return True

    def use_snapshot_payload(
        self,
        payload: Mapping[str, Any],
        key_order: KeyOrder | None = None,
        source: str = "memory",
    ) -> None:
        """Publish an in-memory snapshot payload."""
        ticket = self.begin_load("snapshot", key_order or self._config.key_order)
        self.complete_load(ticket, payload, source)

    def use_transition_payload(self, payload: Mapping[str, Any], source: str = "memory") -> None:
        """Publish an in-memory transition payload."""
        ticket = self.begin_load("transition")
        self.complete_load(ticket, payload, source)

    def begin_load(self, kind: DatasetKind, key_order: KeyOrder | None = None) -> LoadTicket:
        """Start an externally driven dataset load."""
        return self._session.begin_load(kind, key_order)

    def complete_load(
        self,
        ticket: LoadTicket,
        payload: Mapping[str, Any],
        source: str = "memory",
    ) -> bool:
        """Finish a load; stale results are ignored and leave views untouched."""
        published = self._session.complete_load(ticket, payload, source)
        if published:
            self._loaded_selection = None
            self._cache.invalidate()
        return published

    def normalize_report(self) -> NormalizeResult:
        """Normalize the loaded snapshot, reporting skipped keys."""
        dataset = self._session.dataset("snapshot")
        if dataset is None:
            return NormalizeResult(records=())
        key_order = self.key_order
        return self._cache.get_or_compute(
            ("normalize", dataset.fingerprint, key_order),
            lambda: normalize_snapshot(dataset.payload, key_order),
        )

    def records(self) -> tuple[CaseCountRecord, ...]:
        """Return merged case-count records of the loaded snapshot."""
        return self._cache.get_or_compute(
            ("records", self._session.fingerprint("snapshot"), self.key_order),
            lambda: merge_records(self.normalize_report().records),
        )

    def resolve_poll_day(
        self,
        scope: Scope | None = None,
        poll_day: PollDaySelector = LATEST_POLL_DAY,
    ) -> int | None:
        """Resolve a poll-day selector for a scope."""
        active_scope = scope or self._config.default_scope
        return resolve_poll_day(filter_scope(self.records(), active_scope), poll_day)

    def day_series(
        self,
        scope: Scope | None = None,
        poll_day: PollDaySelector = LATEST_POLL_DAY,
    ) -> tuple[DaySeriesRow, ...]:
        """Build the backfilled day series for a scope."""
        active_scope = scope or self._config.default_scope
        return self._cache.get_or_compute(
            self._snapshot_key("series", active_scope, poll_day),
            lambda: build_day_series(self.records(), active_scope, poll_day),
        )

    def day_window(
        self,
        scope: Scope | None = None,
        poll_day: PollDaySelector = LATEST_POLL_DAY,
        start: int | None = None,
        end: int | None = None,
    ) -> tuple[DaySeriesRow, ...]:
        """Return a row window of the day series."""
        return select_day_window(self.day_series(scope, poll_day), start, end)

    def summary(
        self,
        scope: Scope | None = None,
        poll_day: PollDaySelector = LATEST_POLL_DAY,
        day_index_range: tuple[int, int] | None = None,
    ) -> SummaryTotals:
        """Total the day series, optionally over a row window."""
        active_scope = scope or self._config.default_scope
        return self._cache.get_or_compute(
            self._snapshot_key("summary", active_scope, poll_day, day_index_range),
            lambda: totalize(self.day_series(active_scope, poll_day), day_index_range),
        )

    def delta(
        self,
        scope: Scope | None = None,
        poll_day: PollDaySelector = LATEST_POLL_DAY,
    ) -> DeltaComparison:
        """Compare a poll day with the poll day before it."""
        active_scope = scope or self._config.default_scope
        return self._cache.get_or_compute(
            self._snapshot_key("delta", active_scope, poll_day),
            lambda: compare_delta(self.records(), active_scope, poll_day),
        )

    def transitions(
        self,
        scope: Scope | None = None,
        poll_day: PollDaySelector = LATEST_POLL_DAY,
        format_tag: str | None = None,
        all_days: bool | None = None,
    ) -> TransitionAggregation:
        """Aggregate status transitions for a scope.

        Args:
            scope: Active scope, the configured default when omitted.
            poll_day: Explicit poll day or ``"latest"`` of the snapshot scope.
            format_tag: Transition format, the loaded key order when omitted.
            all_days: Flatten every poll day, the configured flag when omitted.

        Returns:
            Ranked transitions, empty when no transition dataset is loaded.
        """
        active_scope = scope or self._config.default_scope
        dataset = self._session.dataset("transition")
        if dataset is None:
            return TransitionAggregation()
        resolved_day = self.resolve_poll_day(active_scope, poll_day)
        selected_format = format_tag or self.key_order
        flatten = self._config.transitions_all_days if all_days is None else all_days
        key = (
            "transitions",
            dataset.fingerprint,
            active_scope,
            resolved_day,
            selected_format,
            flatten,
        )
        return self._cache.get_or_compute(
            key,
            lambda: aggregate_transitions(
                dataset.payload, active_scope, resolved_day, selected_format, flatten
            ),
        )

    def catalog(self, scope: Scope | None = None) -> ScopeCatalog:
        """Return selector values and legend order for a scope."""
        active_scope = scope or self._config.default_scope
        return self._cache.get_or_compute(
            self._snapshot_key("catalog", active_scope),
            lambda: build_scope_catalog(self.records(), active_scope),
        )

    def dashboard(
        self,
        scope: Scope | None = None,
        poll_day: PollDaySelector = LATEST_POLL_DAY,
        day_index_range: tuple[int, int] | None = None,
    ) -> DashboardView:
        """Build every view for one scope and selection."""
        active_scope = scope or self._config.default_scope
        rows = self.day_series(active_scope, poll_day)
        if day_index_range is None:
            window = rows
        else:
            window = select_day_window(rows, day_index_range[0], day_index_range[1])
        return DashboardView(
            scope=active_scope,
            poll_day=self.resolve_poll_day(active_scope, poll_day),
            rows=rows,
            window=window,
            summary=self.summary(active_scope, poll_day, day_index_range),
            delta=self.delta(active_scope, poll_day),
            transitions=self.transitions(active_scope, poll_day),
            catalog=self.catalog(active_scope),
            skipped_keys=self.normalize_report().skipped_count,
        )

    def _snapshot_key(self, view: str, *selection: object) -> tuple[object, ...]:
        return (view, self._session.fingerprint("snapshot"), self.key_order, *selection)
