"""Public SDK surface for CaseWatch.

This module provides a stable import path for SDK users.
It re-exports the client, typed models, and pure pipeline stages.
"""

from __future__ import annotations

from core.config import CaseWatchConfig
from core.constants import LATEST_POLL_DAY
from core.types import (
    CaseCountRecord,
    DaySeriesRow,
    MalformedKey,
    NormalizeResult,
    Scope,
    TransitionEdge,
    TransitionRecord,
)
from ingest.snapshot_normalizer import normalize_snapshot
from store.casewatch_client import CaseWatchClient, DashboardView
from transforms.day_series import build_day_series, select_day_window
from transforms.delta_comparison import DeltaComparison, compare_delta
from transforms.group_merge import merge_records
from transforms.status_canonicalizer import canonicalize, status_color
from transforms.summary_totals import SummaryTotals, totalize
from transforms.transition_aggregation import TransitionAggregation, aggregate_transitions

__all__ = [
    "LATEST_POLL_DAY",
    "CaseCountRecord",
    "CaseWatchClient",
    "CaseWatchConfig",
    "DashboardView",
    "DaySeriesRow",
    "DeltaComparison",
    "MalformedKey",
    "NormalizeResult",
    "Scope",
    "SummaryTotals",
    "TransitionAggregation",
    "TransitionEdge",
    "TransitionRecord",
    "aggregate_transitions",
    "build_day_series",
    "canonicalize",
    "compare_delta",
    "merge_records",
    "normalize_snapshot",
    "select_day_window",
    "status_color",
    "totalize",
]
