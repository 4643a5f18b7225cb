"""Report-spec command wiring for CaseWatch CLI.

This module executes every view of a YAML report spec against one client
so the datasets are read once and shared views hit the memoization cache.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Any

from cli.view_rendering import (
    render_catalog,
    render_delta,
    render_poll_day,
    render_series,
    render_summary,
    render_transitions,
)
from core.config import CaseWatchConfig
from core.report_spec import ReportDefaults, ReportSpec, ReportView, load_report_spec
from core.types import Scope
from store.casewatch_client import CaseWatchClient


def add_report_command(subparsers: Any) -> None:
    """Register report subcommand."""
    parser = subparsers.add_parser("report", help="Render every view of a YAML report spec")
    parser.add_argument("spec_file", help="Path to YAML report spec")


def run_report_command(config: CaseWatchConfig, args: argparse.Namespace) -> int:
    """Execute a report spec file and print its output lines."""
    for line in execute_report_file(config, args.spec_file):
        print(line)
    return 0


def execute_report_file(config: CaseWatchConfig, spec_file: str) -> tuple[str, ...]:
    """Load and execute a report spec, returning printable output lines."""
    spec = load_report_spec(spec_file)
    return execute_report(config, spec)


def execute_report(config: CaseWatchConfig, spec: ReportSpec) -> tuple[str, ...]:
    """Execute a parsed report spec and return output lines."""
    defaults = spec.defaults
    if defaults.data_root:
        config = replace(config, data_root=Path(defaults.data_root).expanduser().resolve())
    client = CaseWatchClient(config)
    include_transitions = any(view.kind == "transitions" for view in spec.views)
    output_lines: list[str] = []
    for index, view in enumerate(spec.views, 1):
        scope = _resolve_scope(config, defaults, view)
        client.load_datasets(
            scope.year,
            defaults.key_order,
            defaults.transition_delta,
            include_transitions=include_transitions,
        )
        output_lines.append(f"[{index}] {view.kind}\t{scope.form}\t{scope.office}\t{scope.year}")
        output_lines.extend(_execute_view(client, defaults, view, scope))
    return tuple(output_lines)


def _resolve_scope(config: CaseWatchConfig, defaults: ReportDefaults, view: ReportView) -> Scope:
    fallback = config.default_scope
    return Scope(
        form=view.form or defaults.form or fallback.form,
        office=view.office or defaults.office or fallback.office,
        year=view.year or defaults.year or fallback.year,
    )


def _execute_view(
    client: CaseWatchClient,
    defaults: ReportDefaults,
    view: ReportView,
    scope: Scope,
) -> list[str]:
    poll_day = defaults.poll_day if view.poll_day is None else view.poll_day
    resolved_day = client.resolve_poll_day(scope, poll_day)
    lines = [render_poll_day(resolved_day)]
    if view.kind == "series":
        start, end = view.day_range or (None, None)
        rows = client.day_window(scope, poll_day, start, end)
        statuses = client.catalog(scope).statuses
        lines.extend(render_series(rows, scope, client.key_order, statuses))
    elif view.kind == "summary":
        lines.extend(render_summary(client.summary(scope, poll_day, view.day_range)))
    elif view.kind == "delta":
        lines.extend(render_delta(client.delta(scope, poll_day)))
    elif view.kind == "transitions":
        aggregation = client.transitions(scope, poll_day, all_days=view.all_days)
        lines.extend(render_transitions(aggregation))
    else:
        lines = render_catalog(client.catalog(scope))
    return lines
