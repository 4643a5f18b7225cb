"""CaseWatch CLI entry points.
This module exposes the derived case-progress views as commands.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from cli.report_command import add_report_command, run_report_command
from cli.view_rendering import (
    render_catalog,
    render_delta,
    render_poll_day,
    render_series,
    render_summary,
    render_transitions,
)
from core.config import CaseWatchConfig, parse_key_order
from core.constants import LATEST_POLL_DAY, SUPPORTED_TRANSITION_DELTAS
from core.errors import CaseWatchError
from core.types import SUPPORTED_KEY_ORDERS, PollDaySelector, Scope
from store.casewatch_client import CaseWatchClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="casewatch", description="Case progress tracker CLI")
    parser.add_argument("--data-root", help="Override CASEWATCH_DATA_ROOT for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_series_command(subparsers)
    _add_summary_command(subparsers)
    _add_delta_command(subparsers)
    _add_transitions_command(subparsers)
    _add_catalog_command(subparsers)
    add_report_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CaseWatch CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _build_config(args.data_root)
        if args.command == "report":
            return run_report_command(config, args)
        return _run_view_command(CaseWatchClient(config), args)
    except CaseWatchError as error:
        print(f"error={error}", file=sys.stderr)
        return 1


def _build_config(data_root: str | None) -> CaseWatchConfig:
    """Build config with optional data-root override.

    Args:
        data_root: Optional override path.

    Returns:
        Validated runtime config.
    """
    config = CaseWatchConfig.from_env()
    if data_root:
        config = replace(config, data_root=Path(data_root).expanduser().resolve())
    return config


def _run_view_command(client: CaseWatchClient, args: argparse.Namespace) -> int:
    """Load datasets for the selected scope and print one view.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    scope = _scope_from_args(client, args)
    key_order = parse_key_order(args.key_order) if args.key_order else None
    client.load_datasets(
        scope.year,
        key_order,
        args.transition_delta,
        include_transitions=args.command == "transitions",
    )
    poll_day = args.poll_day
    if args.command == "catalog":
        lines = render_catalog(client.catalog(scope))
    else:
        lines = [render_poll_day(client.resolve_poll_day(scope, poll_day))]
        lines.extend(_render_view(client, args, scope, poll_day))
    for line in lines:
        print(line)
    return 0


def _render_view(
    client: CaseWatchClient,
    args: argparse.Namespace,
    scope: Scope,
    poll_day: PollDaySelector,
) -> list[str]:
    if args.command == "series":
        rows = client.day_window(scope, poll_day, args.start, args.end)
        statuses = client.catalog(scope).statuses
        return render_series(rows, scope, client.key_order, statuses)
    if args.command == "summary":
        day_range = None if args.start is None or args.end is None else (args.start, args.end)
        return render_summary(client.summary(scope, poll_day, day_range))
    if args.command == "delta":
        return render_delta(client.delta(scope, poll_day))
    return render_transitions(
        client.transitions(scope, poll_day, all_days=True if args.all_days else None)
    )


def _scope_from_args(client: CaseWatchClient, args: argparse.Namespace) -> Scope:
    fallback = client.config.default_scope
    return Scope(
        form=args.form or fallback.form,
        office=args.office or fallback.office,
        year=args.year or fallback.year,
    )


def _parse_poll_day(raw_value: str) -> PollDaySelector:
    if raw_value == LATEST_POLL_DAY:
        return LATEST_POLL_DAY
    try:
        return int(raw_value)
    except ValueError as error:
        raise argparse.ArgumentTypeError(
            f"expected an integer poll day or '{LATEST_POLL_DAY}', got '{raw_value}'"
        ) from error


def _add_scope_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--form", help="Form type, e.g. I-765")
    parser.add_argument("--office", help="Processing center code, e.g. LIN")
    parser.add_argument("--year", help="Two-digit fiscal year, e.g. 21")
    parser.add_argument(
        "--key-order",
        help=(
            "Composite key field order of the snapshot dataset, with or without "
            f"the data_ prefix: {', '.join(SUPPORTED_KEY_ORDERS)}"
        ),
    )
    parser.add_argument(
        "--poll-day",
        type=_parse_poll_day,
        default=LATEST_POLL_DAY,
        help="Poll day (days since epoch) or 'latest'",
    )
    parser.add_argument(
        "--transition-delta",
        type=int,
        choices=SUPPORTED_TRANSITION_DELTAS,
        help="Snapshot delta in days of the transition dataset",
    )


def _add_window_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--start", type=int, help="First row index of the day window")
    parser.add_argument("--end", type=int, help="Row index after the day window")


def _add_series_command(subparsers: Any) -> None:
    """Register series subcommand."""
    parser = subparsers.add_parser("series", help="Print the backfilled per-day status counts")
    _add_scope_arguments(parser)
    _add_window_arguments(parser)


def _add_summary_command(subparsers: Any) -> None:
    """Register summary subcommand."""
    parser = subparsers.add_parser("summary", help="Print status totals and shares")
    _add_scope_arguments(parser)
    _add_window_arguments(parser)


def _add_delta_command(subparsers: Any) -> None:
    """Register delta subcommand."""
    parser = subparsers.add_parser("delta", help="Compare a poll day with the previous day")
    _add_scope_arguments(parser)


def _add_transitions_command(subparsers: Any) -> None:
    """Register transitions subcommand."""
    parser = subparsers.add_parser("transitions", help="Print ranked status transitions")
    _add_scope_arguments(parser)
    parser.add_argument(
        "--all-days",
        action="store_true",
        help="Aggregate transitions across every poll day",
    )


def _add_catalog_command(subparsers: Any) -> None:
    """Register catalog subcommand."""
    parser = subparsers.add_parser("catalog", help="List forms, offices, statuses and poll days")
    _add_scope_arguments(parser)
