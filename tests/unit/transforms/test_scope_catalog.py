"""Unit tests for selector catalogs."""

from __future__ import annotations

from core.types import Scope
from ingest.snapshot_normalizer import normalize_snapshot
from transforms.group_merge import merge_records
from transforms.scope_catalog import build_scope_catalog


def test_build_scope_catalog_lists_selector_values(snapshot_payload) -> None:
    """Catalog should list forms and offices without placeholder offices."""
    records = merge_records(normalize_snapshot(snapshot_payload).records)

    catalog = build_scope_catalog(records, Scope(form="I-765", office="LIN", year="21"))

    assert catalog.forms == ("I-131", "I-765")
    assert catalog.offices == ("LIN", "SRC")
    assert catalog.poll_days == (99, 100)
    assert catalog.latest_poll_day == 100


def test_build_scope_catalog_orders_statuses_by_frequency(snapshot_payload) -> None:
    """Legend order should put the most frequent status first."""
    records = merge_records(normalize_snapshot(snapshot_payload).records)

    catalog = build_scope_catalog(records, Scope(form="I-765", office="LIN", year="21"))

    assert catalog.statuses == (
        "Case Was Approved",
        "Case Was Received",
        "Request for Additional Evidence Was Sent",
    )


def test_build_scope_catalog_empty_scope(snapshot_payload) -> None:
    """A scope without records should have no statuses or poll days."""
    records = merge_records(normalize_snapshot(snapshot_payload).records)

    catalog = build_scope_catalog(records, Scope(form="I-485", office="LIN", year="21"))

    assert catalog.statuses == () and catalog.latest_poll_day is None
