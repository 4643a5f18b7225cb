"""Unit tests for JSON dataset readers."""

from __future__ import annotations

import pytest

from core.errors import CaseWatchIngestError
from ingest.dataset_reader import read_snapshot_payload, read_transition_payload
from tests.fixture_paths import fixture_path


def test_read_snapshot_payload_loads_object() -> None:
    """Snapshot reader should return the top-level JSON object."""
    payload = read_snapshot_payload(fixture_path("data/data_center_year_day_code_serial_21.json"))

    assert "LIN|21|005|C1|I-765|Case Was Approved" in payload


def test_read_transition_payload_loads_poll_days() -> None:
    """Transition reader should return poll-day keyed groups."""
    payload = read_transition_payload(fixture_path("data/transitioning_1.json"))

    assert sorted(payload) == ["100", "99"]


def test_reader_raises_for_missing_file(tmp_path) -> None:
    """Missing dataset files should raise ingest errors."""
    with pytest.raises(CaseWatchIngestError, match="does not exist"):
        read_snapshot_payload(tmp_path / "missing.json")


def test_reader_raises_for_invalid_json() -> None:
    """Truncated JSON should raise ingest errors."""
    with pytest.raises(CaseWatchIngestError, match="Invalid JSON"):
        read_snapshot_payload(fixture_path("data/truncated.json"))


def test_reader_raises_for_non_object_root(tmp_path) -> None:
    """A JSON array at the top level should be rejected."""
    dataset_file = tmp_path / "transitioning_1.json"
    dataset_file.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(CaseWatchIngestError, match="expected a JSON object"):
        read_transition_payload(dataset_file)
