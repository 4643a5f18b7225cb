"""Integration tests for the dataset-to-dashboard workflow."""

from __future__ import annotations

import json
from dataclasses import replace

import pytest

from casewatch import (
    CaseWatchClient,
    CaseWatchConfig,
    Scope,
    build_day_series,
    merge_records,
    normalize_snapshot,
    totalize,
)


def _write_datasets(data_root) -> None:
    snapshot = {
        "LIN|21|010|C1|I-765|Case Was Received and A Receipt Notice Was Sent": {"200": 4},
        "LIN|21|010|C1|I-765|Case Was Received and A Receipt Notice Was Emailed": {
            "200": 1,
            "199": 6,
        },
        "LIN|21|010|C1|I-765|Case Was Approved": {"200": 2},
        "LIN|21|013|C1|I-765|Request for Initial Evidence Was Sent": {"200": 3},
        "LIN|21|not-a-day|C1|I-765|Case Was Approved": {"200": 9},
    }
    transitions = {
        "200": {
            "center_year_day_code_serial|I-765|LIN|21|C1|10|"
            "Case Was Received|Case Was Approved": 2,
            "center_year_day_code_serial|I-765|LIN|21|C1|13|"
            "Case Was Received and A Receipt Notice Was Sent|"
            "Request for Initial Evidence Was Sent": 3,
        }
    }
    (data_root / "data_center_year_day_code_serial_21.json").write_text(
        json.dumps(snapshot), encoding="utf-8"
    )
    (data_root / "transitioning_1.json").write_text(json.dumps(transitions), encoding="utf-8")


def test_dashboard_flow_from_dataset_files(tmp_path) -> None:
    """End-to-end flow should load files and derive consistent views."""
    _write_datasets(tmp_path)
    scope = Scope(form="I-765", office="LIN", year="21")
    config = replace(CaseWatchConfig.from_env(), data_root=tmp_path, default_scope=scope)
    client = CaseWatchClient(config)

    client.load_datasets()
    dashboard = client.dashboard()

    assert dashboard.poll_day == 200
    assert [row.receipt_day for row in dashboard.rows] == [10, 11, 12, 13]
    assert dashboard.rows[0].count("Case Was Received") == 5
    assert dashboard.summary.grand_total == 10
    assert dashboard.delta.percent_of_previous("Case Was Received") == pytest.approx(500 / 6)
    assert dashboard.transitions.edges[0].to_status == "Request for Additional Evidence Was Sent"
    assert dashboard.skipped_keys == 1


def test_pipeline_stages_match_client_views(tmp_path) -> None:
    """Pure pipeline stages should agree with the memoized client views."""
    _write_datasets(tmp_path)
    scope = Scope(form="I-765", office="LIN", year="21")
    config = replace(CaseWatchConfig.from_env(), data_root=tmp_path, default_scope=scope)
    client = CaseWatchClient(config)
    client.load_datasets(include_transitions=False)
    payload = json.loads(
        (tmp_path / "data_center_year_day_code_serial_21.json").read_text(encoding="utf-8")
    )

    rows = build_day_series(merge_records(normalize_snapshot(payload).records), scope)

    assert rows == client.day_series()
    assert totalize(rows) == client.summary()
