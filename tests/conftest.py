"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from dataclasses import replace
from pathlib import Path
from typing import Any

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def snapshot_payload() -> dict[str, Any]:
    """Snapshot dataset with synonyms, sparse days, and one malformed key."""
    from tests.fixture_paths import load_data_fixture

    return load_data_fixture("data_center_year_day_code_serial_21.json")


@pytest.fixture
def transition_payload() -> dict[str, Any]:
    """Transition dataset for poll days 99 and 100."""
    from tests.fixture_paths import load_data_fixture

    return load_data_fixture("transitioning_1.json")


@pytest.fixture
def fixture_config(monkeypatch: pytest.MonkeyPatch):
    """Config pointed at the fixture data root with an I-765/LIN/21 scope."""
    from core.config import CaseWatchConfig
    from core.types import Scope
    from tests.fixture_paths import data_fixture_root

    for name in (
        "CASEWATCH_DATA_ROOT",
        "CASEWATCH_KEY_ORDER",
        "CASEWATCH_TRANSITION_DELTA",
        "CASEWATCH_TRANSITIONS_ALL_DAYS",
        "CASEWATCH_VIEW_CACHE_SIZE",
    ):
        monkeypatch.delenv(name, raising=False)
    return replace(
        CaseWatchConfig.from_env(),
        data_root=data_fixture_root(),
        default_scope=Scope(form="I-765", office="LIN", year="21"),
    )
