"""JSON dataset readers for ingestion.

This module loads the snapshot and transition datasets produced by the
scraper. Both are two-level JSON objects; readers only check the outer
shape and leave per-key validation to the normalizers.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

from core.errors import CaseWatchIngestError

SnapshotPayload = Mapping[str, Mapping[str, Any]]
TransitionPayload = Mapping[str, Mapping[str, Any]]


def read_snapshot_payload(path: Path) -> SnapshotPayload:
    """Load a snapshot dataset keyed by composite case key.

    Args:
        path: JSON file mapping ``office|year|...|status`` to poll-day counts.

    Returns:
        Parsed payload mapping.

    Raises:
        CaseWatchIngestError: If the file is missing, unreadable, or not an object.
    """
    return _read_object(path, "snapshot")


def read_transition_payload(path: Path) -> TransitionPayload:
    """Load a transition dataset keyed by poll day.

    Args:
        path: JSON file mapping poll day to transition-key counts.

    Returns:
        Parsed payload mapping.

    Raises:
        CaseWatchIngestError: If the file is missing, unreadable, or not an object.
    """
    return _read_object(path, "transition")


def _read_object(path: Path, dataset_kind: str) -> dict[str, Any]:
    if not path.exists():
        raise CaseWatchIngestError(
            f"Failed to read {dataset_kind} dataset at {path}: path does not exist. "
            "Check CASEWATCH_DATA_ROOT or pass --data-root."
        )
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as error:
        raise CaseWatchIngestError(
            f"Failed to read {dataset_kind} dataset at {path}: {error}."
        ) from error
    except json.JSONDecodeError as error:
        raise CaseWatchIngestError(
            f"Invalid JSON in {dataset_kind} dataset at {path}: {error.msg} "
            f"(line {error.lineno})."
        ) from error
    if not isinstance(payload, dict):
        raise CaseWatchIngestError(
            f"Invalid {dataset_kind} dataset at {path}: expected a JSON object, "
            f"got {type(payload).__name__}."
        )
    return payload
