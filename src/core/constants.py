"""Core constants used across CaseWatch modules.

This module centralizes dataset layout values and selection defaults.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path("data")
KEY_DELIMITER = "|"
CASE_KEY_FIELD_COUNT = 6
TRANSITION_KEY_FIELD_COUNT = 8
SNAPSHOT_FILE_TEMPLATE = "data_{key_order}_{year}.json"
TRANSITION_FILE_TEMPLATE = "transitioning_{delta}.json"
MODE_PREFIX = "data_"
LATEST_POLL_DAY = "latest"
DEFAULT_FORM = "I-131"
DEFAULT_OFFICE = "LIN"
DEFAULT_YEAR = "21"
DEFAULT_TRANSITION_DELTA = 1
SUPPORTED_TRANSITION_DELTAS = (1, 7)
DEFAULT_VIEW_CACHE_SIZE = 128
EXCLUDED_OFFICE_NAMES = ("default",)
HASH_ALGORITHM = "sha256"
UNDEFINED_SHARE_TEXT = "—"
SUPPORTED_REPORT_VIEW_KINDS = ("series", "summary", "delta", "transitions", "catalog")
