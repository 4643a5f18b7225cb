"""Runtime configuration model for CaseWatch.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import cast

from core.constants import (
    DEFAULT_DATA_ROOT,
    DEFAULT_FORM,
    DEFAULT_OFFICE,
    DEFAULT_TRANSITION_DELTA,
    DEFAULT_VIEW_CACHE_SIZE,
    DEFAULT_YEAR,
    MODE_PREFIX,
    SNAPSHOT_FILE_TEMPLATE,
    SUPPORTED_TRANSITION_DELTAS,
    TRANSITION_FILE_TEMPLATE,
)
from core.errors import CaseWatchConfigError
from core.types import DEFAULT_KEY_ORDER, SUPPORTED_KEY_ORDERS, KeyOrder, Scope

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


@dataclass(frozen=True)
class CaseWatchConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Directory holding snapshot and transition JSON files.
        default_scope: Scope used when a caller does not choose one.
        key_order: Composite key field order of the snapshot dataset.
        transition_delta: Snapshot-to-snapshot delta of the transition dataset.
        transitions_all_days: Flatten transitions across every poll day.
        view_cache_size: Maximum number of memoized derived views.
    """

    data_root: Path
    default_scope: Scope
    key_order: KeyOrder
    transition_delta: int
    transitions_all_days: bool
    view_cache_size: int

    @classmethod
    def from_env(cls) -> "CaseWatchConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            CaseWatchConfigError: If environment values are invalid.
        """
        data_root_value = os.getenv("CASEWATCH_DATA_ROOT", str(DEFAULT_DATA_ROOT))
        default_scope = Scope(
            form=os.getenv("CASEWATCH_FORM", DEFAULT_FORM),
            office=os.getenv("CASEWATCH_OFFICE", DEFAULT_OFFICE),
            year=os.getenv("CASEWATCH_YEAR", DEFAULT_YEAR),
        )
        return cls(
            data_root=Path(data_root_value).expanduser().resolve(),
            default_scope=default_scope,
            key_order=parse_key_order(os.getenv("CASEWATCH_KEY_ORDER", DEFAULT_KEY_ORDER)),
            transition_delta=parse_transition_delta(
                os.getenv("CASEWATCH_TRANSITION_DELTA", str(DEFAULT_TRANSITION_DELTA))
            ),
            transitions_all_days=_parse_flag(
                "CASEWATCH_TRANSITIONS_ALL_DAYS",
                os.getenv("CASEWATCH_TRANSITIONS_ALL_DAYS", "false"),
            ),
            view_cache_size=_parse_cache_size(
                os.getenv("CASEWATCH_VIEW_CACHE_SIZE", str(DEFAULT_VIEW_CACHE_SIZE))
            ),
        )

    def snapshot_path(self, year: str, key_order: KeyOrder) -> Path:
        """Resolve the snapshot dataset file for a year and key order."""
        return self.data_root / SNAPSHOT_FILE_TEMPLATE.format(key_order=key_order, year=year)

    def transition_path(self, delta: int) -> Path:
        """Resolve the transition dataset file for a snapshot delta."""
        return self.data_root / TRANSITION_FILE_TEMPLATE.format(delta=delta)


def parse_key_order(raw_value: str) -> KeyOrder:
    """Validate a key order mode name.

    Accepts both the bare value and the ``data_`` prefixed mode name.

    Raises:
        CaseWatchConfigError: If the mode is not supported.
    """
    normalized = raw_value.strip().removeprefix(MODE_PREFIX)
    if normalized in SUPPORTED_KEY_ORDERS:
        return cast(KeyOrder, normalized)
    supported_rows = ", ".join(SUPPORTED_KEY_ORDERS)
    raise CaseWatchConfigError(
        f"Unsupported key order '{raw_value}'. Use one of: {supported_rows}."
    )


def parse_transition_delta(raw_value: str) -> int:
    """Parse and validate the transition snapshot delta.

    Raises:
        CaseWatchConfigError: If value is not a supported integer delta.
    """
    try:
        delta = int(raw_value)
    except ValueError as error:
        raise CaseWatchConfigError(
            "Invalid CASEWATCH_TRANSITION_DELTA value: "
            f"expected integer, got '{raw_value}'."
        ) from error
    if delta not in SUPPORTED_TRANSITION_DELTAS:
        raise CaseWatchConfigError(
            f"Unsupported transition delta {delta}. "
            f"Use one of: {', '.join(str(value) for value in SUPPORTED_TRANSITION_DELTAS)}."
        )
    return delta


def _parse_flag(name: str, raw_value: str) -> bool:
    normalized = raw_value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise CaseWatchConfigError(
        f"Invalid {name} value: expected true/false, got '{raw_value}'."
    )


def _parse_cache_size(raw_value: str) -> int:
    try:
        size = int(raw_value)
    except ValueError as error:
        raise CaseWatchConfigError(
            "Invalid CASEWATCH_VIEW_CACHE_SIZE value: "
            f"expected integer, got '{raw_value}'. "
            "Set CASEWATCH_VIEW_CACHE_SIZE to a positive number."
        ) from error
    if size < 1:
        raise CaseWatchConfigError(
            f"Invalid CASEWATCH_VIEW_CACHE_SIZE value {size}: must be at least 1."
        )
    return size
