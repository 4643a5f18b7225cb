"""Field helpers shared by the composite-key parsers."""

from __future__ import annotations

from core.constants import KEY_DELIMITER
from core.types import MalformedKey


def split_key(key: str, expected_fields: int) -> list[str] | MalformedKey:
    """Split a composite key, flagging a wrong field count."""
    parts = key.split(KEY_DELIMITER)
    if len(parts) != expected_fields:
        return MalformedKey(
            key=key,
            reason=f"expected {expected_fields} fields, got {len(parts)}",
        )
    return parts


def parse_ordinal(raw_value: object) -> int | None:
    """Parse a day ordinal from JSON text or number, ``None`` when invalid."""
    if isinstance(raw_value, bool):
        return None
    if isinstance(raw_value, int):
        return raw_value
    if not isinstance(raw_value, str):
        return None
    try:
        return int(raw_value.strip())
    except ValueError:
        return None


def is_count(raw_count: object) -> bool:
    """Return whether a JSON value is a usable non-negative count."""
    return isinstance(raw_count, int) and not isinstance(raw_count, bool) and raw_count >= 0
