"""Dataset payload fingerprinting for memoization keys.

This module provides deterministic hashing of parsed JSON payloads so
derived views can be cached against the exact data they were built from.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, Mapping

from core.constants import HASH_ALGORITHM


def fingerprint_payload(payload: Mapping[str, Any]) -> str:
    """Compute a stable hash for one dataset payload."""
    normalized = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    hash_builder = hashlib.new(HASH_ALGORITHM)
    hash_builder.update(normalized.encode("utf-8"))
    return hash_builder.hexdigest()
