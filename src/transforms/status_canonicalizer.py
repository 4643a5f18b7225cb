"""Status label canonicalization and legend colors.

This module collapses historical wordings of the same case status into one
canonical label. The synonym table is resolved to its fixed point once at
import, so canonicalizing an already canonical label is a no-op.
"""

from __future__ import annotations

import hashlib
from types import MappingProxyType
from typing import Mapping

from core.constants import HASH_ALGORITHM

_STATUS_SYNONYMS = (
    ("Case Was Approved And My Decision Was Emailed", "Case Was Approved"),
    ("Case Was Received and A Receipt Notice Was Emailed", "Case Was Received"),
    ("Case Was Received and A Receipt Notice Was Sent", "Case Was Received"),
    ("Request for Initial Evidence Was Sent", "Request for Additional Evidence Was Sent"),
    (
        "Case Was Transferred And A New Office Has Jurisdiction",
        "Case Transferred And New Office Has Jurisdiction",
    ),
)

_STATUS_COLORS = MappingProxyType(
    {
        "Case Was Received": "#999900",
        "Case Was Approved": "#00FF00",
        "Request for Additional Evidence Was Sent": "#FF0000",
    }
)


def _build_canonical_map(pairs: tuple[tuple[str, str], ...]) -> Mapping[str, str]:
    synonyms = dict(pairs)
    resolved: dict[str, str] = {}
    for raw_status in synonyms:
        target = synonyms[raw_status]
        seen = {raw_status}
        while target in synonyms and target not in seen:
            seen.add(target)
            target = synonyms[target]
        resolved[raw_status] = target
    return MappingProxyType(resolved)


CANONICAL_STATUS_MAP: Mapping[str, str] = _build_canonical_map(_STATUS_SYNONYMS)


def canonicalize(raw_status: str) -> str:
    """Map a raw status label to its canonical label.

    Args:
        raw_status: Status text as found in the dataset.

    Returns:
        Canonical label, or the input unchanged when it has no synonym.
    """
    return CANONICAL_STATUS_MAP.get(raw_status, raw_status)


def status_color(status: str) -> str:
    """Return the legend color for a canonical status.

    Well-known statuses have fixed colors; any other label gets a stable
    color derived from its hash so new statuses render deterministically.
    """
    fixed_color = _STATUS_COLORS.get(status)
    if fixed_color is not None:
        return fixed_color
    hasher = hashlib.new(HASH_ALGORITHM)
    hasher.update(status.encode("utf-8"))
    return "#" + hasher.hexdigest()[:6].upper()
