"""Percentage helpers with an explicit undefined sentinel.

Shares against a zero total are ``None`` rather than NaN or an exception.
"""

from __future__ import annotations

from core.constants import UNDEFINED_SHARE_TEXT


def safe_share(part: int, total: int) -> float | None:
    """Return ``100 * part / total``, or ``None`` when total is zero."""
    if total == 0:
        return None
    return 100 * part / total


def format_share(share: float | None) -> str:
    """Render a share with two decimals, or the undefined marker."""
    if share is None:
        return UNDEFINED_SHARE_TEXT
    return f"{share:.2f}%"
