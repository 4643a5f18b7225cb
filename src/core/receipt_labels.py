"""Display labels for receipt-day buckets and poll days."""

from __future__ import annotations

from datetime import date, timedelta

from core.types import KeyOrder

_EPOCH = date(1970, 1, 1)


def poll_day_to_date(poll_day: int) -> date:
    """Convert a poll day (days since the Unix epoch) to a calendar date."""
    return _EPOCH + timedelta(days=poll_day)


def format_poll_day(poll_day: int) -> str:
    """Render a poll day as ``M/D`` the way the day slider labels it."""
    poll_date = poll_day_to_date(poll_day)
    return f"{poll_date.month}/{poll_date.day}"


def receipt_number_pattern(office: str, year: str, receipt_day: int, key_order: KeyOrder) -> str:
    """Build the masked receipt number pattern covering one receipt-day bucket.

    Args:
        office: Processing center code.
        year: Two-digit fiscal year.
        receipt_day: Ordinal receipt-day bucket.
        key_order: Composite key field order of the loaded dataset.

    Returns:
        Pattern such as ``LIN219005XXXX`` with the serial digits masked.
    """
    padded_day = str(receipt_day).zfill(3)
    if key_order == "center_year_code_day_serial":
        return f"{office}{year}9{padded_day}XXXX"
    return f"{office}{year}{padded_day}5XXXX"
