"""Unit tests for receipt-day and poll-day labels."""

from __future__ import annotations

from datetime import date

from core.receipt_labels import format_poll_day, poll_day_to_date, receipt_number_pattern


def test_poll_day_to_date_counts_from_epoch() -> None:
    """Poll day zero should be the Unix epoch date."""
    assert poll_day_to_date(0) == date(1970, 1, 1)
    assert poll_day_to_date(18628) == date(2021, 1, 1)


def test_format_poll_day_uses_month_and_day() -> None:
    """Poll day labels should read M/D without zero padding."""
    assert format_poll_day(18631) == "1/4"


def test_receipt_number_pattern_for_day_code_order() -> None:
    """Day-code keys should mask the serial after the receipt day."""
    pattern = receipt_number_pattern("LIN", "21", 5, "center_year_day_code_serial")

    assert pattern == "LIN210055XXXX"


def test_receipt_number_pattern_for_code_day_order() -> None:
    """Code-day keys should place the 9 classification digit before the day."""
    pattern = receipt_number_pattern("LIN", "21", 5, "center_year_code_day_serial")

    assert pattern == "LIN219005XXXX"
