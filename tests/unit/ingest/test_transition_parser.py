"""Unit tests for transition key parsing."""

from __future__ import annotations

from core.types import MalformedKey, TransitionRecord
from ingest.transition_parser import parse_transition_entries, parse_transition_key


def test_parse_transition_key_reads_all_fields() -> None:
    """Transition keys should parse into typed records."""
    record = parse_transition_key(
        "center_year_day_code_serial|I-765|LIN|21|C1|5|Case Was Received|Case Was Approved",
        3,
    )

    assert record == TransitionRecord(
        format="center_year_day_code_serial",
        form="I-765",
        office="LIN",
        year="21",
        classification_code="C1",
        receipt_day=5,
        from_status="Case Was Received",
        to_status="Case Was Approved",
        count=3,
    )


def test_parse_transition_key_canonicalizes_statuses() -> None:
    """Transition statuses should use canonical labels."""
    record = parse_transition_key(
        "center_year_day_code_serial|I-765|LIN|21|C1|5|"
        "Case Was Received and A Receipt Notice Was Emailed|"
        "Request for Initial Evidence Was Sent",
        1,
    )

    assert isinstance(record, TransitionRecord)
    assert record.from_status == "Case Was Received"
    assert record.to_status == "Request for Additional Evidence Was Sent"


def test_parse_transition_key_flags_invalid_count() -> None:
    """Non-integer counts should mark the key malformed."""
    record = parse_transition_key(
        "center_year_day_code_serial|I-765|LIN|21|C1|5|Case Was Received|Case Was Approved",
        "3",
    )

    assert isinstance(record, MalformedKey)


def test_parse_transition_entries_keeps_encounter_order() -> None:
    """Parsed records should keep dataset order and collect malformed keys."""
    entries = [
        ("center_year_day_code_serial|I-765|LIN|21|C1|7|A|B", 1),
        ("broken|key", 1),
        ("center_year_day_code_serial|I-765|LIN|21|C1|5|C|D", 2),
    ]

    parsed = parse_transition_entries(entries)

    assert [record.receipt_day for record in parsed.records] == [7, 5]
    assert [malformed.key for malformed in parsed.malformed] == ["broken|key"]
