"""Unit tests for CLI command handling."""

from __future__ import annotations

from cli.main import main
from tests.fixture_paths import data_fixture_root

_SCOPE_ARGS = ["--form", "I-765", "--office", "LIN", "--year", "21"]


def _run(capsys, *args: str) -> tuple[int, list[str]]:
    exit_code = main(["--data-root", str(data_fixture_root()), *args])
    return exit_code, capsys.readouterr().out.strip().splitlines()


def test_cli_series_prints_backfilled_rows(capsys) -> None:
    """Series should print one line per receipt day after the poll day."""
    exit_code, lines = _run(capsys, "series", *_SCOPE_ARGS)

    assert exit_code == 0
    assert lines[0] == "poll_day\t100\t1970-04-11"
    assert lines[1] == "5\tLIN210055XXXX\t10\tCase Was Approved=2; Case Was Received=8"
    assert lines[2] == "6\tLIN210065XXXX\t0\t-"
    assert len(lines) == 5


def test_cli_series_window(capsys) -> None:
    """Start and end should slice the printed rows."""
    _, lines = _run(capsys, "series", *_SCOPE_ARGS, "--start", "2", "--end", "3")

    assert [line.split("\t")[0] for line in lines[1:]] == ["7"]


def test_cli_summary_prints_shares(capsys) -> None:
    """Summary should print ranked totals and a grand total."""
    exit_code, lines = _run(capsys, "summary", *_SCOPE_ARGS)

    assert exit_code == 0
    assert lines[1:] == [
        "Case Was Approved\t8\t50.00%",
        "Case Was Received\t8\t50.00%",
        "total\t16",
    ]


def test_cli_summary_for_empty_scope(capsys) -> None:
    """An empty scope should print a zero total without failing."""
    exit_code, lines = _run(capsys, "summary", "--form", "I-485", "--office", "LIN")

    assert exit_code == 0
    assert lines == ["poll_day\t-\tno data for this form and office", "total\t0"]


def test_cli_delta_prints_previous_day(capsys) -> None:
    """Delta should compare each status with the previous poll day."""
    _, lines = _run(capsys, "delta", *_SCOPE_ARGS)

    assert "5\tCase Was Received\t8 of 10 (80.00%)\tprevious 4 of 5 (80.00%)" in lines
    assert "7\tCase Was Approved\t6 of 6 (100.00%)\tprevious 0 of 0 (—)" in lines


def test_cli_transitions_prints_ranked_pairs(capsys) -> None:
    """Transitions should print ranked pairs for the latest poll day."""
    exit_code, lines = _run(capsys, "transitions", *_SCOPE_ARGS)

    assert exit_code == 0
    assert lines[1:] == [
        "Case Was Received\t=>\tCase Was Approved\t5",
        "Case Was Received\t=>\tRequest for Additional Evidence Was Sent\t4",
        "total\t9",
    ]


def test_cli_transitions_all_days(capsys) -> None:
    """All-days flag should flatten every poll day."""
    _, lines = _run(capsys, "transitions", *_SCOPE_ARGS, "--all-days")

    assert lines[-1] == "total\t10"


def test_cli_catalog_lists_selector_values(capsys) -> None:
    """Catalog should list forms, offices, statuses, and poll days."""
    _, lines = _run(capsys, "catalog", *_SCOPE_ARGS)

    assert lines[0] == "forms\tI-131 I-765"
    assert lines[1] == "offices\tLIN SRC"
    assert lines[3] == "poll_days\t99(4/10) 100(4/11)"


def test_cli_reports_missing_dataset(tmp_path, capsys) -> None:
    """Missing dataset files should print an error and exit non-zero."""
    exit_code = main(["--data-root", str(tmp_path), "summary", *_SCOPE_ARGS])
    error_output = capsys.readouterr().err

    assert exit_code == 1
    assert "error=Failed to read snapshot dataset" in error_output


def test_cli_accepts_prefixed_key_order(capsys) -> None:
    """Key order should accept the data_ prefixed mode name."""
    exit_code, lines = _run(
        capsys, "series", *_SCOPE_ARGS, "--key-order", "data_center_year_code_day_serial"
    )

    assert exit_code == 0
    assert lines[1] == "12\tLIN219012XXXX\t2\tCase Was Received=2"


def test_cli_reports_unknown_key_order(capsys) -> None:
    """Unknown key orders should print an error and exit non-zero."""
    exit_code = main(
        ["--data-root", str(data_fixture_root()), "series", "--key-order", "sideways"]
    )

    assert exit_code == 1
    assert "error=Unsupported key order 'sideways'" in capsys.readouterr().err
