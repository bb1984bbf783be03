"""Module-style tests for processing.extraction_stats."""

from password_export.extractors.errors import RowOpenFailure
from password_export.processing import ExtractionStats


def test_records_successes_and_failures_in_visit_order():
    stats = ExtractionStats()

    stats.record_success(1)
    stats.record_failure(2, RowOpenFailure(2, 2))
    stats.record_success(3)

    assert stats.collected == 2
    assert stats.failed == 1
    assert stats.total() == 3
    assert stats.visited_rows == [1, 2, 3]
    assert stats.failures[0][0] == 2


def test_print_summary_lists_failed_rows(capsys):
    stats = ExtractionStats()
    stats.record_success(1)
    stats.record_failure(2, RowOpenFailure(2, 2))

    stats.print_summary('/tmp/passwords.csv')

    out = capsys.readouterr().out
    assert "Entries collected: 1" in out
    assert "Rows that could not be opened: 1" in out
    assert "row 2: Could not open details for row 2 after 2 attempt(s)" in out
    assert "/tmp/passwords.csv" in out
