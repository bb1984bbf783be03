"""Tests for extractors.recorded.RecordedSource."""

from pathlib import Path

import pytest

from password_export.extractors.base import FieldUnavailable, OpenFailure, SourceProtocolError
from password_export.extractors.recorded import RecordedRow, RecordedSource

FIXTURE = Path(__file__).parent.parent.parent / 'fixtures' / 'recorded_table.yaml'


class TestFromYaml:
    """Tests for loading recordings"""

    def test_loads_rows_and_samples(self):
        source = RecordedSource.from_yaml(FIXTURE)

        assert source.row_counts == [0, 2, 3, 3]
        assert len(source.rows) == 3
        assert source.rows[0].password == 'correct horse, battery "staple"'
        assert source.rows[1].urls == ('', 'https://bank.example.com')
        assert source.rows[1].password is None
        assert source.rows[2].open_failures == 2

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RecordedSource.from_yaml(tmp_path / 'absent.yaml')

    def test_non_mapping_raises(self, tmp_path):
        path = tmp_path / 'bad.yaml'
        path.write_text("- just\n- a list\n")

        with pytest.raises(ValueError):
            RecordedSource.from_yaml(path)


class TestRowCount:
    """Tests for the row count samples"""

    def test_samples_are_replayed_and_last_repeats(self):
        source = RecordedSource(rows=[], row_counts=[0, 4])

        assert [source.row_count() for _ in range(4)] == [0, 4, 4, 4]

    def test_defaults_to_number_of_rows(self):
        source = RecordedSource(rows=[RecordedRow(), RecordedRow()])

        assert source.row_count() == 2


class TestDetailDiscipline:
    """Tests for the open/close protocol"""

    def test_second_open_before_close_is_rejected(self):
        source = RecordedSource(rows=[RecordedRow(), RecordedRow()])
        source.open_detail(1)

        with pytest.raises(SourceProtocolError):
            source.open_detail(2)

    def test_select_while_open_is_rejected(self):
        source = RecordedSource(rows=[RecordedRow()])
        source.open_detail(1)

        with pytest.raises(SourceProtocolError):
            source.select_row(1)

    def test_closing_a_stale_handle_is_rejected(self):
        source = RecordedSource(rows=[RecordedRow()])
        handle = source.open_detail(1)
        source.close_detail(handle)

        with pytest.raises(SourceProtocolError):
            source.close_detail(handle)

    def test_rejected_opens_are_consumed_per_row(self):
        source = RecordedSource(rows=[RecordedRow(open_failures=1)])

        with pytest.raises(OpenFailure):
            source.open_detail(1)
        handle = source.open_detail(1)

        assert handle.row_index == 1

    def test_out_of_range_row_fails_to_open(self):
        source = RecordedSource(rows=[RecordedRow()])

        with pytest.raises(OpenFailure):
            source.open_detail(2)

    def test_missing_fields_raise_field_unavailable(self):
        source = RecordedSource(rows=[RecordedRow(urls=('https://a.example',))])
        handle = source.open_detail(1)

        with pytest.raises(FieldUnavailable):
            source.read_username(handle)
        with pytest.raises(FieldUnavailable):
            source.read_password(handle)

    def test_quit_at_row_stops_the_source(self):
        source = RecordedSource(rows=[RecordedRow(), RecordedRow()], quit_at_row=2)
        source.close_detail(source.open_detail(1))

        with pytest.raises(OpenFailure):
            source.open_detail(2)

        assert source.is_source_running() is False
