"""Tests for config.ExportConfig."""

import pytest

from password_export.config import ExportConfig


def _write(tmp_path, text):
    path = tmp_path / 'config.yaml'
    path.write_text(text)
    return path


class TestFromYaml:
    """Tests for loading configuration files"""

    def test_packaged_default_config_loads(self, monkeypatch):
        for key in ('EXPORT_MAX_ATTEMPTS', 'EXPORT_TIMEOUT_SECONDS', 'EXPORT_FORCED_ROW_COUNT',
                    'EXPORT_LOGGING_ENABLED', 'EXPORT_LOG_FILE', 'EXPORT_POLL_INTERVAL', 'EXPORT_ENCODING'):
            monkeypatch.delenv(key, raising=False)

        config = ExportConfig.from_yaml()

        assert config.max_attempts == 10
        assert config.forced_row_count == 0
        assert config.logging_enabled is False
        assert config.encoding == 'utf-8'

    def test_reads_all_values(self, tmp_path):
        path = _write(tmp_path, (
            "max_attempts: 5\n"
            "extraction_timeout_seconds: 120\n"
            "forced_row_count: 7\n"
            "logging_enabled: true\n"
            "log_file: run.log\n"
            "poll_interval_seconds: 0.5\n"
            "encoding: utf-16\n"
        ))

        config = ExportConfig.from_yaml(path)

        assert config == ExportConfig(
            max_attempts=5,
            extraction_timeout_seconds=120,
            forced_row_count=7,
            logging_enabled=True,
            log_file='run.log',
            poll_interval_seconds=0.5,
            encoding='utf-16',
        )

    def test_environment_overrides_yaml(self, tmp_path, monkeypatch):
        path = _write(tmp_path, (
            "max_attempts: 5\n"
            "extraction_timeout_seconds: 120\n"
            "forced_row_count: 0\n"
            "logging_enabled: false\n"
        ))
        monkeypatch.setenv('EXPORT_MAX_ATTEMPTS', '3')
        monkeypatch.setenv('EXPORT_LOGGING_ENABLED', 'yes')

        config = ExportConfig.from_yaml(path)

        assert config.max_attempts == 3
        assert config.logging_enabled is True

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ExportConfig.from_yaml(tmp_path / 'absent.yaml')

    def test_empty_file_raises(self, tmp_path):
        with pytest.raises(ValueError, match="empty"):
            ExportConfig.from_yaml(_write(tmp_path, ""))

    def test_missing_required_values_are_listed(self, tmp_path, monkeypatch):
        monkeypatch.delenv('EXPORT_TIMEOUT_SECONDS', raising=False)
        monkeypatch.delenv('EXPORT_FORCED_ROW_COUNT', raising=False)
        path = _write(tmp_path, "max_attempts: 5\nlogging_enabled: false\n")

        with pytest.raises(ValueError, match="extraction_timeout_seconds, forced_row_count"):
            ExportConfig.from_yaml(path)


class TestValidation:
    """Tests for value validation"""

    def test_rejects_zero_attempts(self):
        with pytest.raises(ValueError):
            ExportConfig(max_attempts=0, extraction_timeout_seconds=10)

    def test_rejects_negative_forced_row_count(self):
        with pytest.raises(ValueError):
            ExportConfig(max_attempts=1, extraction_timeout_seconds=10, forced_row_count=-1)

    def test_rejects_unknown_encoding(self):
        with pytest.raises(ValueError, match="Unsupported encoding"):
            ExportConfig(max_attempts=1, extraction_timeout_seconds=10, encoding='latin-1')

    def test_with_overrides_ignores_none(self):
        config = ExportConfig(max_attempts=1, extraction_timeout_seconds=10)

        updated = config.with_overrides(forced_row_count=4, encoding=None)

        assert updated.forced_row_count == 4
        assert updated.encoding == 'utf-8'
