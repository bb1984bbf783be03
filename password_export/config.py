"""Configuration management for the password export."""
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

import yaml

SUPPORTED_ENCODINGS = ('utf-8', 'utf-16')

REQUIRED_KEYS = (
    'max_attempts',
    'extraction_timeout_seconds',
    'forced_row_count',
    'logging_enabled',
)


@dataclass(frozen=True)
class ExportConfig:
    """Configuration for a single export run. Built once and passed to every component."""

    max_attempts: int
    extraction_timeout_seconds: int
    forced_row_count: int = 0
    logging_enabled: bool = False
    log_file: Optional[str] = None
    poll_interval_seconds: float = 1.0
    encoding: str = 'utf-8'

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if self.extraction_timeout_seconds <= 0:
            raise ValueError(
                f"extraction_timeout_seconds must be positive, got {self.extraction_timeout_seconds}"
            )
        if self.forced_row_count < 0:
            raise ValueError(f"forced_row_count must not be negative, got {self.forced_row_count}")
        if self.poll_interval_seconds < 0:
            raise ValueError(f"poll_interval_seconds must not be negative, got {self.poll_interval_seconds}")
        if self.encoding.lower() not in SUPPORTED_ENCODINGS:
            raise ValueError(
                f"Unsupported encoding '{self.encoding}'. Valid options: {', '.join(SUPPORTED_ENCODINGS)}"
            )

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> 'ExportConfig':
        """
        Load configuration from a YAML file.

        Args:
            config_path: Path to the YAML config file. If None, uses default location.

        Returns:
            ExportConfig instance with values from the YAML file.

        Raises:
            FileNotFoundError: If the config file doesn't exist.
            ValueError: If required configuration values are missing or invalid.
        """
        if config_path is None:
            # Default to resources/export_config.yaml
            config_path = Path(__file__).parent / 'resources' / 'export_config.yaml'
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(
                f"Export configuration file not found at {config_path}. "
                f"Please create the file with required settings: {', '.join(REQUIRED_KEYS)}"
            )

        with open(config_path, 'r') as f:
            data = yaml.safe_load(f)

        if not data:
            raise ValueError(f"Export configuration file at {config_path} is empty")

        # Environment variables override YAML values
        values = {
            'max_attempts': cls._get_int_env('EXPORT_MAX_ATTEMPTS', data.get('max_attempts')),
            'extraction_timeout_seconds': cls._get_int_env(
                'EXPORT_TIMEOUT_SECONDS', data.get('extraction_timeout_seconds')
            ),
            'forced_row_count': cls._get_int_env('EXPORT_FORCED_ROW_COUNT', data.get('forced_row_count')),
            'logging_enabled': cls._get_bool_env('EXPORT_LOGGING_ENABLED', data.get('logging_enabled')),
        }

        missing = [key for key in REQUIRED_KEYS if values[key] is None]
        if missing:
            raise ValueError(
                f"Missing required configuration values in {config_path}: {', '.join(missing)}"
            )

        log_file = os.getenv('EXPORT_LOG_FILE', data.get('log_file'))
        poll_interval_seconds = cls._get_float_env('EXPORT_POLL_INTERVAL', data.get('poll_interval_seconds'))
        encoding = os.getenv('EXPORT_ENCODING', data.get('encoding'))

        return cls(
            **values,
            log_file=log_file,
            poll_interval_seconds=poll_interval_seconds if poll_interval_seconds is not None else 1.0,
            encoding=encoding or 'utf-8',
        )

    def with_overrides(self, **overrides) -> 'ExportConfig':
        """Return a copy with the given non-None values replaced (used for command-line options)."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)

    @staticmethod
    def _get_bool_env(key: str, default: Optional[bool]) -> Optional[bool]:
        """Get boolean from environment variable, falling back to default."""
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ('true', '1', 'yes', 'on')

    @staticmethod
    def _get_float_env(key: str, default: Optional[float]) -> Optional[float]:
        """Get float from environment variable, falling back to default."""
        value = os.getenv(key)
        if value is None:
            return default
        try:
            return float(value)
        except ValueError:
            return default

    @staticmethod
    def _get_int_env(key: str, default: Optional[int]) -> Optional[int]:
        """Get int from environment variable, falling back to default."""
        value = os.getenv(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            return default
