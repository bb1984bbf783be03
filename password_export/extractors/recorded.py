from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

import yaml

from password_export.extractors.base import FieldUnavailable, OpenFailure, SourceProtocolError


@dataclass(frozen=True)
class RecordedRow:
    urls: tuple[str, ...] = ()
    username: Optional[str] = None
    password: Optional[str] = None
    open_failures: int = 0


@dataclass(frozen=True)
class RecordedDetail:
    row_index: int
    serial: int


@dataclass
class RecordedSource:
    """
    A password table replayed from a recording.

    Row count samples are returned in order, the last one repeating once the
    recording runs out. Each row may reject a number of open requests before
    opening. If quit_at_row is set, the source stops running as soon as that
    row's detail view is requested.

    Detail views must be opened and closed strictly in turn; anything else
    raises SourceProtocolError.
    """
    rows: list[RecordedRow]
    row_counts: list[int] = field(default_factory=list)
    quit_at_row: Optional[int] = None
    calls: list[tuple] = field(default_factory=list, init=False)
    _running: bool = field(default=True, init=False)
    _open_detail: Optional[RecordedDetail] = field(default=None, init=False)
    _open_attempts: dict[int, int] = field(default_factory=dict, init=False)
    _samples_taken: int = field(default=0, init=False)
    _serial: int = field(default=0, init=False)

    @classmethod
    def from_yaml(cls, fixture_path: str | Path) -> 'RecordedSource':
        """
        Load a recording from a YAML file.

        Expected layout:
            row_counts: [0, 2, 2]
            quit_at_row: null
            rows:
              - urls: [https://example.com/login, https://example.com]
                username: alice
                password: secret
                open_failures: 1

        Raises:
            FileNotFoundError: If the file doesn't exist.
            ValueError: If the file is empty or malformed.
        """
        fixture_path = Path(fixture_path)
        if not fixture_path.exists():
            raise FileNotFoundError(f"Recording not found: {fixture_path}")

        with open(fixture_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Recording at {fixture_path} is empty or not a mapping")

        rows = [_parse_row(i, raw) for i, raw in enumerate(data.get('rows') or [], start=1)]
        row_counts = [int(c) for c in data.get('row_counts') or []]
        quit_at_row = data.get('quit_at_row')

        return cls(
            rows=rows,
            row_counts=row_counts,
            quit_at_row=int(quit_at_row) if quit_at_row is not None else None,
        )

    def row_count(self) -> int:
        self.calls.append(('row_count',))
        if not self.row_counts:
            return len(self.rows)

        index = min(self._samples_taken, len(self.row_counts) - 1)
        self._samples_taken += 1
        return self.row_counts[index]

    def select_row(self, index: int) -> None:
        self.calls.append(('select_row', index))
        if self._open_detail is not None:
            raise SourceProtocolError(
                f"Cannot select row {index} while the detail view of row {self._open_detail.row_index} is open"
            )

    def open_detail(self, index: int) -> RecordedDetail:
        self.calls.append(('open_detail', index))
        if self._open_detail is not None:
            raise SourceProtocolError(
                f"Cannot open row {index}: the detail view of row {self._open_detail.row_index} is still open"
            )

        if self.quit_at_row is not None and index == self.quit_at_row:
            self._running = False
        if not self._running:
            raise OpenFailure("source is not running")

        if not 1 <= index <= len(self.rows):
            raise OpenFailure(f"row {index} does not exist")

        attempts = self._open_attempts.get(index, 0) + 1
        self._open_attempts[index] = attempts
        if attempts <= self.rows[index - 1].open_failures:
            raise OpenFailure(f"row {index} rejected open request {attempts}")

        self._serial += 1
        self._open_detail = RecordedDetail(index, self._serial)
        return self._open_detail

    def read_detail_urls(self, handle: RecordedDetail) -> Sequence[str]:
        return self._row_for(handle).urls

    def read_username(self, handle: RecordedDetail) -> str:
        username = self._row_for(handle).username
        if username is None:
            raise FieldUnavailable("username")
        return username

    def read_password(self, handle: RecordedDetail) -> str:
        password = self._row_for(handle).password
        if password is None:
            raise FieldUnavailable("password")
        return password

    def close_detail(self, handle: RecordedDetail) -> None:
        self.calls.append(('close_detail', handle.row_index))
        if handle != self._open_detail:
            raise SourceProtocolError(f"Detail view of row {handle.row_index} is not the one currently open")
        self._open_detail = None

    def is_source_running(self) -> bool:
        return self._running

    @property
    def detail_open(self) -> bool:
        return self._open_detail is not None

    def _row_for(self, handle: RecordedDetail) -> RecordedRow:
        if handle != self._open_detail:
            raise SourceProtocolError(f"Detail view of row {handle.row_index} is not open")
        return self.rows[handle.row_index - 1]


def get_source(fixture_path: str | Path) -> RecordedSource:
    """Build the source to extract from. Only recorded tables are supported."""
    print(f"Using recorded password table at {fixture_path}")
    return RecordedSource.from_yaml(fixture_path)


def _parse_row(index: int, raw: dict) -> RecordedRow:
    if not isinstance(raw, dict):
        raise ValueError(f"Row {index} of the recording is not a mapping")

    urls = raw.get('urls') or []
    if isinstance(urls, str):
        urls = [urls]

    return RecordedRow(
        urls=tuple('' if url is None else str(url) for url in urls),
        username=_optional_str(raw.get('username')),
        password=_optional_str(raw.get('password')),
        open_failures=int(raw.get('open_failures', 0)),
    )


def _optional_str(value) -> Optional[str]:
    return None if value is None else str(value)
