from typing import Callable

from password_export.domain import Entry
from password_export.extractors.base import DetailHandle, FieldUnavailable, OpenFailure, Source
from password_export.extractors.deadline import Deadline
from password_export.extractors.errors import RowOpenFailure
from password_export.util import TimestampedLogger, retry_on

# Some malformed rows reject the first open request
OPEN_ATTEMPTS = 2


class DetailCollector:
    """Opens one row's detail view, reads it into an Entry and closes it again."""

    def __init__(self, logger: TimestampedLogger) -> None:
        self.logger = logger

    def collect(self, source: Source, row_index: int, deadline: Deadline | None = None) -> Entry:
        """
        Build an Entry from the detail view of a single row.

        The detail view is always closed before returning, whether reading
        succeeded or not, so the source is never left in detail mode.

        Args:
            source: The password table.
            row_index: 1-based index of the row to open.
            deadline: Optional global deadline, checked before every open attempt.

        Returns:
            Entry: The login shown in the detail view.

        Raises:
            RowOpenFailure: If the detail view could not be opened in OPEN_ATTEMPTS attempts.
        """
        try:
            handle = self._open_detail(source, row_index, deadline)
        except OpenFailure as e:
            raise RowOpenFailure(row_index, OPEN_ATTEMPTS, e) from e

        try:
            return self._read_entry(source, handle)
        finally:
            source.close_detail(handle)

    @retry_on(OpenFailure, attempts=OPEN_ATTEMPTS)
    def _open_detail(self, source: Source, row_index: int, deadline: Deadline | None) -> DetailHandle:
        if deadline is not None:
            deadline.check(f"opening row {row_index}")

        source.select_row(row_index)
        try:
            return source.open_detail(row_index)
        except OpenFailure as e:
            self.logger.log(f"Row {row_index}: detail view did not open ({e})")
            raise

    def _read_entry(self, source: Source, handle: DetailHandle) -> Entry:
        urls = [url for url in source.read_detail_urls(handle) if url]
        primary_url = urls[0] if urls else ''

        return Entry(
            title=primary_url,
            site_url=primary_url,
            username=_read_optional(source.read_username, handle),
            password=_read_optional(source.read_password, handle),
            additional_urls=tuple(urls[1:]),
        )


def _read_optional(reader: Callable[[DetailHandle], str | None], handle: DetailHandle) -> str:
    try:
        value = reader(handle)
    except FieldUnavailable:
        return ''
    return value if value is not None else ''
