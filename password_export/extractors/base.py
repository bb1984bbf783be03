from typing import Any, Protocol, Sequence


DetailHandle = Any


class OpenFailure(Exception):
    """Raised by a source when a detail view refuses to open."""


class FieldUnavailable(Exception):
    """Raised by a source when a detail view has no such field."""


class SourceProtocolError(RuntimeError):
    """Raised when detail views are opened and closed out of order."""


class Source(Protocol):
    """
    The capability surface the extractor needs from a password table.

    The table's focus/selection is a single shared resource: only one row or
    detail view can be active at a time. `open_detail` and `close_detail` are
    not reentrant and must strictly alternate.
    """

    def row_count(self) -> int:
        ...

    def select_row(self, index: int) -> None:
        ...

    def open_detail(self, index: int) -> DetailHandle:
        """Open the detail view for a 1-based row index. Raises OpenFailure."""
        ...

    def read_detail_urls(self, handle: DetailHandle) -> Sequence[str]:
        """Return the view's URLs in display order; '' marks a missing URL."""
        ...

    def read_username(self, handle: DetailHandle) -> str | None:
        ...

    def read_password(self, handle: DetailHandle) -> str | None:
        ...

    def close_detail(self, handle: DetailHandle) -> None:
        ...

    def is_source_running(self) -> bool:
        ...
