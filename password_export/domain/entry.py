from dataclasses import dataclass, field


@dataclass(frozen=True)
class Entry:
    """One login reconstructed from a row's detail view."""
    title: str
    site_url: str
    username: str = ''
    password: str = ''
    additional_urls: tuple[str, ...] = field(default_factory=tuple)

    def __str__(self) -> str:
        return f"{self.title or '<untitled>'} (user={self.username or '<none>'})"


@dataclass(frozen=True)
class RowSample:
    attempt_number: int
    observed_count: int

    def __str__(self) -> str:
        return f"#{self.attempt_number}={self.observed_count}"


@dataclass(frozen=True)
class ExtractionResult:
    """Entries in processing order, plus the number of rows that could not be opened."""
    entries: tuple[Entry, ...]
    failed_row_count: int = 0
