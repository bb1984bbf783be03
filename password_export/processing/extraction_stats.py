from dataclasses import dataclass, field
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from password_export.extractors.errors import RowOpenFailure


@dataclass
class ExtractionStats:
    """Track per-row outcomes of an extraction run."""
    collected: int = 0
    failed: int = 0
    failures: List[tuple[int, 'RowOpenFailure']] = field(default_factory=list)
    visited_rows: List[int] = field(default_factory=list)

    def record_success(self, row_index: int):
        """Record a row whose detail view was read into an Entry."""
        self.visited_rows.append(row_index)
        self.collected += 1

    def record_failure(self, row_index: int, error: 'RowOpenFailure'):
        """Record a row whose detail view could not be opened."""
        self.visited_rows.append(row_index)
        self.failed += 1
        self.failures.append((row_index, error))

    def total(self) -> int:
        return self.collected + self.failed

    def print_summary(self, output_path: str | None = None):
        """Print a summary of the extraction to the console."""
        print("\n" + "=" * 80)
        print("EXTRACTION SUMMARY")
        print("=" * 80)

        print(f"Total rows visited: {self.total()}")
        print(f"  ✓ Entries collected: {self.collected}")
        print(f"  ✗ Rows that could not be opened: {self.failed}")

        for row_index, error in self.failures:
            print(f"      row {row_index}: {error}")

        if output_path:
            print(f"\nPasswords written to: {output_path}")

        print("=" * 80)
