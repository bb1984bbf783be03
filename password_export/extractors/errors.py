from enum import Enum

from password_export.domain import RowSample


class AbortReason(Enum):
    """Why an extraction run stopped without producing a result."""
    EMPTY_SOURCE = "empty_source"
    UNSTABLE_SOURCE = "unstable_source"
    GLOBAL_TIMEOUT = "global_timeout"
    EXTERNAL_ABORT = "external_abort"


class ExportError(Exception):
    """Base class for all errors raised while exporting passwords."""


class ExtractionAborted(ExportError):
    """A fatal error that stops the whole extraction. No partial result is kept."""
    reason: AbortReason


class EmptySourceError(ExtractionAborted):
    reason = AbortReason.EMPTY_SOURCE

    def __init__(self, samples: list[RowSample]):
        self.samples = tuple(samples)
        super().__init__(
            f"No passwords found: the password table stayed empty for {len(self.samples)} sample(s)"
        )


class UnstableSourceError(ExtractionAborted):
    reason = AbortReason.UNSTABLE_SOURCE

    def __init__(self, samples: list[RowSample]):
        self.samples = tuple(samples)
        observed = ', '.join(str(s) for s in self.samples)
        super().__init__(
            f"Row count did not settle after {len(self.samples)} sample(s) (observed: {observed})"
        )


class GlobalTimeoutError(ExtractionAborted):
    reason = AbortReason.GLOBAL_TIMEOUT

    def __init__(self, timeout_seconds: float, stage: str):
        self.timeout_seconds = timeout_seconds
        self.stage = stage
        super().__init__(f"Extraction timed out after {timeout_seconds:g}s while {stage}")


class ExternalAbortError(ExtractionAborted):
    reason = AbortReason.EXTERNAL_ABORT

    def __init__(self, row_index: int | None = None):
        self.row_index = row_index
        where = f" at row {row_index}" if row_index is not None else ""
        super().__init__(f"The password source quit during extraction{where}")


class RowOpenFailure(ExportError):
    """The detail view of a row could not be opened after all attempts."""

    def __init__(self, row_index: int, attempts: int, cause: Exception | None = None):
        self.row_index = row_index
        self.attempts = attempts
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"Could not open details for row {row_index} after {attempts} attempt(s){detail}")


class WriteFailure(ExportError):
    def __init__(self, path: str, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to write {path}: {cause}")
