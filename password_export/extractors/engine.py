import time
from enum import Enum
from typing import Callable

from password_export.config import ExportConfig
from password_export.domain import Entry, ExtractionResult
from password_export.extractors.base import Source, SourceProtocolError
from password_export.extractors.deadline import Deadline
from password_export.extractors.detail_collector import DetailCollector
from password_export.extractors.errors import AbortReason, ExtractionAborted, ExternalAbortError, RowOpenFailure
from password_export.extractors.stabilizer import RowCountStabilizer
from password_export.processing import ExtractionStats
from password_export.util import TimestampedLogger


class EngineState(Enum):
    IDLE = "idle"
    STABILIZING = "stabilizing"
    EXTRACTING = "extracting"
    DONE = "done"
    ABORTED = "aborted"


_ALLOWED_TRANSITIONS = {
    EngineState.IDLE: {EngineState.STABILIZING, EngineState.ABORTED},
    EngineState.STABILIZING: {EngineState.EXTRACTING, EngineState.ABORTED},
    EngineState.EXTRACTING: {EngineState.DONE, EngineState.ABORTED},
    EngineState.DONE: set(),
    EngineState.ABORTED: set(),
}


class ExtractionEngine:
    """
    Extracts every login from a password table.

    A run waits for the table's row count to settle, then opens each row's
    detail view in turn. Rows whose detail view will not open are counted and
    skipped. Everything else (an empty or unsettled table, the global timeout,
    or the source quitting) aborts the run without a result.

    All source calls are strictly sequential; an engine performs one run only.
    """

    def __init__(
            self,
            config: ExportConfig,
            logger: TimestampedLogger,
            stabilizer: RowCountStabilizer | None = None,
            collector: DetailCollector | None = None,
            clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config
        self.logger = logger
        self.stabilizer = stabilizer or RowCountStabilizer(logger, config.poll_interval_seconds)
        self.collector = collector or DetailCollector(logger)
        self.stats = ExtractionStats()
        self.state = EngineState.IDLE
        self.abort_reason: AbortReason | None = None
        self._clock = clock

    def extract(self, source: Source) -> ExtractionResult:
        """
        Run a full extraction against the source.

        Returns:
            ExtractionResult: Entries in processing order and the number of rows that failed to open.

        Raises:
            EmptySourceError: If the table never showed any rows.
            UnstableSourceError: If the row count never settled.
            GlobalTimeoutError: If the run exceeded extraction_timeout_seconds.
            ExternalAbortError: If the source stopped running.
        """
        if self.state is not EngineState.IDLE:
            raise RuntimeError(f"This engine has already run (state: {self.state.value})")

        deadline = Deadline(self.config.extraction_timeout_seconds, self._clock)
        self.logger.log("Extraction started")

        try:
            self._ensure_running(source)

            self._transition(EngineState.STABILIZING)
            stable_count = self.stabilizer.stabilize(source, self.config.max_attempts, deadline)

            self._transition(EngineState.EXTRACTING)
            result = self._extract_rows(source, stable_count, deadline)
        except ExtractionAborted as e:
            self.abort_reason = e.reason
            self._transition(EngineState.ABORTED)
            self.logger.log(f"Extraction aborted ({e.reason.value}): {e}")
            raise
        except Exception as e:
            # Not a recognised abort: stop the run without an abort reason
            self._transition(EngineState.ABORTED)
            self.logger.log(f"Extraction failed: {e!r}")
            raise

        self._transition(EngineState.DONE)
        self.logger.log(
            f"Extraction finished: {len(result.entries)} entries, {result.failed_row_count} failed row(s)"
        )
        return result

    def _extract_rows(self, source: Source, stable_count: int, deadline: Deadline) -> ExtractionResult:
        indices = row_indices(stable_count, self.config.forced_row_count)
        self.logger.log(f"Visiting {len(indices)} row(s) of {stable_count}")

        entries: list[Entry] = []
        failed_row_count = 0

        for row_index in indices:
            deadline.check(f"extracting row {row_index}")
            self._ensure_running(source, row_index)

            try:
                entry = self.collector.collect(source, row_index, deadline)
            except RowOpenFailure as e:
                # A row that fails because the source went away is an abort, not a skip
                self._ensure_running(source, row_index)
                failed_row_count += 1
                self.stats.record_failure(row_index, e)
                self.logger.log(str(e))
                print(f"    Row {row_index}: ERROR: {e}")
                continue
            except (ExtractionAborted, SourceProtocolError):
                raise
            except Exception as e:
                # The source may have quit while the detail view was being read
                if not source.is_source_running():
                    raise ExternalAbortError(row_index) from e
                raise

            entries.append(entry)
            self.stats.record_success(row_index)
            self.logger.log(f"Row {row_index}: collected {entry.title or '<no url>'}")
            print(f"    Row {row_index}: Success")

        return ExtractionResult(entries=tuple(entries), failed_row_count=failed_row_count)

    def _ensure_running(self, source: Source, row_index: int | None = None) -> None:
        if not source.is_source_running():
            raise ExternalAbortError(row_index)

    def _transition(self, new_state: EngineState) -> None:
        if new_state not in _ALLOWED_TRANSITIONS[self.state]:
            raise RuntimeError(f"Invalid engine transition: {self.state.value} -> {new_state.value}")
        self.logger.log(f"State: {self.state.value} -> {new_state.value}")
        self.state = new_state


def row_indices(stable_count: int, forced_row_count: int = 0) -> list[int]:
    """
    Return the 1-based row indices to visit, in order.

    When forced_row_count exceeds the stable count the rows are revisited
    cyclically: with 3 rows and forced_row_count=7 the order is 1,2,3,1,2,3,1.
    """
    if forced_row_count > stable_count:
        return [((n - 1) % stable_count) + 1 for n in range(1, forced_row_count + 1)]
    return list(range(1, stable_count + 1))
