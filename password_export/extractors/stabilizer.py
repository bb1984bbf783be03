import time

from password_export.domain import RowSample
from password_export.extractors.base import Source
from password_export.extractors.deadline import Deadline
from password_export.extractors.errors import EmptySourceError, UnstableSourceError
from password_export.util import TimestampedLogger

DEFAULT_POLL_INTERVAL_SECONDS = 1.0


class RowCountStabilizer:
    """
    Waits for the password table's row count to stop changing.

    The table is populated asynchronously by the source application and may
    under-report while it is loading, so the count is only trusted once two
    consecutive non-zero samples agree.
    """

    def __init__(self, logger: TimestampedLogger, poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS) -> None:
        self.logger = logger
        self.poll_interval_seconds = poll_interval_seconds

    def stabilize(self, source: Source, max_attempts: int, deadline: Deadline | None = None) -> int:
        """
        Sample the source's row count until it settles.

        Args:
            source: The password table to sample.
            max_attempts: Maximum number of samples to take.
            deadline: Optional global deadline, checked before every sample.

        Returns:
            int: The stable, non-zero row count.

        Raises:
            EmptySourceError: If every sample was zero.
            UnstableSourceError: If no two consecutive non-zero samples agreed.
            GlobalTimeoutError: If the deadline expired while sampling.
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

        samples: list[RowSample] = []
        previous_count: int | None = None

        for attempt in range(1, max_attempts + 1):
            if deadline is not None:
                deadline.check("waiting for the row count to settle")

            sample = RowSample(attempt, source.row_count())
            samples.append(sample)

            if sample.observed_count <= 0:
                # Zero samples are never compared against
                self.logger.log(f"Row count sample {attempt}/{max_attempts}: table is empty, waiting")
            elif sample.observed_count == previous_count:
                self.logger.log(f"Row count sample {attempt}/{max_attempts}: stable at {sample.observed_count}")
                return sample.observed_count
            else:
                self.logger.log(f"Row count sample {attempt}/{max_attempts}: {sample.observed_count}")
                previous_count = sample.observed_count

            if attempt < max_attempts:
                time.sleep(self.poll_interval_seconds)

        if previous_count is None:
            raise EmptySourceError(samples)
        raise UnstableSourceError(samples)
