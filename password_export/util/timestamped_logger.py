from datetime import datetime
from pathlib import Path
from typing import Callable

SECONDS_PER_DAY = 24 * 60 * 60
ELAPSED_FIELD_MODULUS = 10_000


class TimestampedLogger:
    """
    Append-only diagnostic log. Each line is prefixed with the seconds elapsed
    since the logger was created, zero-padded to four digits.

    The file is opened, written and closed on every call so that a crash loses
    at most the line being written. The log is never rotated or truncated.

    The elapsed field is computed from seconds-of-day, so it wraps at midnight,
    and it only has four digits, so it wraps again after 9999 seconds.
    """

    def __init__(
            self,
            log_path: str | Path | None,
            enabled: bool = True,
            clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.log_path = Path(log_path) if log_path else None
        self.enabled = enabled and self.log_path is not None
        self._clock = clock
        self._start_seconds = _seconds_of_day(clock())

    @classmethod
    def disabled(cls) -> 'TimestampedLogger':
        return cls(None, enabled=False)

    def log(self, message: str) -> None:
        if not self.enabled:
            return

        with open(self.log_path, 'a', encoding='utf-8') as f:
            f.write(f"{self.elapsed_field()}: {message}\n")

    def elapsed_field(self) -> str:
        elapsed = (_seconds_of_day(self._clock()) - self._start_seconds) % SECONDS_PER_DAY
        return "%04d" % (elapsed % ELAPSED_FIELD_MODULUS)


def _seconds_of_day(moment: datetime) -> int:
    return moment.hour * 3600 + moment.minute * 60 + moment.second
