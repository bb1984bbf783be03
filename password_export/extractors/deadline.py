import time
from typing import Callable

from password_export.extractors.errors import GlobalTimeoutError


class Deadline:
    """A cooperative timeout, checked between blocking source calls."""

    def __init__(self, timeout_seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.timeout_seconds = timeout_seconds
        self._clock = clock
        self._expires_at = clock() + timeout_seconds

    def expired(self) -> bool:
        return self._clock() >= self._expires_at

    def check(self, stage: str) -> None:
        """Raise GlobalTimeoutError if the deadline has passed."""
        if self.expired():
            raise GlobalTimeoutError(self.timeout_seconds, stage)
