"""Session deadline shared by every GitHub call of one run."""

import time
from typing import Callable

from lint2hub.core.exceptions import SessionTimeoutError


class Deadline:
    """A single wall-clock budget for the whole session."""

    def __init__(self, timeout: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.timeout = timeout
        self._clock = clock
        self._expires_at = clock() + timeout

    def remaining(self) -> float:
        """Seconds left before the deadline, never negative."""
        return max(0.0, self._expires_at - self._clock())

    @property
    def expired(self) -> bool:
        return self.remaining() <= 0

    def check(self, operation: str) -> None:
        """Raise SessionTimeoutError if the deadline has passed."""
        if self.expired:
            raise SessionTimeoutError(self.timeout, operation)
