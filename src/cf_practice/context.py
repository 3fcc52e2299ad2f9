"""Cancellation and deadline context passed to every check."""

import threading
import time
from dataclasses import dataclass, field

from cf_practice.errors import CheckCancelledError


@dataclass
class CheckContext:
    """Carries a cancellation flag and an optional monotonic deadline.

    Checks that block on I/O derive their timeouts from timeout() so a
    run never outlives the deadline it was given.
    """

    deadline: float | None = None
    _cancel: threading.Event = field(default_factory=threading.Event, repr=False)

    @classmethod
    def with_timeout(cls, seconds: float) -> "CheckContext":
        return cls(deadline=time.monotonic() + seconds)

    def cancel(self) -> None:
        self._cancel.set()

    @property
    def cancelled(self) -> bool:
        if self._cancel.is_set():
            return True
        return self.deadline is not None and time.monotonic() >= self.deadline

    def remaining(self) -> float | None:
        """Seconds left before the deadline, None when unbounded."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def timeout(self, default: float) -> float:
        """Request timeout bounded by the remaining time."""
        self.raise_if_cancelled()
        remaining = self.remaining()
        if remaining is None:
            return default
        return min(default, remaining)

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise CheckCancelledError("check cancelled")
