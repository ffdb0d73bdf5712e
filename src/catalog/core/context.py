"""Per-request execution context with a deadline and a cancellation flag."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field

from src.catalog.core.errors import OperationCancelledError


@dataclass
class ExecutionContext:
    """Deadline and cancellation signal handed down to repository calls.

    A context is derived from each inbound request; the HTTP layer cancels it
    once the request is finished or abandoned so that work still queued in a
    worker thread stops at its next check.
    """

    deadline: float | None = None
    _cancelled: threading.Event = field(default_factory=threading.Event, repr=False)

    @classmethod
    def with_timeout(cls, seconds: float | None) -> ExecutionContext:
        if seconds is None or seconds <= 0:
            return cls()
        return cls(deadline=time.monotonic() + seconds)

    @classmethod
    def background(cls) -> ExecutionContext:
        """Context without deadline, for tooling and tests."""
        return cls()

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None when unbounded."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def check(self) -> None:
        """Raise if the context can no longer be used for new work."""
        if self.cancelled:
            raise OperationCancelledError("operation cancelled")
        remaining = self.remaining()
        if remaining is not None and remaining <= 0:
            raise OperationCancelledError("deadline exceeded")
