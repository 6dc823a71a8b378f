"""Single-threaded repeating-timer service.

Jobs never run on their own thread: the owning loop polls ``run_pending`` and
every job whose interval has elapsed fires on the caller's thread. A job that
fell behind fires once per elapsed interval so the cadence stays steady.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


@dataclass
class _IntervalJob:
    callback: Callable[[], Any]
    interval_ms: float
    next_due_ms: float


class IntervalScheduler:
    """Polled scheduler for repeating callbacks.

    Args:
        clock: Callable returning the current time in milliseconds
            (default: time.monotonic based). Tests inject a fake clock.
    """

    def __init__(self, clock: Callable[[], float] | None = None):
        self._clock = clock or monotonic_ms
        self._jobs: dict[int, _IntervalJob] = {}
        self._next_handle = 1

    def now(self) -> float:
        return self._clock()

    def schedule_interval(self, callback: Callable[[], Any], interval_ms: float) -> int:
        """Run ``callback`` every ``interval_ms`` starting one interval from now.

        Returns:
            int: Handle for ``cancel``
        """
        if interval_ms <= 0:
            raise ValueError(f"Interval must be positive, got {interval_ms}")
        handle = self._next_handle
        self._next_handle += 1
        self._jobs[handle] = _IntervalJob(callback, interval_ms, self.now() + interval_ms)
        logger.debug("Scheduled job %d every %sms", handle, interval_ms)
        return handle

    def cancel(self, handle: int) -> None:
        """Stop a job. Unknown or already cancelled handles are ignored."""
        if self._jobs.pop(handle, None) is not None:
            logger.debug("Cancelled job %d", handle)

    def cancel_all(self) -> None:
        self._jobs.clear()

    def is_scheduled(self, handle: int) -> bool:
        return handle in self._jobs

    def active_count(self) -> int:
        return len(self._jobs)

    def run_pending(self, now_ms: float | None = None) -> int:
        """Fire every due job.

        Jobs cancelled by an earlier callback in the same pass do not fire.

        Args:
            now_ms: Current time (default: the scheduler's clock)

        Returns:
            int: Number of callbacks fired
        """
        now = self.now() if now_ms is None else now_ms
        fired = 0
        for handle in list(self._jobs):
            while True:
                job = self._jobs.get(handle)
                if job is None or job.next_due_ms > now:
                    break
                job.next_due_ms += job.interval_ms
                job.callback()
                fired += 1
        return fired
