"""Completion barrier for ggrep.

A monitor-protected count of in-flight tasks.  The driver blocks in
``wait`` until the count drops to zero or a task reports a fatal error,
whichever happens first.
"""

from __future__ import annotations

import threading
from typing import Optional

from ..errors import SearchError


class CompletionBarrier:
    """Track outstanding tasks and the first fatal error."""

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._count = 0
        self._error: Optional[SearchError] = None

    @property
    def outstanding(self) -> int:
        with self._cond:
            return self._count

    @property
    def aborted(self) -> bool:
        with self._cond:
            return self._error is not None

    @property
    def error(self) -> Optional[SearchError]:
        with self._cond:
            return self._error

    def register(self) -> None:
        """Account for a task about to be spawned.

        Must be called by the spawning thread before the task can run.
        """
        with self._cond:
            self._count += 1

    def release(self) -> None:
        """Account for a finished task, successful or not."""
        with self._cond:
            if self._count == 0:
                raise RuntimeError('CompletionBarrier released more times than registered')
            self._count -= 1
            if self._count == 0:
                self._cond.notify_all()

    def abort(self, error: SearchError) -> None:
        """Record a fatal error and wake the waiter.  Only the first error is kept."""
        with self._cond:
            if self._error is None:
                self._error = error
            self._cond.notify_all()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until every task has finished or one has failed.

        Raises the recorded ``SearchError`` if a task aborted the search.
        Returns ``False`` only if ``timeout`` expired first.
        """
        with self._cond:
            done = self._cond.wait_for(lambda: self._count == 0 or self._error is not None, timeout)
            if self._error is not None:
                raise self._error
            return done
