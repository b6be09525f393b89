"""Task supervisor for ggrep.

Spawns one thread per unit of work with no cap on the number of live
threads.  Every task is registered with the ``CompletionBarrier`` by the
spawning thread and released by the task itself on exit, whatever the
outcome.  Errors raised inside a task abort the whole search.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Optional

from ..errors import SearchError, TaskStartFailure
from .barrier import CompletionBarrier

logger = logging.getLogger(__name__)


class TaskSupervisor:
    """Run tasks concurrently and report their completion to a barrier."""

    def __init__(self, barrier: Optional[CompletionBarrier] = None):
        self.barrier = barrier or CompletionBarrier()

    @property
    def aborted(self) -> bool:
        return self.barrier.aborted

    def spawn(self, task: Callable[..., None], *args: Any) -> None:
        """Start ``task(*args)`` on a new daemon thread."""
        self.barrier.register()
        t = threading.Thread(target=self._run, args=(task, args), daemon=True)
        try:
            t.start()
        except RuntimeError as exc:
            self.barrier.abort(TaskStartFailure(f'Could not start task {getattr(task, "__name__", task)}: {exc}'))
            self.barrier.release()

    def wait(self) -> None:
        """Block until all spawned tasks are done; re-raise the first fatal error."""
        self.barrier.wait()

    def _run(self, task: Callable[..., None], args: tuple) -> None:
        try:
            if self.barrier.aborted:
                return
            task(*args)
        except SearchError as exc:
            self.barrier.abort(exc)
        except Exception as exc:
            logger.debug('Task %r crashed', task, exc_info=True)
            self.barrier.abort(SearchError(f'Unexpected error in {getattr(task, "__name__", task)}: {exc}'))
        finally:
            self.barrier.release()
