"""A pool of worker threads executing queued tasks.

When the task queue is full, submitting a new task blocks until a worker
picks one up.
"""

from __future__ import annotations

import logging
import queue
import threading
from abc import ABC, abstractmethod
from typing import Any

_log = logging.getLogger(__name__)

_STOP = object()


class Runnable(ABC):
    """A unit of work executed by a worker thread."""

    @abstractmethod
    def run(self) -> None:
        """Perform the work."""


class ThreadPool:
    """Executes tasks in parallel on a fixed number of threads."""

    def __init__(self, threads: int, queue_size: int) -> None:
        self._tasks: queue.Queue[Any] = queue.Queue(maxsize=max(queue_size, 1))
        self._cond = threading.Condition()
        self._submitted = 0
        self._completed = 0
        self._closed = False
        self._workers = [
            threading.Thread(target=self._work, daemon=True) for _ in range(threads)
        ]
        for worker in self._workers:
            worker.start()

    def execute(self, task: Runnable) -> None:
        """Queue a task, blocking while the queue is full."""
        if self._closed:
            raise RuntimeError("thread pool is closed")
        with self._cond:
            self._submitted += 1
        self._tasks.put(task)

    def done(self) -> bool:
        """Return True when no task is in flight."""
        with self._cond:
            return self._submitted == self._completed

    def wait(self) -> None:
        """Block until every submitted task has been processed."""
        with self._cond:
            self._cond.wait_for(lambda: self._submitted == self._completed)

    def close(self) -> None:
        """Wait for pending tasks, then stop and join the workers."""
        if self._closed:
            return
        self.wait()
        self._closed = True
        for _ in self._workers:
            self._tasks.put(_STOP)
        for worker in self._workers:
            worker.join()

    def current_count(self) -> int:
        """Return the number of tasks processed so far."""
        with self._cond:
            return self._completed

    def __enter__(self) -> ThreadPool:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def _work(self) -> None:
        while True:
            task = self._tasks.get()
            if task is _STOP:
                return
            try:
                task.run()
            except Exception:
                _log.exception("task raised an exception")
            finally:
                with self._cond:
                    self._completed += 1
                    self._cond.notify_all()