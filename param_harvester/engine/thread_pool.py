"""Executor sizing for one probe per target."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from threading import Lock


class ThreadPoolManager:
    """Create and track the executors used by sweeps.

    Without a cap every target gets its own worker thread, so all probes run
    at once; ``max_workers`` bounds that fan-out.
    """

    def __init__(self, max_workers: int | None = None) -> None:
        self.max_workers = max_workers
        self._executors: list[ThreadPoolExecutor] = []
        self._lock = Lock()

    def workers_for(self, target_count: int) -> int:
        workers = max(target_count, 1)
        if self.max_workers is not None:
            workers = min(workers, self.max_workers)
        return workers

    def executor(self, target_count: int) -> ThreadPoolExecutor:
        executor = ThreadPoolExecutor(
            max_workers=self.workers_for(target_count), thread_name_prefix="prober"
        )
        with self._lock:
            self._executors.append(executor)
        return executor

    def shutdown(self, wait: bool = True) -> None:
        with self._lock:
            executors, self._executors = self._executors, []
        for executor in executors:
            executor.shutdown(wait=wait)


__all__ = ["ThreadPoolManager"]
