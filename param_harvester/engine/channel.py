"""Many-writer / one-reader result channel with a completion counter."""

from __future__ import annotations

import queue
from threading import Lock
from typing import Generic, Iterator, TypeVar

T = TypeVar("T")

_CLOSED = object()


class ResultChannel(Generic[T]):
    """Queue that closes itself once every registered producer is done.

    Producers are registered with :meth:`add` before they start and call
    :meth:`done` exactly once when they finish. After :meth:`seal` no more
    producers may be added, and the channel closes as soon as the in-flight
    counter reaches zero. The single consumer iterates the channel until it
    is closed.
    """

    def __init__(self, maxsize: int = 0) -> None:
        self._queue: queue.Queue = queue.Queue(maxsize=maxsize)
        self._lock = Lock()
        self._in_flight = 0
        self._sealed = False
        self._closed = False

    @property
    def in_flight(self) -> int:
        with self._lock:
            return self._in_flight

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def add(self, count: int = 1) -> None:
        with self._lock:
            if self._sealed:
                raise RuntimeError("Cannot add producers to a sealed channel")
            self._in_flight += count

    def done(self) -> None:
        with self._lock:
            if self._in_flight <= 0:
                raise RuntimeError("done() called more times than add()")
            self._in_flight -= 1
            self._close_if_drained()

    def seal(self) -> None:
        with self._lock:
            self._sealed = True
            self._close_if_drained()

    def send(self, item: T) -> None:
        with self._lock:
            if self._closed:
                raise RuntimeError("Cannot send on a closed channel")
        self._queue.put(item)

    def _close_if_drained(self) -> None:
        # caller holds the lock
        if self._sealed and self._in_flight == 0 and not self._closed:
            self._closed = True
            self._queue.put(_CLOSED)

    def __iter__(self) -> Iterator[T]:
        while True:
            item = self._queue.get()
            if item is _CLOSED:
                return
            yield item


__all__ = ["ResultChannel"]
