"""Exporter Service Provider Interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable


class BaseExporter(ABC):
    """Uniform sink contract for harvested values."""

    def __init__(self) -> None:
        self._values: set[str] = set()
        self.received = 0

    @property
    def count(self) -> int:
        """Number of distinct values collected so far."""
        return len(self._values)

    def export(self, value: str) -> None:
        self.received += 1
        self._values.add(value)

    def export_many(self, values: Iterable[str]) -> None:
        for value in values:
            self.export(value)

    def values(self) -> list[str]:
        return sorted(self._values)

    @abstractmethod
    def flush(self) -> None:
        """Write collected values to the destination."""

    @abstractmethod
    def close(self) -> None:
        """Release underlying resources."""


__all__ = ["BaseExporter"]
