"""Exporter printing harvested values when no output file is configured."""

from __future__ import annotations

from rich.console import Console

from .base import BaseExporter


class ConsoleExporter(BaseExporter):
    def __init__(self, console: Console | None = None) -> None:
        super().__init__()
        self.console = console or Console(highlight=False, soft_wrap=True)
        self._printed: set[str] = set()

    def flush(self) -> None:
        for value in self.values():
            if value not in self._printed:
                self.console.print(value, markup=False)
                self._printed.add(value)

    def close(self) -> None:
        self.flush()


__all__ = ["ConsoleExporter"]
