"""Plain text exporter: one harvested value per line."""

from __future__ import annotations

from pathlib import Path

import structlog

from ...errors import SinkError
from ..dedup import dedupe_file
from .base import BaseExporter


class LineExporter(BaseExporter):
    """Collect values in memory and write them once as a sorted unique list.

    The file is opened at construction so an unwritable path fails before any
    request is sent. In append mode the existing content is kept, new values
    are appended and the whole file is deduplicated on close.
    """

    def __init__(self, path: Path, append: bool = False) -> None:
        super().__init__()
        self.path = path
        self.append = append
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._file = self.path.open("a" if append else "w", encoding="utf-8", newline="\n")
        except OSError as exc:
            raise SinkError(f"Cannot create output file {path}: {exc}") from exc
        self._written: set[str] = set()

    def flush(self) -> None:
        pending = [value for value in self.values() if value not in self._written]
        try:
            for value in pending:
                self._file.write(value + "\n")
            self._file.flush()
        except OSError as exc:
            raise SinkError(f"Cannot write output file {self.path}: {exc}") from exc
        self._written.update(pending)

    def close(self) -> None:
        if self._file.closed:
            return
        try:
            self.flush()
        finally:
            self._file.close()
        structlog.get_logger("param_harvester.sink").info(
            "sink_written", path=str(self.path), values=self.count, append=self.append
        )
        if self.append:
            dedupe_file(self.path)


__all__ = ["LineExporter"]
