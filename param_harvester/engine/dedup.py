"""Line-level deduplication of harvested output files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import structlog

from ..errors import SinkError


@dataclass(frozen=True, slots=True)
class DedupResult:
    total: int
    unique: int

    @property
    def removed(self) -> int:
        return self.total - self.unique


def unique_lines(lines: Iterable[str]) -> list[str]:
    """Return the distinct non-empty lines, sorted for a stable file layout."""
    return sorted({line for line in lines if line})


def write_lines(path: Path, lines: Iterable[str]) -> None:
    try:
        with path.open("w", encoding="utf-8", newline="\n") as stream:
            for line in lines:
                stream.write(line + "\n")
    except OSError as exc:
        raise SinkError(f"Cannot write output file {path}: {exc}") from exc


def dedupe_file(path: Path) -> DedupResult:
    """Rewrite ``path`` so every line appears exactly once."""

    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        raise SinkError(f"Cannot read output file {path}: {exc}") from exc
    unique = unique_lines(lines)
    write_lines(path, unique)
    result = DedupResult(total=len(lines), unique=len(unique))
    structlog.get_logger("param_harvester.dedup").info(
        "dedupe_done", path=str(path), total=result.total, unique=result.unique
    )
    return result


__all__ = ["DedupResult", "dedupe_file", "unique_lines", "write_lines"]
