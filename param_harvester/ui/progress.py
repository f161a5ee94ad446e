"""Terminal progress helpers with Rich-based rendering."""

from __future__ import annotations

from dataclasses import dataclass
from threading import Lock

from rich.console import Console
from rich.errors import LiveError
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)


@dataclass
class ProgressState:
    total: int
    succeeded: int = 0
    failed: int = 0
    aborted: int = 0
    current_target: str | None = None

    @property
    def completed(self) -> int:
        return self.succeeded + self.failed + self.aborted


class ProgressReporter:
    """Render sweep progress and maintain per-outcome counters.

    ``advance`` is called from the probe worker threads, so updates are
    serialised with a lock. Outside a terminal the bar is disabled and only
    the counters are kept.
    """

    def __init__(self, enabled: bool = True, console: Console | None = None) -> None:
        self.enabled = enabled
        self._console = console
        self._progress: Progress | None = None
        self._task_id: TaskID | None = None
        self._lock = Lock()
        self.state: ProgressState | None = None

    def start(self, total: int) -> None:
        self.state = ProgressState(total=total)
        if not self.enabled:
            return
        console = self._console or Console(stderr=True)
        if not console.is_terminal:
            self.enabled = False
            return
        self._progress = Progress(
            SpinnerColumn(style="cyan"),
            TextColumn("[bold blue]targets"),
            BarColumn(bar_width=None, complete_style="green", finished_style="green"),
            TaskProgressColumn(show_speed=False),
            TimeElapsedColumn(),
            TextColumn("[green]✓{task.fields[succeeded]:>3}", justify="right"),
            TextColumn("[red]✗{task.fields[failed]:>3}", justify="right"),
            TextColumn("[yellow]⊘{task.fields[aborted]:>3}", justify="right"),
            TextColumn("[dim]{task.fields[current_target]}", justify="left"),
            console=console,
            transient=True,
            refresh_per_second=12,
            expand=True,
        )
        try:
            self._progress.start()
        except LiveError:
            # another live display owns the console
            self.enabled = False
            self._progress = None
            return
        self._task_id = self._progress.add_task(
            "sweep", total=total, succeeded=0, failed=0, aborted=0, current_target=""
        )

    def advance(self, outcome: str, target: str | None = None) -> None:
        if not self.state:
            raise RuntimeError("ProgressReporter.start must be called before advance")
        with self._lock:
            if outcome == "succeeded":
                self.state.succeeded += 1
            elif outcome == "failed":
                self.state.failed += 1
            elif outcome == "aborted":
                self.state.aborted += 1
            else:
                raise ValueError(f"Unknown probe outcome: {outcome}")
            if target:
                self.state.current_target = target
            if self._progress is not None and self._task_id is not None:
                display = self.state.current_target or ""
                if len(display) > 60:
                    display = display[:57] + "..."
                self._progress.update(
                    self._task_id,
                    advance=1,
                    succeeded=self.state.succeeded,
                    failed=self.state.failed,
                    aborted=self.state.aborted,
                    current_target=display,
                )

    def close(self) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress = None
        self._task_id = None

    def summary(self) -> dict[str, int]:
        if not self.state:
            return {"succeeded": 0, "failed": 0, "aborted": 0}
        return {
            "succeeded": self.state.succeeded,
            "failed": self.state.failed,
            "aborted": self.state.aborted,
        }


__all__ = ["ProgressReporter", "ProgressState"]
