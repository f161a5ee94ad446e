"""Sweep orchestrator: fan out one probe per target, fan results back in."""

from __future__ import annotations

from collections import Counter
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Sequence

import structlog
from rich.console import Console

from .config import ProbeSettings
from .engine import ProbeOutcome, ProbeResult, Prober, ResultChannel, ThreadPoolManager
from .engine.exporter import BaseExporter, ConsoleExporter, LineExporter
from .errors import ErrorKind
from .ui import ProgressReporter


@dataclass(slots=True)
class SweepSummary:
    """Counters describing one finished sweep."""

    targets: int
    succeeded: int = 0
    failed: int = 0
    aborted: int = 0
    emitted: int = 0
    unique: int = 0
    errors: Counter = field(default_factory=Counter)

    def as_dict(self) -> dict[str, int]:
        return {
            "targets": self.targets,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "aborted": self.aborted,
            "emitted": self.emitted,
            "unique": self.unique,
        }


def build_exporter(settings: ProbeSettings, console: Console | None = None) -> BaseExporter:
    if settings.output is not None:
        return LineExporter(settings.output, append=settings.append)
    return ConsoleExporter(console)


class Orchestrator:
    """Central coordinator for a harvesting sweep.

    Every target runs in its own worker; workers share only the result
    channel, whose in-flight counter closes it once the last probe returns.
    The calling thread is the single consumer and the only writer of the
    exporter.
    """

    def __init__(
        self,
        settings: ProbeSettings,
        prober: Prober | None = None,
        thread_pool: ThreadPoolManager | None = None,
        progress: ProgressReporter | None = None,
    ) -> None:
        self.settings = settings
        self.prober = prober or Prober(settings)
        self.thread_pool = thread_pool or ThreadPoolManager(settings.max_workers)
        self.progress = progress or ProgressReporter(enabled=False)
        self.logger = structlog.get_logger("param_harvester").bind(component="orchestrator")

    def run(self, targets: Sequence[str], exporter: BaseExporter) -> SweepSummary:
        summary = SweepSummary(targets=len(targets))
        channel: ResultChannel[ProbeResult] = ResultChannel()
        self.logger.info(
            "sweep_start",
            targets=len(targets),
            workers=self.thread_pool.workers_for(len(targets)),
        )
        self.progress.start(len(targets))
        futures: list[Future[ProbeOutcome]] = []
        try:
            if targets:
                executor = self.thread_pool.executor(len(targets))
                for target in targets:
                    channel.add()
                    futures.append(executor.submit(self._probe_one, target, channel))
            channel.seal()
            for result in channel:
                self._collect(result, exporter, summary)
            for future in futures:
                outcome = future.result()
                if outcome is ProbeOutcome.SUCCEEDED:
                    summary.succeeded += 1
                elif outcome is ProbeOutcome.FAILED:
                    summary.failed += 1
                else:
                    summary.aborted += 1
        finally:
            self.progress.close()
            self.thread_pool.shutdown()
            exporter.close()
        summary.unique = exporter.count
        self.logger.info("sweep_done", **summary.as_dict())
        return summary

    def close(self) -> None:
        self.prober.close()

    # ------------------------------------------------------------------
    def _probe_one(self, target: str, channel: ResultChannel[ProbeResult]) -> ProbeOutcome:
        outcome = ProbeOutcome.FAILED
        try:
            outcome = self.prober.probe(target, channel.send)
        except Exception as exc:  # noqa: BLE001
            self.logger.error("probe_crashed", target=target, error=str(exc))
            channel.send(ProbeResult(target, "", "", ErrorKind.UNKNOWN_ERROR, str(exc)))
        finally:
            channel.done()
            self.progress.advance(outcome.value, target)
        return outcome

    def _collect(
        self, result: ProbeResult, exporter: BaseExporter, summary: SweepSummary
    ) -> None:
        if result.is_error:
            summary.errors[result.error.value] += 1
            self.logger.debug(
                "probe_error", target=result.target, kind=result.error.value, detail=result.detail
            )
            return
        exporter.export(result.value)
        summary.emitted += 1


__all__ = ["Orchestrator", "SweepSummary", "build_exporter"]
