"""Typer CLI entrypoint for Param-Harvester."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from .config import ProbeSettings, load_settings, merge_overrides, resolve_targets
from .engine import dedupe_file
from .errors import ConfigShapeError, SinkError
from .logging_conf import configure_logging
from .orchestrator import Orchestrator, SweepSummary, build_exporter
from .ui import ProgressReporter

app = typer.Typer(
    help="Harvest parameter and field names from web pages.",
    no_args_is_help=True,
    rich_markup_mode=None,
)

# harvested values go to stdout, everything else to stderr
console = Console(stderr=True)
stdout_console = Console(highlight=False, soft_wrap=True)


def _progress_default_enabled() -> bool:
    return bool(getattr(sys.stderr, "isatty", lambda: False)())


def _render_summary(summary: SweepSummary, settings: ProbeSettings) -> Table:
    table = Table(title="Sweep summary", box=box.SIMPLE_HEAD, show_header=False)
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")
    table.add_row("Targets", str(summary.targets))
    table.add_row("Succeeded", str(summary.succeeded))
    table.add_row("Failed", str(summary.failed))
    table.add_row("Aborted", str(summary.aborted))
    table.add_row("Values received", str(summary.emitted))
    table.add_row("Unique values", str(summary.unique))
    for kind, count in sorted(summary.errors.items()):
        table.add_row(f"Error · {kind}", str(count), style="red")
    table.add_row("Output", str(settings.output) if settings.output else "stdout")
    return table


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging on stderr."),
) -> None:
    configure_logging(verbose=verbose)
    ctx.obj = {"verbose": verbose}


@app.command("run", help="Probe one target or a list of targets and harvest parameter names.")
def run(
    target: Optional[str] = typer.Option(
        None, "--target", "-t", "--domain", "--host", help="Single URL to probe."
    ),
    target_list: Optional[Path] = typer.Option(
        None, "--list", "-l", "--lists", "--hosts", help="File with one URL per line."
    ),
    header: Optional[List[str]] = typer.Option(
        None,
        "--header",
        "-H",
        help="Header applied to every request, e.g. 'Cookie: session=abc'. Repeatable.",
    ),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Per-request timeout in seconds (default 10)."),
    delay: Optional[int] = typer.Option(None, "--delay", help="Seconds to wait before each request (used when > 1)."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="File receiving the unique values."),
    append: bool = typer.Option(False, "--append", help="Merge with the existing output file instead of replacing it."),
    max_workers: Optional[int] = typer.Option(None, "--max-workers", help="Cap on concurrent probes (default: one per target)."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML or JSON settings file."),
    strict_headers: bool = typer.Option(False, "--strict-headers", help="Reject malformed headers before probing."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Hide progress bar and summary."),
) -> None:
    try:
        settings = load_settings(config) if config else ProbeSettings()
        settings = merge_overrides(
            settings,
            timeout=timeout,
            delay=delay,
            headers=header,
            output=output,
            append=append or None,
            max_workers=max_workers,
            validate_headers=strict_headers or None,
        )
        targets = resolve_targets(target, target_list)
        exporter = build_exporter(settings, console=stdout_console)
    except (ConfigShapeError, SinkError) as exc:
        console.print(f"Error: {exc}", style="red", markup=False, soft_wrap=True)
        raise typer.Exit(code=1)

    if settings.output is None and not quiet:
        console.print("No --output given; values are printed to stdout only.", style="yellow")

    progress = ProgressReporter(enabled=not quiet and _progress_default_enabled(), console=console)
    orchestrator = Orchestrator(settings, progress=progress)
    try:
        summary = orchestrator.run(targets, exporter)
    except SinkError as exc:
        console.print(f"Error: {exc}", style="red", markup=False, soft_wrap=True)
        raise typer.Exit(code=1)
    finally:
        orchestrator.close()

    if not quiet:
        console.print(_render_summary(summary, settings))


@app.command("dedupe", help="Rewrite an output file so each value appears once, sorted.")
def dedupe(path: Path = typer.Argument(..., help="Output file to normalise.")) -> None:
    try:
        result = dedupe_file(path)
    except SinkError as exc:
        console.print(f"Error: {exc}", style="red", markup=False, soft_wrap=True)
        raise typer.Exit(code=1)
    console.print(
        f"{path}: {result.total} lines → {result.unique} unique ({result.removed} removed)",
        style="green",
        markup=False,
        soft_wrap=True,
    )


def cli() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    cli()
