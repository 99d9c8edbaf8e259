"""Console presentation for batch progress and summaries."""

from __future__ import annotations

import logging
from threading import Lock
from typing import Iterable

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from src.framemaker.errors import FramingJobError
from src.framemaker.frames.registry import FrameConfig
from src.framemaker.models import BatchReport, JobOutcome
from src.framemaker.render.geometry import format_dimensions

LOGGER_NAME = "src.framemaker"


def configure_logging(*, quiet: bool, verbose: bool, console: Console | None = None) -> logging.Logger:
    """Attach a RichHandler to the package logger tree and set its level."""

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, "_framemaker_handler", False):
            logger.removeHandler(handler)
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler._framemaker_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    if quiet:
        logger.setLevel(logging.ERROR)
    elif verbose:
        logger.setLevel(logging.INFO)
    else:
        logger.setLevel(logging.WARNING)
    logger.propagate = False
    return logger


def _describe_error(error: BaseException) -> str:
    if isinstance(error, FramingJobError):
        return str(error.cause)
    return str(error)


class ConsoleReporter:
    """Print per-file results and the final batch summary."""

    def __init__(self, console: Console, err_console: Console, *, quiet: bool = False) -> None:
        self.console = console
        self.err_console = err_console
        self.quiet = quiet
        self._lock = Lock()

    def found(self, count: int) -> None:
        if not self.quiet:
            self.console.print(f"Found {count} screenshot(s)\n")

    def outcome(self, outcome: JobOutcome) -> None:
        job = outcome.job
        with self._lock:
            if outcome.error is not None:
                self.err_console.print(
                    f"[red]  Error processing {escape(str(job.input_path))}:[/] "
                    f"{escape(_describe_error(outcome.error))}"
                )
                return
            if self.quiet:
                return
            size = format_dimensions(*outcome.size) if outcome.size else "?"
            self.console.print(f"Processing: {escape(job.input_path.name)}")
            self.console.print(f"  → Saved: {escape(str(job.output_path))}")
            self.console.print(f"  Output size: {size} ({outcome.elapsed:.2f}s)\n")

    def summary(self, report: BatchReport) -> None:
        if report.failed:
            table = Table(title="Failed screenshots", show_lines=False)
            table.add_column("Input", overflow="fold")
            table.add_column("Error", overflow="fold")
            for path, error in report.failed:
                table.add_row(escape(str(path)), escape(_describe_error(error)))
            self.err_console.print(table)
        if not self.quiet:
            self.console.print(
                f"Done! {len(report.succeeded)} framed, {len(report.failed)} failed."
            )


def render_frame_table(frames: Iterable[FrameConfig]) -> Table:
    """Return a table describing the registered device presets."""

    table = Table(title="Device frames")
    table.add_column("Name", style="bold")
    table.add_column("Screen")
    table.add_column("Canvas")
    table.add_column("Template", overflow="fold")
    for frame in frames:
        table.add_row(
            frame.name,
            format_dimensions(frame.screen_width, frame.screen_height),
            format_dimensions(frame.canvas_width, frame.canvas_height),
            frame.template.name,
        )
    return table
