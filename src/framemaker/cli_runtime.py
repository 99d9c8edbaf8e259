"""Runtime glue shared between the Click wiring and the batch runner."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from rich.console import Console

from src.config_loader import ConfigError, load_app_config
from src.datatypes import AppConfig
from src.framemaker.batch import BatchRunner
from src.framemaker.errors import FramingError, FramingJobError
from src.framemaker.frames.registry import FrameRegistry, default_registry
from src.framemaker.models import BatchReport
from src.framemaker.pipeline import FramingPipeline
from src.framemaker.render.prepare import ScreenshotPreparer
from src.framemaker.reporting import ConsoleReporter, configure_logging


class CLIAppError(RuntimeError):
    """Raised when the CLI cannot complete its work."""

    def __init__(self, message: str, *, code: int = 1) -> None:
        super().__init__(message)
        self.code = code


@dataclass
class RunRequest:
    """Parsed command-line request; ``None`` fields fall back to the config file."""

    input_pattern: str
    output_dir: Optional[str] = None
    frame_name: Optional[str] = None
    config_path: Optional[str] = None
    workers: Optional[int] = None
    quiet: bool = False
    verbose: bool = False
    no_color: bool = False


def resolve_settings(request: RunRequest, config: AppConfig) -> tuple[Path, str, int]:
    """Merge CLI overrides onto the loaded configuration."""

    output_dir = Path(request.output_dir or config.output.directory)
    frame_name = request.frame_name if request.frame_name is not None else config.runner.default_frame
    workers = request.workers if request.workers is not None else config.runner.workers
    return output_dir, frame_name, workers


def run_cli(
    request: RunRequest,
    *,
    registry: FrameRegistry | None = None,
    console: Console | None = None,
    err_console: Console | None = None,
) -> BatchReport:
    """
    Execute one framing batch for ``request`` and return its BatchReport.

    Raises:
        CLIAppError: For configuration errors and batch-fatal failures.
    """

    try:
        config = load_app_config(request.config_path)
    except ConfigError as exc:
        raise CLIAppError(f"Invalid configuration: {exc}") from exc

    quiet = request.quiet or config.cli.quiet
    verbose = request.verbose or config.cli.verbose
    no_color = request.no_color or config.cli.no_color
    out_console = console or Console(no_color=no_color, highlight=False)
    error_console = err_console or Console(stderr=True, no_color=no_color, highlight=False)
    configure_logging(quiet=quiet, verbose=verbose, console=error_console)

    output_dir, frame_name, workers = resolve_settings(request, config)
    registry = registry or default_registry()
    reporter = ConsoleReporter(out_console, error_console, quiet=quiet)
    pipeline = FramingPipeline(
        registry,
        preparer=ScreenshotPreparer(compression_level=config.output.compression_level),
    )
    runner = BatchRunner(
        registry,
        pipeline,
        workers=workers,
        suffix=config.output.suffix,
        on_outcome=reporter.outcome,
        on_start=reporter.found,
    )

    try:
        report = runner.run_all(request.input_pattern, output_dir, frame_name)
    except FramingJobError as exc:
        raise CLIAppError(f"Aborting batch, {exc.input_path}: {exc.cause}") from exc
    except FramingError as exc:
        raise CLIAppError(str(exc)) from exc

    reporter.summary(report)
    return report
