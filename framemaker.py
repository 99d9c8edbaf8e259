"""Public shim exposing the framemaker CLI and library surface."""

from __future__ import annotations

from typing import Callable, cast

import src.framemaker.cli_entry as _cli_entry
from src.framemaker.batch import BatchRunner, resolve_inputs
from src.framemaker.cli_runtime import CLIAppError, RunRequest, run_cli
from src.framemaker.errors import (
    FramingError,
    FramingJobError,
    NoMatchingInputError,
    PlaceholderMissingError,
    UnknownFrameTypeError,
)
from src.framemaker.frames.registry import FrameConfig, FrameRegistry, default_registry
from src.framemaker.models import BatchReport, ScreenshotJob
from src.framemaker.pipeline import FramingPipeline

__all__ = (
    "main",
    "run_cli",
    "BatchReport",
    "BatchRunner",
    "CLIAppError",
    "FrameConfig",
    "FrameRegistry",
    "FramingError",
    "FramingJobError",
    "FramingPipeline",
    "NoMatchingInputError",
    "PlaceholderMissingError",
    "RunRequest",
    "ScreenshotJob",
    "UnknownFrameTypeError",
    "default_registry",
    "resolve_inputs",
)

main = _cli_entry.main


if __name__ == "__main__":
    _entry_point = cast(Callable[[], None], main)
    _entry_point()
