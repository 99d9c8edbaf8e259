"""Exception hierarchy for the framing pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

__all__ = [
    "FrameConfigError",
    "FramingError",
    "FramingJobError",
    "ImageDecodeError",
    "InputReadError",
    "NoMatchingInputError",
    "OutputWriteError",
    "PlaceholderMissingError",
    "RasterError",
    "RasterParseError",
    "RasterRenderError",
    "TemplateError",
    "TemplateLoadError",
    "UnknownFrameTypeError",
]


class FramingError(RuntimeError):
    """Base class for every failure raised by the framing pipeline."""


class FrameConfigError(FramingError):
    """Raised when a frame preset violates its geometry invariants."""


class UnknownFrameTypeError(FramingError):
    """Raised when a frame name is not present in the registry."""

    def __init__(self, name: str, available: Iterable[str]) -> None:
        self.name = name
        self.available = tuple(sorted(available))
        super().__init__(
            f"Unknown frame type: {name}. Available: {', '.join(self.available)}"
        )


class NoMatchingInputError(FramingError):
    """Raised when an input pattern resolves to no files at all."""

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        super().__init__(f"No files found matching: {pattern}")


class InputReadError(FramingError):
    """Raised when a screenshot cannot be read from disk."""


class ImageDecodeError(FramingError):
    """Raised when a screenshot is corrupt or in an unsupported format."""


class TemplateError(FramingError):
    """Base class for broken template assets; fatal for a whole batch."""


class TemplateLoadError(TemplateError):
    """Raised when a template is missing, unreadable or not well-formed."""


class PlaceholderMissingError(TemplateError):
    """Raised when a template does not hold exactly one screenshot placeholder."""

    def __init__(self, template: Path | str, count: int) -> None:
        self.template = template
        self.count = count
        super().__init__(
            f"Template {template} must contain exactly one screenshot placeholder (found {count})"
        )


class RasterError(FramingError):
    """Base class for rasterization failures."""


class RasterParseError(RasterError):
    """Raised when the composed document is not valid SVG markup."""


class RasterRenderError(RasterError):
    """Raised when the SVG renderer fails internally."""


class OutputWriteError(FramingError):
    """Raised when the rendered PNG cannot be written."""


class FramingJobError(FramingError):
    """Wraps a per-job failure with the offending input path."""

    def __init__(self, input_path: Path, cause: BaseException) -> None:
        self.input_path = input_path
        self.cause = cause
        super().__init__(f"{input_path}: {cause}")
