"""Value types passed between the framing pipeline stages."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

__all__ = [
    "BatchReport",
    "ComposedDocument",
    "EmbeddableImage",
    "JobOutcome",
    "RenderedRaster",
    "ScreenshotJob",
]


@dataclass(frozen=True)
class ScreenshotJob:
    """A single screenshot to frame and the file the mockup is written to."""

    input_path: Path
    output_path: Path
    frame_name: str


@dataclass(frozen=True)
class EmbeddableImage:
    """
    Encoded screenshot ready for inline embedding into an SVG document.

    Attributes:
        data (bytes): Lossless encoded payload.
        mime_type (str): Declared media type of ``data``.
        width (int): Pixel width, equal to the target screen width.
        height (int): Pixel height, equal to the target screen height.
    """

    data: bytes = field(repr=False)
    mime_type: str
    width: int
    height: int

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def to_data_uri(self) -> str:
        payload = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{payload}"


@dataclass(frozen=True)
class ComposedDocument:
    """Serialized SVG with the screenshot substituted into its placeholder."""

    text: str = field(repr=False)
    template: Path
    width: Optional[float] = None
    height: Optional[float] = None


@dataclass(frozen=True)
class RenderedRaster:
    """PNG-encoded mockup produced by the rasterizer."""

    data: bytes = field(repr=False)
    width: int
    height: int

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)


@dataclass(frozen=True)
class JobOutcome:
    """Result of running the pipeline for one job."""

    job: ScreenshotJob
    error: Optional[Exception] = None
    size: Optional[Tuple[int, int]] = None
    elapsed: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchReport:
    """Accumulated outcome of a batch run, in discovery order."""

    succeeded: List[ScreenshotJob] = field(default_factory=list)
    failed: List[Tuple[Path, Exception]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed)

    @property
    def ok(self) -> bool:
        return not self.failed

    def record(self, outcome: JobOutcome) -> "BatchReport":
        if outcome.error is None:
            self.succeeded.append(outcome.job)
        else:
            self.failed.append((outcome.job.input_path, outcome.error))
        return self
