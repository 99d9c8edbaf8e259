"""Single-screenshot framing pipeline: prepare, compose, rasterize, write."""

from __future__ import annotations

import logging
import os
import tempfile
import time
from pathlib import Path

from src.framemaker.errors import FramingJobError, OutputWriteError
from src.framemaker.frames.registry import FrameRegistry
from src.framemaker.models import RenderedRaster, ScreenshotJob
from src.framemaker.render.compose import TemplateComposer
from src.framemaker.render.geometry import format_dimensions
from src.framemaker.render.prepare import ScreenshotPreparer
from src.framemaker.render.rasterize import Rasterizer

logger = logging.getLogger(__name__)

__all__ = ["FramingPipeline", "write_output"]


def write_output(path: Path, payload: bytes) -> None:
    """Write ``payload`` to ``path`` via a sibling temp file so readers never see a partial PNG."""

    temp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            dir=str(path.parent),
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            temp_name = handle.name
            handle.write(payload)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temp_name, path)
    except OSError as exc:
        raise OutputWriteError(f"Unable to write '{path}': {exc.strerror or exc}") from exc
    finally:
        if temp_name and os.path.exists(temp_name):
            try:
                os.remove(temp_name)
            except OSError:
                logger.debug("Unable to remove temporary file %s", temp_name, exc_info=True)


class FramingPipeline:
    """Frame one screenshot with the preset named by its job."""

    def __init__(
        self,
        registry: FrameRegistry,
        *,
        preparer: ScreenshotPreparer | None = None,
        composer: TemplateComposer | None = None,
        rasterizer: Rasterizer | None = None,
    ) -> None:
        self.registry = registry
        self.preparer = preparer or ScreenshotPreparer()
        self.composer = composer or TemplateComposer()
        self.rasterizer = rasterizer or Rasterizer()

    def run(self, job: ScreenshotJob) -> RenderedRaster:
        """
        Frame ``job.input_path`` and write the mockup to ``job.output_path``.

        Unknown frame names raise UnknownFrameTypeError before any file is read.
        Every later failure is raised as FramingJobError chained to its cause,
        and nothing is left at ``job.output_path``.
        """

        frame = self.registry.lookup(job.frame_name)
        logger.info("Processing: %s", job.input_path.name)
        started = time.perf_counter()
        try:
            image = self.preparer.prepare(job.input_path, frame.screen_width, frame.screen_height)
            document = self.composer.compose(frame.template, image)
            raster = self.rasterizer.render(document, frame.canvas_width)
            if raster.width != frame.canvas_width or raster.height != frame.canvas_height:
                logger.warning(
                    "Template %s rendered at %s; frame '%s' expects %s",
                    frame.template.name,
                    format_dimensions(raster.width, raster.height),
                    frame.name,
                    format_dimensions(frame.canvas_width, frame.canvas_height),
                )
            write_output(job.output_path, raster.data)
        except Exception as exc:  # noqa: BLE001
            raise FramingJobError(job.input_path, exc) from exc

        logger.info(
            "Saved: %s (%s, %.2fs)",
            job.output_path,
            format_dimensions(raster.width, raster.height),
            time.perf_counter() - started,
        )
        return raster
