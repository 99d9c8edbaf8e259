"""Screenshot decoding and cover-fit resizing."""

from __future__ import annotations

import io
import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from src.framemaker.errors import ImageDecodeError, InputReadError
from src.framemaker.models import EmbeddableImage

from .geometry import format_dimensions, plan_cover

logger = logging.getLogger(__name__)

__all__ = ["ScreenshotPreparer"]

PNG_MIME_TYPE = "image/png"

# [output].compression_level -> zlib level passed to Pillow's PNG writer.
_PNG_COMPRESS_LEVELS = {0: 1, 1: 6, 2: 9}


class ScreenshotPreparer:
    """Load a screenshot and produce a PNG payload sized exactly to a screen region."""

    def __init__(self, *, compression_level: int = 1) -> None:
        try:
            self.compress_level = _PNG_COMPRESS_LEVELS[compression_level]
        except KeyError:
            raise ValueError(f"compression_level must be 0, 1 or 2, got {compression_level!r}") from None

    def prepare(self, path: Path | str, target_width: int, target_height: int) -> EmbeddableImage:
        """
        Decode ``path`` and cover-fit it to ``target_width`` × ``target_height``.

        The image is scaled uniformly until it covers the whole target, then the
        overflow on the dominant axis is cropped around the centre.

        Raises:
            InputReadError: If the file is missing or unreadable.
            ImageDecodeError: If the file is not a decodable image.
        """

        source = Path(path)
        try:
            raw = source.read_bytes()
        except OSError as exc:
            raise InputReadError(f"Unable to read screenshot '{source}': {exc.strerror or exc}") from exc

        try:
            with Image.open(io.BytesIO(raw)) as opened:
                opened.load()
                image = self._normalise_mode(opened)
        except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as exc:
            raise ImageDecodeError(f"Unable to decode screenshot '{source}': {exc}") from exc

        logger.info("Original size: %s", format_dimensions(*image.size))
        plan = plan_cover(image.width, image.height, target_width, target_height)
        logger.debug(
            "Cover plan for %s: scale=%.4f scaled=%s crop=%s",
            source.name,
            plan.scale,
            plan.scaled,
            plan.crop,
        )

        if image.size != plan.scaled:
            image = image.resize(plan.scaled, Image.Resampling.LANCZOS)
        if plan.scaled != plan.target:
            image = image.crop(plan.box)

        buffer = io.BytesIO()
        image.save(buffer, format="PNG", compress_level=self.compress_level)
        return EmbeddableImage(
            data=buffer.getvalue(),
            mime_type=PNG_MIME_TYPE,
            width=image.width,
            height=image.height,
        )

    @staticmethod
    def _normalise_mode(image: Image.Image) -> Image.Image:
        """Return an RGB/RGBA copy suitable for resampling and PNG output."""

        if image.mode in ("RGB", "RGBA"):
            return image.copy()
        if image.mode in ("LA", "PA") or (image.mode == "P" and "transparency" in image.info):
            return image.convert("RGBA")
        return image.convert("RGB")
