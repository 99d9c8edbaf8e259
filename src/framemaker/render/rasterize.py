"""SVG to PNG rasterization backed by CairoSVG."""

from __future__ import annotations

import io
import logging
import xml.etree.ElementTree as ET
from types import ModuleType

from PIL import Image, UnidentifiedImageError

from src.framemaker.errors import RasterParseError, RasterRenderError
from src.framemaker.models import ComposedDocument, RenderedRaster

logger = logging.getLogger(__name__)

__all__ = ["Rasterizer"]


def _load_cairosvg() -> ModuleType:
    # cairosvg raises OSError at import time when the cairo shared library is missing.
    try:
        import cairosvg
    except (ImportError, OSError) as exc:
        raise RasterRenderError(f"CairoSVG is unavailable: {exc}") from exc
    return cairosvg


class Rasterizer:
    """Render composed SVG documents to PNG at a fixed output width."""

    def render(self, document: ComposedDocument, target_canvas_width: int) -> RenderedRaster:
        """
        Rasterize ``document`` so its width equals ``target_canvas_width``.

        Height follows from the document's intrinsic aspect ratio.

        Raises:
            RasterParseError: If the markup is not well-formed.
            RasterRenderError: If the renderer fails or yields no usable PNG.
        """

        if target_canvas_width <= 0:
            raise RasterRenderError("Target canvas width must be positive")

        payload = document.text.encode("utf-8")
        try:
            ET.fromstring(payload)
        except ET.ParseError as exc:
            raise RasterParseError(
                f"Composed document from {document.template} is not valid SVG: {exc}"
            ) from exc

        cairosvg = _load_cairosvg()
        try:
            png_bytes = cairosvg.svg2png(bytestring=payload, output_width=int(target_canvas_width))
        except ET.ParseError as exc:
            raise RasterParseError(f"Renderer rejected composed SVG: {exc}") from exc
        except Exception as exc:  # noqa: BLE001
            raise RasterRenderError(f"SVG rendering failed: {exc}") from exc
        if not png_bytes:
            raise RasterRenderError("SVG rendering produced no output")

        try:
            with Image.open(io.BytesIO(png_bytes)) as rendered:
                width, height = rendered.size
        except (UnidentifiedImageError, OSError) as exc:
            raise RasterRenderError(f"Renderer returned an unreadable PNG: {exc}") from exc

        logger.debug("Rendered %s at %dx%d", document.template.name, width, height)
        return RenderedRaster(data=png_bytes, width=width, height=height)
