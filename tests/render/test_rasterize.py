from __future__ import annotations

from pathlib import Path

import pytest

from src.framemaker.errors import RasterParseError, RasterRenderError
from src.framemaker.models import ComposedDocument
from src.framemaker.render.rasterize import Rasterizer
from tests.helpers.images import cairo_available, png_size

requires_cairo = pytest.mark.skipif(  # type: ignore[attr-defined]
    not cairo_available(),
    reason="CairoSVG/cairo not available – skipping rasterization tests",
)

_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="100" height="50" viewBox="0 0 100 50">'
    '<rect width="100" height="50" fill="#336699"/></svg>'
)


def _document(text: str) -> ComposedDocument:
    return ComposedDocument(text=text, template=Path("inline.svg"), width=100, height=50)


def test_render_rejects_malformed_markup() -> None:
    with pytest.raises(RasterParseError):
        Rasterizer().render(_document("<svg><rect></svg>"), 200)


def test_render_rejects_non_positive_width() -> None:
    with pytest.raises(RasterRenderError):
        Rasterizer().render(_document(_SVG), 0)


@requires_cairo
@pytest.mark.parametrize("width", [50, 200, 750])
def test_render_scales_to_requested_width(width: int) -> None:
    raster = Rasterizer().render(_document(_SVG), width)
    assert raster.width == width
    assert raster.height == width // 2
    assert png_size(raster.data) == (width, width // 2)


@requires_cairo
def test_render_is_deterministic() -> None:
    first = Rasterizer().render(_document(_SVG), 300)
    second = Rasterizer().render(_document(_SVG), 300)
    assert first.data == second.data
