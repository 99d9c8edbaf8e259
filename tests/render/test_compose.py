from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from src.framemaker.errors import PlaceholderMissingError, TemplateLoadError
from src.framemaker.frames.registry import FrameRegistry
from src.framemaker.models import EmbeddableImage
from src.framemaker.render.compose import PLACEHOLDER_TOKEN, SVG_NS, XLINK_NS, TemplateComposer

_IMAGE = EmbeddableImage(data=b"\x89PNG-fake", mime_type="image/png", width=710, height=1536)


def _write_template(path: Path, body: str, *, width: str = '100', height: str = '200') -> Path:
    path.write_text(
        f'<svg xmlns="{SVG_NS}" xmlns:xlink="{XLINK_NS}" width="{width}" height="{height}">{body}</svg>',
        encoding="utf-8",
    )
    return path


def test_compose_substitutes_bundled_template(registry: FrameRegistry) -> None:
    frame = registry.lookup("iphone")
    document = TemplateComposer().compose(frame.template, _IMAGE)

    assert PLACEHOLDER_TOKEN not in document.text
    assert (document.width, document.height) == (750.0, 1576.0)
    root = ET.fromstring(document.text)
    assert root.tag == f"{{{SVG_NS}}}svg"
    images = list(root.iter(f"{{{SVG_NS}}}image"))
    assert len(images) == 1
    assert images[0].get(f"{{{XLINK_NS}}}href") == _IMAGE.to_data_uri()


def test_compose_supports_plain_href(tmp_path: Path) -> None:
    template = _write_template(tmp_path / "plain.svg", f'<image href="{PLACEHOLDER_TOKEN}"/>')
    document = TemplateComposer().compose(template, _IMAGE)
    image = ET.fromstring(document.text).find(f"{{{SVG_NS}}}image")
    assert image is not None
    assert image.get("href") == _IMAGE.to_data_uri()


def test_compose_uses_viewbox_when_size_missing(tmp_path: Path) -> None:
    template = tmp_path / "viewbox.svg"
    template.write_text(
        f'<svg xmlns="{SVG_NS}" viewBox="0 0 375 788"><image href="{PLACEHOLDER_TOKEN}"/></svg>',
        encoding="utf-8",
    )
    document = TemplateComposer().compose(template, _IMAGE)
    assert (document.width, document.height) == (375.0, 788.0)


def test_compose_ignores_token_outside_image_links(tmp_path: Path) -> None:
    template = _write_template(
        tmp_path / "text.svg",
        f'<text>{PLACEHOLDER_TOKEN}</text><image xlink:href="{PLACEHOLDER_TOKEN}"/>',
    )
    document = TemplateComposer().compose(template, _IMAGE)
    assert document.text.count(PLACEHOLDER_TOKEN) == 1


def test_compose_requires_a_placeholder(tmp_path: Path) -> None:
    template = _write_template(tmp_path / "none.svg", '<rect width="10" height="10"/>')
    with pytest.raises(PlaceholderMissingError) as excinfo:
        TemplateComposer().compose(template, _IMAGE)
    assert excinfo.value.count == 0


def test_compose_rejects_multiple_placeholders(tmp_path: Path) -> None:
    body = f'<image xlink:href="{PLACEHOLDER_TOKEN}"/><image href="{PLACEHOLDER_TOKEN}"/>'
    template = _write_template(tmp_path / "two.svg", body)
    with pytest.raises(PlaceholderMissingError) as excinfo:
        TemplateComposer().compose(template, _IMAGE)
    assert excinfo.value.count == 2


def test_compose_reports_missing_template(tmp_path: Path) -> None:
    with pytest.raises(TemplateLoadError):
        TemplateComposer().compose(tmp_path / "missing.svg", _IMAGE)


def test_compose_reports_malformed_template(tmp_path: Path) -> None:
    template = tmp_path / "broken.svg"
    template.write_text("<svg><image></svg>", encoding="utf-8")
    with pytest.raises(TemplateLoadError):
        TemplateComposer().compose(template, _IMAGE)
