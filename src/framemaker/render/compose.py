"""Screenshot substitution into SVG device templates."""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List, Optional, Tuple

from src.framemaker.errors import PlaceholderMissingError, TemplateLoadError
from src.framemaker.models import ComposedDocument, EmbeddableImage

logger = logging.getLogger(__name__)

__all__ = [
    "PLACEHOLDER_TOKEN",
    "SVG_NS",
    "XLINK_NS",
    "TemplateComposer",
    "intrinsic_size",
]

PLACEHOLDER_TOKEN = "{{SCREENSHOT_DATA}}"
SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"

_HREF_ATTRS = ("href", f"{{{XLINK_NS}}}href")
_LENGTH_RE = re.compile(r"^\s*([0-9]*\.?[0-9]+)\s*(px)?\s*$")

ET.register_namespace("", SVG_NS)
ET.register_namespace("xlink", XLINK_NS)


def _parse_length(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    match = _LENGTH_RE.match(value)
    if match is None:
        return None
    return float(match.group(1))


def intrinsic_size(root: ET.Element) -> Tuple[Optional[float], Optional[float]]:
    """Return the document's declared width/height, falling back to its viewBox."""

    width = _parse_length(root.get("width"))
    height = _parse_length(root.get("height"))
    if width is not None and height is not None:
        return (width, height)
    view_box = root.get("viewBox")
    if view_box:
        parts = view_box.replace(",", " ").split()
        if len(parts) == 4:
            try:
                return (float(parts[2]), float(parts[3]))
            except ValueError:
                pass
    return (width, height)


def _is_image(element: ET.Element) -> bool:
    return element.tag in ("image", f"{{{SVG_NS}}}image")


class TemplateComposer:
    """Embed a prepared screenshot into the single placeholder of an SVG template."""

    def __init__(self, placeholder: str = PLACEHOLDER_TOKEN) -> None:
        self.placeholder = placeholder

    def load(self, template: Path | str) -> ET.Element:
        """Read and parse ``template`` into an element tree."""

        path = Path(template)
        try:
            raw = path.read_bytes()
        except OSError as exc:
            raise TemplateLoadError(f"Unable to load frame template '{path}': {exc.strerror or exc}") from exc
        try:
            return ET.fromstring(raw)
        except ET.ParseError as exc:
            raise TemplateLoadError(f"Frame template '{path}' is not well-formed SVG: {exc}") from exc

    def find_placeholders(self, root: ET.Element) -> List[Tuple[ET.Element, str]]:
        """Return every ``(element, attribute)`` pair whose link equals the placeholder token."""

        matches: List[Tuple[ET.Element, str]] = []
        for element in root.iter():
            if not _is_image(element):
                continue
            for attr in _HREF_ATTRS:
                if element.get(attr) == self.placeholder:
                    matches.append((element, attr))
        return matches

    def compose(self, template: Path | str, image: EmbeddableImage) -> ComposedDocument:
        """
        Substitute ``image`` into ``template``.

        Raises:
            TemplateLoadError: If the template is missing or malformed.
            PlaceholderMissingError: If the template holds zero or several placeholders.
        """

        path = Path(template)
        root = self.load(path)
        placeholders = self.find_placeholders(root)
        if len(placeholders) != 1:
            raise PlaceholderMissingError(path, len(placeholders))

        element, attr = placeholders[0]
        declared = (_parse_length(element.get("width")), _parse_length(element.get("height")))
        if None not in declared and declared != (float(image.width), float(image.height)):
            logger.debug(
                "Placeholder in %s declares %sx%s; embedding %sx%s",
                path.name,
                declared[0],
                declared[1],
                image.width,
                image.height,
            )
        element.set(attr, image.to_data_uri())

        width, height = intrinsic_size(root)
        return ComposedDocument(
            text=ET.tostring(root, encoding="unicode"),
            template=path,
            width=width,
            height=height,
        )
