"""Device frame presets and the read-only registry that serves them."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from src.framemaker.errors import FrameConfigError, UnknownFrameTypeError

__all__ = [
    "FRAME_PRESETS",
    "TEMPLATE_DIR",
    "FrameConfig",
    "FrameRegistry",
    "default_registry",
]

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"


@dataclass(frozen=True)
class FrameConfig:
    """
    Geometry and template of a single device frame.

    Attributes:
        name (str): Unique preset key, e.g. ``"iphone"``.
        template (Path): SVG template holding the screenshot placeholder.
        screen_width (int): Width in pixels the screenshot must fill.
        screen_height (int): Height in pixels the screenshot must fill.
        canvas_width (int): Width in pixels of the rendered mockup.
        canvas_height (int): Height in pixels of the rendered mockup.
    """

    name: str
    template: Path
    screen_width: int
    screen_height: int
    canvas_width: int
    canvas_height: int

    @property
    def screen_size(self) -> tuple[int, int]:
        return (self.screen_width, self.screen_height)

    @property
    def canvas_size(self) -> tuple[int, int]:
        return (self.canvas_width, self.canvas_height)

    def validate(self) -> None:
        """Raise FrameConfigError unless the screen region fits inside the canvas."""

        if not self.name:
            raise FrameConfigError("Frame presets require a name")
        dimensions = (self.screen_width, self.screen_height, self.canvas_width, self.canvas_height)
        if any(int(value) <= 0 for value in dimensions):
            raise FrameConfigError(f"Frame '{self.name}' dimensions must be positive")
        if self.screen_width > self.canvas_width or self.screen_height > self.canvas_height:
            raise FrameConfigError(
                f"Frame '{self.name}' screen {self.screen_width}x{self.screen_height} "
                f"exceeds canvas {self.canvas_width}x{self.canvas_height}"
            )


FRAME_PRESETS: tuple[FrameConfig, ...] = (
    FrameConfig(
        name="iphone",
        template=TEMPLATE_DIR / "iphone.svg",
        screen_width=710,
        screen_height=1536,
        canvas_width=750,
        canvas_height=1576,
    ),
    FrameConfig(
        name="ipad",
        template=TEMPLATE_DIR / "ipad.svg",
        screen_width=1024,
        screen_height=1366,
        canvas_width=1060,
        canvas_height=1400,
    ),
)


class FrameRegistry:
    """Immutable name -> FrameConfig mapping built once at startup."""

    def __init__(self, presets: Iterable[FrameConfig]) -> None:
        table: dict[str, FrameConfig] = {}
        for preset in presets:
            preset.validate()
            if preset.name in table:
                raise FrameConfigError(f"Duplicate frame preset: {preset.name}")
            table[preset.name] = preset
        self._presets: Mapping[str, FrameConfig] = MappingProxyType(table)

    def lookup(self, name: str) -> FrameConfig:
        try:
            return self._presets[name]
        except KeyError:
            raise UnknownFrameTypeError(name, self._presets.keys()) from None

    def names(self) -> tuple[str, ...]:
        return tuple(self._presets)

    def __contains__(self, name: object) -> bool:
        return name in self._presets

    def __iter__(self) -> Iterator[FrameConfig]:
        return iter(self._presets.values())

    def __len__(self) -> int:
        return len(self._presets)


def default_registry() -> FrameRegistry:
    """Return a registry populated with the built-in device presets."""

    return FrameRegistry(FRAME_PRESETS)
