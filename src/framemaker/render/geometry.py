from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from src.framemaker.errors import FramingError

__all__ = [
    "CoverPlan",
    "format_dimensions",
    "plan_cover",
    "split_overflow",
]


@dataclass(frozen=True)
class CoverPlan:
    """
    Resolved scale/crop plan that makes a source image fill a target rectangle.

    Attributes:
        source (tuple[int, int]): Source width and height.
        scale (float): Uniform scale factor applied to both axes.
        scaled (tuple[int, int]): Dimensions after scaling, never smaller than ``target``.
        crop (tuple[int, int, int, int]): Pixels trimmed from left, top, right, bottom after scaling.
        target (tuple[int, int]): Final output dimensions.
    """

    source: Tuple[int, int]
    scale: float
    scaled: Tuple[int, int]
    crop: Tuple[int, int, int, int]
    target: Tuple[int, int]

    @property
    def box(self) -> Tuple[int, int, int, int]:
        """Crop rectangle in scaled coordinates, as ``(left, upper, right, lower)``."""

        left, top, _, _ = self.crop
        return (left, top, left + self.target[0], top + self.target[1])


def format_dimensions(width: int, height: int) -> str:
    """Return width × height using integer values."""

    return f"{int(width)} × {int(height)}"


def split_overflow(overflow: int) -> Tuple[int, int]:
    """Split ``overflow`` pixels into centred before/after margins (extra pixel goes after)."""

    if overflow <= 0:
        return (0, 0)
    before = overflow // 2
    return (before, overflow - before)


def plan_cover(
    source_width: int,
    source_height: int,
    target_width: int,
    target_height: int,
) -> CoverPlan:
    """Plan a uniform scale plus centre crop so the source fully covers the target."""

    if source_width <= 0 or source_height <= 0:
        raise FramingError("Source dimensions must be positive")
    if target_width <= 0 or target_height <= 0:
        raise FramingError("Target dimensions must be positive")

    scale = max(target_width / source_width, target_height / source_height)
    scaled_w = max(target_width, int(round(source_width * scale)))
    scaled_h = max(target_height, int(round(source_height * scale)))

    left, right = split_overflow(scaled_w - target_width)
    top, bottom = split_overflow(scaled_h - target_height)

    return CoverPlan(
        source=(int(source_width), int(source_height)),
        scale=scale,
        scaled=(scaled_w, scaled_h),
        crop=(left, top, right, bottom),
        target=(int(target_width), int(target_height)),
    )
