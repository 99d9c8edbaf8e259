"""Device frame presets."""

from .registry import FRAME_PRESETS, TEMPLATE_DIR, FrameConfig, FrameRegistry, default_registry

__all__ = [
    "FRAME_PRESETS",
    "TEMPLATE_DIR",
    "FrameConfig",
    "FrameRegistry",
    "default_registry",
]
