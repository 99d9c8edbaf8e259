from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

import src.framemaker.pipeline as pipeline_module
from src.framemaker.frames.registry import FrameRegistry, default_registry
from tests.helpers.fakes import FakeRasterizer
from tests.helpers.images import write_png


@pytest.fixture
def registry() -> FrameRegistry:
    """Provide the built-in device presets."""

    return default_registry()


@pytest.fixture
def make_png(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory that writes solid-colour PNGs under ``tmp_path``."""

    def _make(name: str, size: tuple[int, int] = (1200, 2600), color: tuple[int, int, int] = (40, 120, 200)) -> Path:
        return write_png(tmp_path / name, size, color)

    return _make


@pytest.fixture
def fake_rasterizer(monkeypatch: pytest.MonkeyPatch) -> FakeRasterizer:
    """Swap the pipeline's default Rasterizer for a cairo-free double."""

    fake = FakeRasterizer()
    monkeypatch.setattr(pipeline_module, "Rasterizer", lambda: fake)
    return fake


@pytest.fixture
def runner() -> CliRunner:
    """Provide a Click runner configured for CLI smoke tests."""

    return CliRunner()
