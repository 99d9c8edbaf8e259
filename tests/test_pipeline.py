from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from src.framemaker.errors import (
    FramingJobError,
    ImageDecodeError,
    OutputWriteError,
    UnknownFrameTypeError,
)
from src.framemaker.frames.registry import FrameRegistry
from src.framemaker.models import ScreenshotJob
from src.framemaker.pipeline import FramingPipeline, write_output
from tests.helpers.fakes import FakeRasterizer
from tests.helpers.images import cairo_available, png_size, write_corrupt


def _job(tmp_path: Path, input_path: Path, frame: str = "iphone") -> ScreenshotJob:
    out_dir = tmp_path / "framed"
    out_dir.mkdir(exist_ok=True)
    return ScreenshotJob(
        input_path=input_path,
        output_path=out_dir / f"{input_path.stem}-framed.png",
        frame_name=frame,
    )


def test_pipeline_frames_screenshot_with_fake_renderer(
    tmp_path: Path, registry: FrameRegistry, make_png: Callable[..., Path]
) -> None:
    rasterizer = FakeRasterizer()
    pipeline = FramingPipeline(registry, rasterizer=rasterizer)
    job = _job(tmp_path, make_png("shot.png", (1200, 2600)))

    raster = pipeline.run(job)

    assert raster.size == (750, 1576)
    assert png_size(job.output_path.read_bytes()) == (750, 1576)
    document, width = rasterizer.calls[0]
    assert width == 750
    assert "data:image/png;base64," in document.text
    assert sorted(p.name for p in job.output_path.parent.iterdir()) == ["shot-framed.png"]


def test_pipeline_unknown_frame_fails_before_reading(tmp_path: Path, registry: FrameRegistry) -> None:
    job = _job(tmp_path, tmp_path / "does-not-exist.png", frame="watch")
    with pytest.raises(UnknownFrameTypeError):
        FramingPipeline(registry, rasterizer=FakeRasterizer()).run(job)
    assert not job.output_path.exists()


def test_pipeline_wraps_failures_without_partial_output(tmp_path: Path, registry: FrameRegistry) -> None:
    source = write_corrupt(tmp_path / "broken.png")
    job = _job(tmp_path, source)

    with pytest.raises(FramingJobError) as excinfo:
        FramingPipeline(registry, rasterizer=FakeRasterizer()).run(job)

    assert excinfo.value.input_path == source
    assert isinstance(excinfo.value.cause, ImageDecodeError)
    assert isinstance(excinfo.value.__cause__, ImageDecodeError)
    assert list(job.output_path.parent.iterdir()) == []


def test_pipeline_reports_unwritable_destination(
    tmp_path: Path, registry: FrameRegistry, make_png: Callable[..., Path]
) -> None:
    job = ScreenshotJob(
        input_path=make_png("shot.png", (300, 600)),
        output_path=tmp_path / "missing-dir" / "shot-framed.png",
        frame_name="ipad",
    )
    with pytest.raises(FramingJobError) as excinfo:
        FramingPipeline(registry, rasterizer=FakeRasterizer()).run(job)
    assert isinstance(excinfo.value.cause, OutputWriteError)


def test_write_output_replaces_existing_file(tmp_path: Path) -> None:
    target = tmp_path / "out.png"
    target.write_bytes(b"old")
    write_output(target, b"new")
    assert target.read_bytes() == b"new"
    assert [p.name for p in tmp_path.iterdir()] == ["out.png"]


def test_write_output_uses_distinct_temp_files(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import src.framemaker.pipeline as pipeline_module

    replaced: list[str] = []
    real_replace = pipeline_module.os.replace

    def _record(src: str, dst: Path) -> None:
        replaced.append(src)
        real_replace(src, dst)

    monkeypatch.setattr(pipeline_module.os, "replace", _record)
    target = tmp_path / "out.png"
    write_output(target, b"first")
    write_output(target, b"second")

    assert len(set(replaced)) == 2
    assert all(Path(name).parent == tmp_path for name in replaced)
    assert target.read_bytes() == b"second"
    assert [p.name for p in tmp_path.iterdir()] == ["out.png"]


@pytest.mark.skipif(not cairo_available(), reason="CairoSVG/cairo not available")  # type: ignore[attr-defined]
@pytest.mark.parametrize(("frame", "canvas"), [("iphone", (750, 1576)), ("ipad", (1060, 1400))])
def test_pipeline_renders_canvas_size_and_is_idempotent(
    tmp_path: Path,
    registry: FrameRegistry,
    make_png: Callable[..., Path],
    frame: str,
    canvas: tuple[int, int],
) -> None:
    job = _job(tmp_path, make_png("shot.png", (1200, 2600)), frame=frame)
    pipeline = FramingPipeline(registry)

    first = pipeline.run(job)
    first_bytes = job.output_path.read_bytes()
    second = pipeline.run(job)

    assert first.size == canvas
    assert png_size(first_bytes) == canvas
    assert second.data == first_bytes
    assert job.output_path.read_bytes() == first_bytes
