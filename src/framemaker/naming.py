"""Output naming utilities."""

from __future__ import annotations

from pathlib import Path

DEFAULT_SUFFIX = "-framed"
OUTPUT_EXTENSION = ".png"


def prepare_filename(input_path: Path | str, suffix: str = DEFAULT_SUFFIX) -> str:
    """Return ``<stem><suffix>.png`` for ``input_path``."""

    stem = Path(input_path).stem
    return f"{stem}{suffix}{OUTPUT_EXTENSION}"


def derive_output_path(input_path: Path | str, output_dir: Path | str, suffix: str = DEFAULT_SUFFIX) -> Path:
    return Path(output_dir) / prepare_filename(input_path, suffix)
