"""Batch driver that frames every screenshot matched by an input pattern."""

from __future__ import annotations

import glob
import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor
from functools import reduce
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from src.framemaker.errors import (
    FramingError,
    FramingJobError,
    NoMatchingInputError,
    TemplateError,
)
from src.framemaker.frames.registry import FrameRegistry
from src.framemaker.models import BatchReport, JobOutcome, ScreenshotJob
from src.framemaker.naming import DEFAULT_SUFFIX, derive_output_path
from src.framemaker.pipeline import FramingPipeline

logger = logging.getLogger(__name__)

__all__ = ["BatchRunner", "resolve_inputs"]

OutcomeCallback = Callable[[JobOutcome], None]


def resolve_inputs(pattern: str) -> List[Path]:
    """
    Expand ``pattern`` into the screenshot files it names.

    Glob matches (``**`` included) are filtered to regular files, made
    absolute, de-duplicated and sorted. When nothing matches, ``pattern`` is
    tried as a literal path so shells that already expanded the glob, or names
    containing glob metacharacters, still work.

    Raises:
        NoMatchingInputError: If neither the glob nor the literal path yields a file.
    """

    matches = {
        Path(candidate).resolve()
        for candidate in glob.glob(pattern, recursive=True)
        if Path(candidate).is_file()
    }
    if matches:
        return sorted(matches)
    literal = Path(pattern)
    if literal.is_file():
        return [literal.resolve()]
    raise NoMatchingInputError(pattern)


def _cause_of(error: Exception) -> BaseException:
    if isinstance(error, FramingJobError):
        return error.cause
    return error


class BatchRunner:
    """Apply a FramingPipeline to many screenshots, isolating per-file failures."""

    def __init__(
        self,
        registry: FrameRegistry,
        pipeline: FramingPipeline | None = None,
        *,
        workers: int = 1,
        suffix: str = DEFAULT_SUFFIX,
        on_outcome: Optional[OutcomeCallback] = None,
        on_start: Optional[Callable[[int], None]] = None,
    ) -> None:
        if workers < 1:
            raise ValueError("workers must be >= 1")
        self.registry = registry
        self.pipeline = pipeline or FramingPipeline(registry)
        self.workers = workers
        self.suffix = suffix
        self.on_outcome = on_outcome
        self.on_start = on_start

    def plan_jobs(self, inputs: Iterable[Path], output_dir: Path, frame_name: str) -> List[ScreenshotJob]:
        return [
            ScreenshotJob(
                input_path=path,
                output_path=derive_output_path(path, output_dir, self.suffix),
                frame_name=frame_name,
            )
            for path in inputs
        ]

    def run_all(self, pattern: str, output_dir: Path | str, frame_name: str) -> BatchReport:
        """
        Frame every file matched by ``pattern`` into ``output_dir``.

        UnknownFrameTypeError and NoMatchingInputError abort before anything is
        written. Template defects abort the remaining batch. Any other per-file
        failure is recorded in the returned report and processing continues.
        """

        self.registry.lookup(frame_name)
        inputs = resolve_inputs(pattern)
        out_dir = Path(output_dir)
        try:
            out_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FramingError(
                f"Unable to create output directory '{out_dir}': {exc.strerror or exc}"
            ) from exc

        jobs = self.plan_jobs(inputs, out_dir, frame_name)
        logger.info("Found %d screenshot(s)", len(jobs))
        if self.on_start is not None:
            self.on_start(len(jobs))
        outcomes = self._execute_all(jobs)
        return reduce(lambda report, outcome: report.record(outcome), outcomes, BatchReport())

    def _execute_all(self, jobs: Sequence[ScreenshotJob]) -> List[JobOutcome]:
        if self.workers == 1 or len(jobs) <= 1:
            return [self._execute(job) for job in jobs]

        outcomes: List[JobOutcome] = []
        with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="framemaker") as executor:
            futures: List[Future[JobOutcome]] = [executor.submit(self._execute, job) for job in jobs]
            try:
                for future in futures:
                    outcomes.append(future.result())
            except Exception:  # noqa: BLE001
                for future in futures:
                    future.cancel()
                raise
        return outcomes

    def _execute(self, job: ScreenshotJob) -> JobOutcome:
        started = time.perf_counter()
        try:
            raster = self.pipeline.run(job)
        except FramingError as exc:
            if isinstance(_cause_of(exc), TemplateError):
                raise
            logger.debug("Framing failed for %s", job.input_path, exc_info=True)
            outcome = JobOutcome(job=job, error=exc, elapsed=time.perf_counter() - started)
        else:
            outcome = JobOutcome(job=job, size=raster.size, elapsed=time.perf_counter() - started)
        if self.on_outcome is not None:
            self.on_outcome(outcome)
        return outcome
