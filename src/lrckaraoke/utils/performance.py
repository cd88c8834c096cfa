"""Stage timing for the karaoke pipeline."""

import time
from typing import Dict, Optional

from .logging import get_logger

logger = get_logger(__name__)


class PerformanceMonitor:
    """Time one pipeline stage, optionally recording it into ``timings``.

    A stage is recorded even when it fails, so a run that aborts still
    shows where its time went.
    """

    def __init__(self, stage: str, timings: Optional[Dict[str, float]] = None):
        self.stage = stage
        self.timings = timings
        self.started = 0.0
        self.duration = 0.0

    def __enter__(self) -> "PerformanceMonitor":
        self.started = time.perf_counter()
        logger.info(f"🚀 {self.stage}...")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.duration = time.perf_counter() - self.started
        if self.timings is not None:
            self.timings[self.stage] = self.duration

        if exc_type is None:
            logger.info(f"✅ {self.stage} done in {self.duration:.2f}s")
        else:
            logger.error(f"❌ {self.stage} failed after {self.duration:.2f}s")


def format_timings(timings: Dict[str, float]) -> str:
    """One-line summary such as ``audio download 3.10s, video render 12.40s``."""
    if not timings:
        return "no stages timed"
    parts = [f"{stage} {seconds:.2f}s" for stage, seconds in timings.items()]
    total = sum(timings.values())
    return f"{', '.join(parts)} (total {total:.2f}s)"
