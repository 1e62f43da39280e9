"""
Stage instrumentation.

Wraps a pipeline stage and records how long it took (and optionally its
peak traced memory) into a StageTiming the caller keeps.
"""

import logging
import time
import tracemalloc
from contextlib import contextmanager
from typing import Iterator

from movie_index.models.report import StageTiming

logger = logging.getLogger(__name__)


@contextmanager
def measure_stage(stage: str, track_memory: bool = False) -> Iterator[StageTiming]:
    """
    Measure the block as one pipeline stage.

    The yielded StageTiming is filled in when the block exits; the block may
    set item_count itself.

    Args:
        stage: Stage name stored on the timing
        track_memory: Record peak allocated memory with tracemalloc
    """
    timing = StageTiming(stage=stage)
    started_tracing = False

    if track_memory:
        if tracemalloc.is_tracing():
            tracemalloc.reset_peak()
        else:
            tracemalloc.start()
            started_tracing = True

    start = time.perf_counter()
    try:
        yield timing
    finally:
        timing.elapsed_seconds = time.perf_counter() - start
        if track_memory:
            _, peak = tracemalloc.get_traced_memory()
            timing.peak_memory_bytes = peak
            if started_tracing:
                tracemalloc.stop()
        logger.debug(f"Stage {stage} took {timing.elapsed_seconds:.4f}s")
