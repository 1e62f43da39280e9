"""
Build and search report models.

Stage measurements are returned to the caller as data instead of being
printed where they are taken.
"""

from dataclasses import dataclass, field
from typing import List, Optional
import pandas as pd

from movie_index.models.movie import Movie

TIMING_COLUMNS = ["stage", "elapsed_seconds", "item_count", "peak_memory_bytes"]


@dataclass
class StageTiming:
    """Wall-clock (and optionally memory) measurement of one pipeline stage."""
    stage: str  # "ratings", "join", "collect" or "sort"
    elapsed_seconds: float = 0.0
    item_count: int = 0  # Entries produced by the stage
    peak_memory_bytes: Optional[int] = None  # Only set when memory tracking is on

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "stage": self.stage,
            "elapsed_seconds": self.elapsed_seconds,
            "item_count": self.item_count,
            "peak_memory_bytes": self.peak_memory_bytes
        }


@dataclass
class BuildReport:
    """
    Output of a full build: the sorted collection plus stage timings.
    """
    movies: List[Movie]  # Sorted by title
    timings: List[StageTiming] = field(default_factory=list)
    sort_algorithm: str = "quicksort"
    worker_count: int = 1

    def timing(self, stage: str) -> Optional[StageTiming]:
        """Return the timing recorded for a stage, or None."""
        for timing in self.timings:
            if timing.stage == stage:
                return timing
        return None

    @property
    def total_seconds(self) -> float:
        return sum(t.elapsed_seconds for t in self.timings)

    def timings_frame(self) -> pd.DataFrame:
        """
        Stage timings as a table, one row per stage in build order.

        The peak_memory_bytes column is dropped when memory was not tracked.
        """
        df = pd.DataFrame(
            [t.to_dict() for t in self.timings],
            columns=TIMING_COLUMNS
        )
        if df["peak_memory_bytes"].isna().all():
            df = df.drop(columns=["peak_memory_bytes"])
        return df


@dataclass
class SearchResult:
    """
    Outcome of a single title lookup.

    A miss is movie=None, never a placeholder Movie.
    """
    query: str
    movie: Optional[Movie]
    elapsed_seconds: float
    strategy: str  # "sequential" or "concurrent"

    @property
    def found(self) -> bool:
        return self.movie is not None
