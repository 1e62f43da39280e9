"""
Pipeline Orchestrator.

Runs the build stages in order and serves lookups over the result.
"""

import logging
import time
from pathlib import Path
from typing import List, Optional, Union

from movie_index.models.movie import Movie
from movie_index.models.report import BuildReport, SearchResult
from movie_index.stages.join import MovieJoinPipeline
from movie_index.stages.lookup import binary_search, concurrent_search
from movie_index.stages.ordering import SORT_ALGORITHMS, movies_from_collection, sort_movies
from movie_index.stages.ratings import RatingIndexBuilder
from movie_index.utils.instrumentation import measure_stage
import config.settings as settings

logger = logging.getLogger(__name__)


class MovieIndexOrchestrator:
    """
    Builds the sorted movie collection and answers title lookups.

    Build flow:
    1. Ratings → 2. Join → 3. Collect → 4. Sort

    Every stage is timed; timings come back in the BuildReport.
    """

    def __init__(
        self,
        worker_count: int = settings.INGEST_WORKERS,
        sort_algorithm: str = settings.SORT_ALGORITHM,
        has_header: bool = settings.INPUT_HAS_HEADER,
        use_concurrent_search: bool = settings.USE_CONCURRENT_SEARCH,
        search_partitions: int = settings.SEARCH_PARTITIONS,
        track_memory: bool = settings.TRACK_MEMORY
    ):
        """
        Initialize pipeline orchestrator.

        Args:
            worker_count: Join worker threads
            sort_algorithm: "quicksort" or "heapsort"
            has_header: Skip the first line of both input files
            use_concurrent_search: Search partitions in parallel in search()
            search_partitions: Partition count for concurrent search
            track_memory: Record peak memory per stage

        Raises:
            ValueError: If the sort algorithm is unknown
        """
        if sort_algorithm not in SORT_ALGORITHMS:
            raise ValueError(
                f"Unknown sort algorithm: {sort_algorithm}. "
                f"Must be one of {sorted(SORT_ALGORITHMS)}"
            )

        self.worker_count = worker_count
        self.sort_algorithm = sort_algorithm
        self.use_concurrent_search = use_concurrent_search
        self.search_partitions = search_partitions
        self.track_memory = track_memory

        self.rating_builder = RatingIndexBuilder(has_header=has_header)
        self.join_pipeline = MovieJoinPipeline(
            worker_count=worker_count,
            has_header=has_header
        )

        self.movies: List[Movie] = []

    def build(
        self,
        ratings_path: Union[str, Path],
        titles_path: Union[str, Path]
    ) -> BuildReport:
        """
        Run all build stages.

        Args:
            ratings_path: Ratings TSV
            titles_path: Titles TSV

        Returns:
            BuildReport with the sorted movies and per-stage timings

        Raises:
            DatasetReadError: If either input cannot be read
        """
        report = BuildReport(
            movies=[],
            sort_algorithm=self.sort_algorithm,
            worker_count=self.worker_count
        )

        # STAGE 1: Rating index
        with measure_stage("ratings", self.track_memory) as timing:
            ratings = self.rating_builder.build(ratings_path)
            timing.item_count = len(ratings)
        report.timings.append(timing)

        # STAGE 2: Join/filter
        with measure_stage("join", self.track_memory) as timing:
            collection = self.join_pipeline.run(titles_path, ratings)
            timing.item_count = len(collection)
        report.timings.append(timing)

        # Rating index is not needed past the join
        del ratings

        # STAGE 3: Keyed map → list
        with measure_stage("collect", self.track_memory) as timing:
            movies = movies_from_collection(collection)
            timing.item_count = len(movies)
        report.timings.append(timing)
        del collection

        # STAGE 4: Ordering
        with measure_stage("sort", self.track_memory) as timing:
            sort_movies(movies, self.sort_algorithm)
            timing.item_count = len(movies)
        report.timings.append(timing)

        self.movies = movies
        report.movies = movies

        logger.info(
            f"Build complete: {len(movies)} movies in {report.total_seconds:.3f}s"
        )
        return report

    def lookup(self, title: str) -> Optional[Movie]:
        """Look up a title in the built collection."""
        return lookup(
            self.movies,
            title,
            concurrent=self.use_concurrent_search,
            partitions=self.search_partitions
        )

    def search(self, title: str) -> SearchResult:
        """Timed lookup of a title in the built collection."""
        start = time.perf_counter()
        movie = self.lookup(title)
        elapsed = time.perf_counter() - start

        strategy = "concurrent" if self.use_concurrent_search else "sequential"
        logger.debug(f"Search for {title!r} ({strategy}) found={movie is not None}")
        return SearchResult(
            query=title,
            movie=movie,
            elapsed_seconds=elapsed,
            strategy=strategy
        )


def build(
    ratings_path: Union[str, Path],
    titles_path: Union[str, Path],
    worker_count: int = settings.INGEST_WORKERS,
    sort_algorithm: str = settings.SORT_ALGORITHM
) -> BuildReport:
    """Build the sorted movie collection from the two datasets."""
    orchestrator = MovieIndexOrchestrator(
        worker_count=worker_count,
        sort_algorithm=sort_algorithm
    )
    return orchestrator.build(ratings_path, titles_path)


def lookup(
    collection: List[Movie],
    title: str,
    concurrent: bool = False,
    partitions: int = settings.SEARCH_PARTITIONS
) -> Optional[Movie]:
    """
    Look up a title in a sorted collection.

    Returns:
        Matching Movie, or None when the title is not present
    """
    if concurrent:
        return concurrent_search(collection, title, partitions=partitions)
    return binary_search(collection, title)


# Design Rationale and Trade-offs:
#
# 1. Timings returned in the report instead of printed
#    - The CLI decides how to show them; tests read them directly
#
# 2. Rating index dropped after the join
#    - Nothing downstream reads it
#    - Trade-off: A rebuild re-reads the ratings file
