"""
Record Join/Filter Pipeline.

Filters the titles dataset down to rated movies and joins each row with its
rating. The file is split into contiguous chunks scanned by a fixed pool of
worker threads; a single consumer merges their output into the collection.
"""

import logging
import queue
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Union

from movie_index.models.movie import Movie
from movie_index.models.rating import RatingInfo
from movie_index.utils.tsv import partition_bounds, read_lines, split_fields
import config.settings as settings

logger = logging.getLogger(__name__)

# Put by each worker after its chunk, even when the chunk failed
_WORKER_DONE = object()


def parse_title_row(
    line: str,
    ratings: Mapping[str, RatingInfo],
    category: str = settings.MOVIE_CATEGORY,
    min_fields: int = settings.MIN_TITLE_FIELDS
) -> Optional[Movie]:
    """
    Apply the row rules to one titles line.

    Columns: [identifier, category, title, 5 unused, genres, ...]

    Returns:
        Movie if the row is long enough, is a movie and has a rating,
        otherwise None
    """
    fields = split_fields(line)
    if len(fields) < min_fields:
        return None
    if fields[1] != category:
        return None

    rating = ratings.get(fields[0])
    if rating is None:
        return None

    return Movie.from_rating(
        title_id=fields[0],
        title=fields[2],
        genres=fields[8],
        rating=rating
    )


def filter_chunk(
    lines: Iterable[str],
    ratings: Mapping[str, RatingInfo],
    category: str = settings.MOVIE_CATEGORY,
    min_fields: int = settings.MIN_TITLE_FIELDS
) -> Iterator[Movie]:
    """Yield a Movie for every line in the chunk that passes the row rules."""
    for line in lines:
        movie = parse_title_row(line, ratings, category, min_fields)
        if movie is not None:
            yield movie


class MovieJoinPipeline:
    """
    Joins the titles dataset against a rating index.

    Flow:
    1. Read the whole titles file into memory
    2. Partition lines into worker_count contiguous chunks
    3. Workers filter/join their chunk and put Movies on a shared queue
    4. The calling thread drains the queue into a dict keyed by identifier
    """

    def __init__(
        self,
        worker_count: int = settings.INGEST_WORKERS,
        category: str = settings.MOVIE_CATEGORY,
        min_fields: int = settings.MIN_TITLE_FIELDS,
        queue_maxsize: int = settings.JOIN_QUEUE_MAXSIZE,
        has_header: bool = settings.INPUT_HAS_HEADER
    ):
        """
        Initialize join pipeline.

        Args:
            worker_count: Number of worker threads (and chunks)
            category: Required value of the category column
            min_fields: Rows with fewer tab-separated fields are skipped
            queue_maxsize: Capacity of the worker -> consumer queue (0 = unbounded)
            has_header: Skip the first line of the titles file

        Raises:
            ValueError: If worker_count < 1
        """
        if worker_count < 1:
            raise ValueError(f"Invalid worker count: {worker_count}. Must be >= 1")

        self.worker_count = worker_count
        self.category = category
        self.min_fields = min_fields
        self.queue_maxsize = queue_maxsize
        self.has_header = has_header

    def run(
        self,
        file_path: Union[str, Path],
        ratings: Mapping[str, RatingInfo]
    ) -> Dict[str, Movie]:
        """
        Build the movie collection from a titles file.

        Args:
            file_path: Path to the titles TSV
            ratings: Rating index, read-only for the duration of the join

        Returns:
            Dict mapping identifier to Movie (last write wins on duplicates)

        Raises:
            DatasetReadError: If the file cannot be opened or read.
                Raised before any worker starts.
        """
        lines = read_lines(file_path, skip_header=self.has_header)
        logger.info(
            f"Joining {len(lines)} title rows against {len(ratings)} ratings "
            f"with {self.worker_count} workers"
        )
        return self.join_lines(lines, ratings)

    def join_lines(
        self,
        lines: List[str],
        ratings: Mapping[str, RatingInfo]
    ) -> Dict[str, Movie]:
        """Join already-materialized title lines against the rating index."""
        movies: Dict[str, Movie] = {}
        results: "queue.Queue" = queue.Queue(maxsize=self.queue_maxsize)
        stop = threading.Event()
        bounds = partition_bounds(len(lines), self.worker_count)

        with ThreadPoolExecutor(
            max_workers=self.worker_count,
            thread_name_prefix="join-worker"
        ) as executor:
            futures = [
                executor.submit(self._scan_chunk, lines[start:stop_index], ratings, results, stop)
                for start, stop_index in bounds
            ]

            # Stream results while workers are still producing
            finished = 0
            try:
                while finished < len(futures):
                    item = results.get()
                    if item is _WORKER_DONE:
                        finished += 1
                        continue
                    movies[item.title_id] = item
            except BaseException:
                # Unblock workers stuck on a full queue so the pool can shut down
                logger.warning("Join interrupted, stopping workers")
                stop.set()
                while finished < len(futures):
                    if results.get() is _WORKER_DONE:
                        finished += 1
                raise

        # Surface any worker failure now that the queue is drained
        for future in futures:
            future.result()

        logger.info(f"Joined {len(movies)} movies")
        return movies

    def _scan_chunk(
        self,
        chunk: List[str],
        ratings: Mapping[str, RatingInfo],
        results: "queue.Queue",
        stop: threading.Event
    ) -> int:
        """Worker body: filter one chunk onto the shared queue until stopped."""
        produced = 0
        try:
            for movie in filter_chunk(chunk, ratings, self.category, self.min_fields):
                if stop.is_set():
                    break
                results.put(movie)
                produced += 1
        finally:
            results.put(_WORKER_DONE)

        logger.debug(f"Worker produced {produced} movies from {len(chunk)} rows")
        return produced


def join_movies(
    file_path: Union[str, Path],
    ratings: Mapping[str, RatingInfo],
    worker_count: int = settings.INGEST_WORKERS,
    has_header: bool = settings.INPUT_HAS_HEADER
) -> Dict[str, Movie]:
    """Join a titles file against a rating index with the default row rules."""
    pipeline = MovieJoinPipeline(worker_count=worker_count, has_header=has_header)
    return pipeline.run(file_path, ratings)


# Design Rationale and Trade-offs:
#
# 1. Threads for the worker pool
#    - Workers only read their own lines and a shared read-only dict
#    - No locking needed; the dict being built is touched by the consumer only
#    - Trade-off: The GIL serializes the parsing, so speedup is limited
#
# 2. One completion marker per worker instead of joining the pool first
#    - The consumer can drain while producers run (bounded queue never fills up)
#    - The consumer stops exactly when the last worker is done
#
# 3. Whole-file read before partitioning
#    - Chunks need known boundaries before any worker starts
#    - Trade-off: Peak memory holds every line of the titles file once
