"""
Lookup Engine.

Exact-title search over a collection already sorted by title.
A miss is returned as None.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Optional

from movie_index.models.movie import Movie
from movie_index.utils.tsv import partition_bounds
import config.settings as settings

logger = logging.getLogger(__name__)


def binary_search(movies: List[Movie], title: str) -> Optional[Movie]:
    """
    Find a movie by exact (case-sensitive) title.

    Args:
        movies: Collection sorted by title
        title: Title to look up

    Returns:
        Matching Movie, or None if no movie has this title
    """
    low, high = 0, len(movies) - 1

    while low <= high:
        mid = (low + high) // 2
        current = movies[mid].title
        if current == title:
            return movies[mid]
        elif current < title:
            low = mid + 1
        else:
            high = mid - 1

    return None


def search_partition(
    movies: List[Movie],
    start: int,
    stop: int,
    title: str,
    cancel: Optional[threading.Event] = None
) -> Optional[Movie]:
    """
    Binary search within movies[start:stop].

    Equality ignores case (one-to-one lowercasing, so "ß" does not match
    "SS"), narrowing does not. A title differing from the query only in case
    is therefore found only if the search path lands on it; exact matches
    are always found.

    Args:
        movies: Collection sorted by title
        start: First index of the partition
        stop: One past the last index of the partition
        title: Title to look up
        cancel: Stops the search early once set

    Returns:
        Matching Movie, or None if not found (or cancelled)
    """
    wanted = title.lower()
    low, high = start, stop - 1

    while low <= high:
        if cancel is not None and cancel.is_set():
            return None
        mid = (low + high) // 2
        current = movies[mid].title
        if current.lower() == wanted:
            return movies[mid]
        elif current < title:
            low = mid + 1
        else:
            high = mid - 1

    return None


def concurrent_search(
    movies: List[Movie],
    title: str,
    partitions: int = settings.SEARCH_PARTITIONS
) -> Optional[Movie]:
    """
    Search contiguous partitions of the collection in parallel.

    The first partition to report a match wins; the others are cancelled.

    Args:
        movies: Collection sorted by title
        title: Title to look up (matched case-insensitively)
        partitions: Number of contiguous ranges searched concurrently

    Returns:
        Matching Movie, or None if no partition found one

    Raises:
        ValueError: If partitions < 1
    """
    bounds = partition_bounds(len(movies), partitions)
    found = threading.Event()

    def search_worker(start: int, stop: int) -> Optional[Movie]:
        movie = search_partition(movies, start, stop, title, cancel=found)
        if movie is not None:
            found.set()
        return movie

    with ThreadPoolExecutor(
        max_workers=partitions,
        thread_name_prefix="search-worker"
    ) as executor:
        futures = [executor.submit(search_worker, start, stop) for start, stop in bounds]

        for future in as_completed(futures):
            movie = future.result()
            if movie is not None:
                for pending in futures:
                    pending.cancel()
                return movie

    logger.debug(f"No partition matched {title!r}")
    return None
