"""
Ordering Engine.

In-place title ordering of the movie collection. Titles compare as plain
Python strings (code point order), never locale-aware. Neither algorithm is
stable: movies sharing a title may end up in any relative order.
"""

import logging
import random
from typing import Callable, Dict, List, Mapping, Optional

from movie_index.models.movie import Movie

logger = logging.getLogger(__name__)


def movies_from_collection(collection: Mapping[str, Movie]) -> List[Movie]:
    """Flatten the keyed collection into a list (arbitrary order)."""
    return list(collection.values())


def is_sorted_by_title(movies: List[Movie]) -> bool:
    return all(
        movies[i].title <= movies[i + 1].title
        for i in range(len(movies) - 1)
    )


def quicksort(movies: List[Movie], rng: Optional[random.Random] = None) -> None:
    """
    Partition-exchange sort with a random pivot per partition step.

    Expected O(n log n); worst case O(n^2), e.g. when many movies share a
    title, since equal titles all land on one side of the pivot.

    Args:
        movies: List sorted in place
        rng: Pivot source, injectable for reproducible runs
    """
    if rng is None:
        rng = random.Random()
    _quicksort_range(movies, 0, len(movies) - 1, rng)


def _quicksort_range(movies: List[Movie], low: int, high: int, rng: random.Random) -> None:
    # Recurse into the smaller side only; stack depth stays O(log n)
    while low < high:
        pivot = _partition(movies, low, high, rng)
        if pivot - low < high - pivot:
            _quicksort_range(movies, low, pivot - 1, rng)
            low = pivot + 1
        else:
            _quicksort_range(movies, pivot + 1, high, rng)
            high = pivot - 1


def _partition(movies: List[Movie], low: int, high: int, rng: random.Random) -> int:
    pivot_index = rng.randint(low, high)
    movies[pivot_index], movies[high] = movies[high], movies[pivot_index]
    pivot_title = movies[high].title

    store = low
    for i in range(low, high):
        if movies[i].title < pivot_title:
            movies[store], movies[i] = movies[i], movies[store]
            store += 1

    movies[store], movies[high] = movies[high], movies[store]
    return store


def heapsort(movies: List[Movie]) -> None:
    """
    In-place max-heap sort. Guaranteed O(n log n).
    """
    size = len(movies)
    for root in range(size // 2 - 1, -1, -1):
        _sift_down(movies, root, size)

    for end in range(size - 1, 0, -1):
        movies[0], movies[end] = movies[end], movies[0]
        _sift_down(movies, 0, end)


def _sift_down(movies: List[Movie], root: int, size: int) -> None:
    while True:
        child = 2 * root + 1
        if child >= size:
            return
        if child + 1 < size and movies[child].title < movies[child + 1].title:
            child += 1
        if movies[root].title < movies[child].title:
            movies[root], movies[child] = movies[child], movies[root]
            root = child
        else:
            return


SORT_ALGORITHMS: Dict[str, Callable[[List[Movie]], None]] = {
    "quicksort": quicksort,
    "heapsort": heapsort,
}


def sort_movies(
    movies: List[Movie],
    algorithm: str = "quicksort",
    rng: Optional[random.Random] = None
) -> None:
    """
    Sort movies in place by ascending title.

    Args:
        movies: List sorted in place
        algorithm: "quicksort" or "heapsort"
        rng: Pivot source for quicksort (ignored by heapsort)

    Raises:
        ValueError: If the algorithm is unknown
    """
    if algorithm not in SORT_ALGORITHMS:
        raise ValueError(
            f"Unknown sort algorithm: {algorithm}. "
            f"Must be one of {sorted(SORT_ALGORITHMS)}"
        )

    if len(movies) < 2:
        return

    if algorithm == "quicksort":
        quicksort(movies, rng=rng)
    else:
        SORT_ALGORITHMS[algorithm](movies)

    logger.info(f"Sorted {len(movies)} movies with {algorithm}")


# Design Rationale and Trade-offs:
#
# 1. Lomuto partition around a random pivot
#    - Random pivot removes the sorted-input worst case
#    - Trade-off: Runs of equal titles still degrade to O(n^2)
#
# 2. Heapsort as the alternative
#    - O(n log n) regardless of input, no recursion
#    - Trade-off: Poor cache locality, usually slower than quicksort in practice
