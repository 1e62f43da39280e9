"""
Unit tests for the Lookup Engine.
"""

import threading

import pytest
from movie_index.models.movie import Movie
from movie_index.stages.lookup import binary_search, concurrent_search, search_partition


@pytest.fixture
def sorted_movies():
    titles = sorted(f"Title {i:04d}" for i in range(0, 1000, 3))
    return [Movie(f"tt{i:07d}", t, 6.5, i, "Drama") for i, t in enumerate(titles)]


@pytest.fixture
def small_movies():
    titles = ["Alien", "Brazil", "Casablanca", "Dune"]
    return [Movie(f"tt000000{i}", t, 7.0, 10, "Sci-Fi") for i, t in enumerate(titles)]


def test_binary_search_finds_every_title(sorted_movies):
    """Test each present title is found."""
    for movie in sorted_movies:
        assert binary_search(sorted_movies, movie.title) is movie


def test_binary_search_absent_titles(sorted_movies):
    """Test absent titles return None."""
    assert binary_search(sorted_movies, "Title 0001") is None
    assert binary_search(sorted_movies, "Aaa") is None
    assert binary_search(sorted_movies, "Zzz") is None
    assert binary_search(sorted_movies, "") is None


def test_binary_search_is_case_sensitive(small_movies):
    """Test sequential lookup requires the exact title."""
    assert binary_search(small_movies, "casablanca") is None
    assert binary_search(small_movies, "Casablanca").title == "Casablanca"


def test_binary_search_empty_collection():
    """Test searching nothing finds nothing."""
    assert binary_search([], "Alien") is None


def test_search_partition_bounds(small_movies):
    """Test partition search only looks inside its range."""
    assert search_partition(small_movies, 0, 2, "Dune") is None
    assert search_partition(small_movies, 2, 4, "Dune").title == "Dune"


def test_search_partition_case_insensitive_match(small_movies):
    """Test equality ignores case when the search path reaches the title."""
    movie = search_partition(small_movies, 2, 3, "CASABLANCA")

    assert movie is not None
    assert movie.title == "Casablanca"


def test_search_partition_simple_case_folding():
    """Test case-insensitive matching maps characters one-to-one."""
    movies = [Movie("tt0000001", "Straße", 7.0, 10, "Drama")]

    assert search_partition(movies, 0, 1, "STRASSE") is None
    assert search_partition(movies, 0, 1, "STRAßE").title == "Straße"
    assert search_partition(movies, 0, 1, "straße").title == "Straße"


def test_search_partition_cancelled(small_movies):
    """Test a set cancel event stops the search."""
    cancel = threading.Event()
    cancel.set()

    assert search_partition(small_movies, 0, 4, "Alien", cancel=cancel) is None


def test_concurrent_search_finds_every_title(sorted_movies):
    """Test each present title is found across partitions."""
    for movie in sorted_movies[::7]:
        found = concurrent_search(sorted_movies, movie.title, partitions=4)
        assert found is movie


def test_concurrent_search_absent(sorted_movies):
    """Test an absent title returns None."""
    assert concurrent_search(sorted_movies, "Title 0001") is None
    assert concurrent_search(sorted_movies, "Nothing Like It") is None


def test_concurrent_search_case_insensitive(small_movies):
    """Test single-element partitions match regardless of case."""
    movie = concurrent_search(small_movies, "casablanca", partitions=4)

    assert movie is not None
    assert movie.title == "Casablanca"


def test_concurrent_search_more_partitions_than_movies(small_movies):
    """Test empty partitions are harmless."""
    assert concurrent_search(small_movies, "Brazil", partitions=16).title == "Brazil"
    assert concurrent_search([], "Brazil", partitions=4) is None


def test_concurrent_search_invalid_partitions(small_movies):
    """Test partition counts below 1 are rejected."""
    with pytest.raises(ValueError):
        concurrent_search(small_movies, "Alien", partitions=0)


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
