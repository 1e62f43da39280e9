"""
Unit tests for TSV helpers.
"""

import pytest
from movie_index.errors import DatasetReadError
from movie_index.utils.tsv import iter_lines, partition_bounds, read_lines, split_fields


def test_split_fields():
    """Test tab splitting keeps empty fields and ignores quotes."""
    assert split_fields("a\tb\t\tc") == ["a", "b", "", "c"]
    assert split_fields('"quoted\ttitle"') == ['"quoted', 'title"']
    assert split_fields("") == [""]


def test_read_lines_strips_terminators(tmp_path):
    """Test lines come back without newline characters."""
    path = tmp_path / "data.tsv"
    path.write_bytes(b"one\ttwo\r\nthree\n\nfour")

    assert read_lines(path) == ["one\ttwo", "three", "", "four"]


def test_read_lines_keeps_inner_carriage_returns(tmp_path):
    """Test only a CR right before LF or at EOF ends a line."""
    path = tmp_path / "data.tsv"
    path.write_bytes(b"tt1\tTitle\rPart Two\tDrama\r\ntt2\tx\r\r\ntt3\ty\r")

    assert read_lines(path) == ["tt1\tTitle\rPart Two\tDrama", "tt2\tx\r", "tt3\ty"]


def test_read_lines_skip_header(tmp_path):
    """Test the header flag drops only the first line."""
    path = tmp_path / "data.tsv"
    path.write_text("header\nrow1\nrow2\n", encoding="utf-8")

    assert read_lines(path, skip_header=True) == ["row1", "row2"]
    assert read_lines(path, skip_header=False) == ["header", "row1", "row2"]


def test_read_lines_replaces_bad_bytes(tmp_path):
    """Test invalid UTF-8 doesn't abort the read."""
    path = tmp_path / "data.tsv"
    path.write_bytes(b"tt1\tCaf\xe9\n")

    lines = read_lines(path)

    assert lines == ["tt1\tCaf\ufffd"]


def test_iter_lines_missing_file(tmp_path):
    """Test a missing file raises DatasetReadError when iterated."""
    with pytest.raises(DatasetReadError, match="missing.tsv"):
        list(iter_lines(tmp_path / "missing.tsv"))


def test_read_lines_directory(tmp_path):
    """Test a directory path is reported as a read failure."""
    with pytest.raises(DatasetReadError):
        read_lines(tmp_path)


def test_partition_bounds_cover_range():
    """Test partitions are contiguous and cover every index once."""
    for length in (0, 1, 5, 16, 17, 100):
        for parts in (1, 2, 3, 4, 16):
            bounds = partition_bounds(length, parts)

            assert len(bounds) == parts
            assert bounds[0][0] == 0
            assert bounds[-1][1] == length
            for (_, stop), (start, _) in zip(bounds, bounds[1:]):
                assert stop == start


def test_partition_bounds_nearly_equal():
    """Test chunk sizes differ by at most one."""
    sizes = [stop - start for start, stop in partition_bounds(10, 4)]

    assert sizes == [2, 3, 2, 3]
    assert max(sizes) - min(sizes) <= 1


def test_partition_bounds_invalid():
    """Test zero partitions are rejected."""
    with pytest.raises(ValueError):
        partition_bounds(10, 0)


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
