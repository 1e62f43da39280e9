"""
TSV reading helpers.

IMDb dumps are unquoted, tab-separated UTF-8. Lines are split on tabs only;
no quote or escape handling.
"""

import logging
from pathlib import Path
from typing import Iterator, List, Tuple, Union

from movie_index.errors import DatasetReadError

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = "\t"


def split_fields(line: str) -> List[str]:
    """Split one line into its tab-separated fields."""
    return line.split(FIELD_SEPARATOR)


def iter_lines(path: Union[str, Path], skip_header: bool = False) -> Iterator[str]:
    """
    Yield the lines of a text file without line terminators.

    Lines end at "\\n" only; a "\\r" directly before it (or at end of file)
    is dropped, any other "\\r" stays in the line.

    Args:
        path: File to read
        skip_header: Drop the first line

    Raises:
        DatasetReadError: If the file cannot be opened or read
    """
    try:
        # Undecodable bytes are replaced rather than failing the whole load
        with open(path, "r", encoding="utf-8", errors="replace", newline="\n") as f:
            for line_number, line in enumerate(f):
                if skip_header and line_number == 0:
                    continue
                if line.endswith("\n"):
                    line = line[:-1]
                if line.endswith("\r"):
                    line = line[:-1]
                yield line
    except OSError as e:
        logger.error(f"Failed to read {path}: {e}")
        raise DatasetReadError(path, e.strerror or str(e)) from e


def read_lines(path: Union[str, Path], skip_header: bool = False) -> List[str]:
    """
    Read a whole file into a list of lines.

    Raises:
        DatasetReadError: If the file cannot be opened or read
    """
    lines = list(iter_lines(path, skip_header=skip_header))
    logger.debug(f"Read {len(lines)} lines from {path}")
    return lines


def partition_bounds(length: int, parts: int) -> List[Tuple[int, int]]:
    """
    Split range(length) into `parts` contiguous, nearly-equal slices.

    Returns (start, stop) pairs covering every index exactly once, in order.
    Slices may be empty when parts > length.
    """
    if parts < 1:
        raise ValueError(f"Invalid partition count: {parts}. Must be >= 1")
    return [
        (i * length // parts, (i + 1) * length // parts)
        for i in range(parts)
    ]
