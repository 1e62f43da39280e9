"""
Error types for MovieIndex.

Only I/O failures are errors. Malformed rows are recovered where they are
read and a lookup miss is an ordinary result.
"""

from pathlib import Path
from typing import Union


class MovieIndexError(Exception):
    """Base class for all MovieIndex errors."""


class DatasetReadError(MovieIndexError):
    """
    A source dataset could not be opened or read.

    Fatal to the build stage that raised it.
    """

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot read dataset {self.path}: {reason}")
