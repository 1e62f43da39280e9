"""
Rating Index Builder.

Parses the ratings dataset into a mapping from title identifier to RatingInfo.
"""

import logging
import re
from pathlib import Path
from typing import Dict, Union

from movie_index.models.rating import RatingInfo
from movie_index.utils.tsv import iter_lines, split_fields
import config.settings as settings

logger = logging.getLogger(__name__)


_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def _is_strict_number(text: str) -> bool:
    # float()/int() also accept padding, digit separators and non-ASCII digits
    return text.isascii() and text == text.strip() and "_" not in text


def parse_average_rating(text: str) -> float:
    """
    Parse an average rating, defaulting to 0.0.

    Surrounding whitespace, underscores and non-ASCII digits count as
    malformed.
    """
    if not _is_strict_number(text):
        return 0.0
    try:
        return float(text)
    except ValueError:
        return 0.0


def parse_vote_count(text: str) -> int:
    """Parse a plain ASCII decimal vote count, defaulting to 0."""
    if not _INTEGER_PATTERN.fullmatch(text):
        return 0
    return int(text)


class RatingIndexBuilder:
    """
    Builds the identifier -> RatingInfo index from a ratings TSV.

    Columns: [identifier, averageRating, numVotes, ...]
    """

    def __init__(
        self,
        min_fields: int = settings.MIN_RATING_FIELDS,
        has_header: bool = settings.INPUT_HAS_HEADER
    ):
        """
        Initialize rating index builder.

        Args:
            min_fields: Rows with fewer tab-separated fields are skipped
            has_header: Skip the first line of the file
        """
        self.min_fields = min_fields
        self.has_header = has_header

    def build(self, file_path: Union[str, Path]) -> Dict[str, RatingInfo]:
        """
        Read the whole ratings file into a new index.

        Args:
            file_path: Path to the ratings TSV

        Returns:
            Dict mapping identifier to RatingInfo (last row wins on duplicates)

        Raises:
            DatasetReadError: If the file cannot be opened or read
        """
        ratings: Dict[str, RatingInfo] = {}
        skipped = 0

        for line in iter_lines(file_path, skip_header=self.has_header):
            fields = split_fields(line)
            if len(fields) < self.min_fields:
                skipped += 1
                continue

            ratings[fields[0]] = RatingInfo(
                average_rating=parse_average_rating(fields[1]),
                num_votes=parse_vote_count(fields[2])
            )

        if skipped:
            logger.debug(f"Skipped {skipped} short rows in {file_path}")
        logger.info(f"Indexed {len(ratings)} ratings from {file_path}")
        return ratings


def build_rating_index(
    file_path: Union[str, Path],
    has_header: bool = settings.INPUT_HAS_HEADER
) -> Dict[str, RatingInfo]:
    """Build a rating index with the default row rules."""
    return RatingIndexBuilder(has_header=has_header).build(file_path)
