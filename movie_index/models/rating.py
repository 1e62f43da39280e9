"""
Rating data model.

One row of the ratings dataset, keyed by title identifier in the rating index.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class RatingInfo:
    """
    Average rating and vote count for a single title.
    Built once by the rating index and only read afterwards.
    """
    average_rating: float  # 0.0 when the source field does not parse
    num_votes: int  # 0 when the source field does not parse
