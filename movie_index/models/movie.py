"""
Movie data model.

A title row joined with its rating. The unit stored in the collection,
ordered by title and returned from lookups.
"""

from dataclasses import dataclass

from movie_index.models.rating import RatingInfo


@dataclass(frozen=True)
class Movie:
    """
    A rated title whose category is "movie".

    Only created when the identifier is present in both datasets.
    """
    title_id: str  # Identifier shared by both datasets (e.g., "tt0000001")
    title: str  # Sort and lookup key
    average_rating: float
    num_votes: int
    genres: str  # Raw comma-joined field (e.g., "Drama,Comedy")

    @classmethod
    def from_rating(
        cls,
        title_id: str,
        title: str,
        genres: str,
        rating: RatingInfo
    ) -> "Movie":
        """Create Movie from title fields and the matched rating."""
        return cls(
            title_id=title_id,
            title=title,
            average_rating=rating.average_rating,
            num_votes=rating.num_votes,
            genres=genres
        )

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "title_id": self.title_id,
            "title": self.title,
            "average_rating": self.average_rating,
            "num_votes": self.num_votes,
            "genres": self.genres
        }

    def describe(self) -> str:
        return (
            f"Title: {self.title}, Rating: {self.average_rating:f}, "
            f"NumVotes: {self.num_votes}, Genres: {self.genres}"
        )
