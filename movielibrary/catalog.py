"""
Catalog store for the Movie Library.

Owns the ordered collection of movie records for one session. The surface
is append-only plus reads: records are never edited or removed.

Error Taxonomy:
- CatalogError: Base class for catalog failures
- ValidationError: A draft could not be committed
- MissingRequiredFieldError: The draft has an empty title or poster URL
"""

from typing import Iterable, List, Optional

from movielibrary.logging_config import get_logger
from movielibrary.schemas import DraftMovie, MovieRecord

logger = get_logger(__name__)


SEED_MOVIES = [
    {
        "title": "Inception",
        "description": "A skilled thief leads a dream heist.",
        "posterURL": "https://m.media-amazon.com/images/I/81p+xe8cbnL._AC_SY679_.jpg",
        "rating": 5,
    },
    {
        "title": "Interstellar",
        "description": "A space epic about love and time.",
        "posterURL": "https://m.media-amazon.com/images/I/81By2VQs5gL._UF894,1000_QL80_.jpg",
        "rating": 4,
    },
]


class CatalogError(Exception):
    """Base exception for all catalog errors."""


class ValidationError(CatalogError):
    """A draft was rejected before it reached the catalog."""


class MissingRequiredFieldError(ValidationError):
    """Draft is missing a title or a poster URL."""

    def __init__(self, fields: List[str]):
        self.fields = list(fields)
        super().__init__(f"Missing required field(s): {', '.join(self.fields)}")


class CatalogStore:
    """Ordered, append-only collection of movie records."""

    def __init__(self, records: Optional[Iterable[MovieRecord]] = None):
        self._records: List[MovieRecord] = [r.model_copy() for r in (records or [])]

    @classmethod
    def seeded(cls) -> "CatalogStore":
        """Build a store holding the two starter movies."""
        return cls(MovieRecord(**movie) for movie in SEED_MOVIES)

    def append(self, draft: DraftMovie) -> MovieRecord:
        """
        Commit a draft to the end of the catalog.

        Args:
            draft: The caller's draft; reset to empty defaults on success

        Returns:
            The record that was appended

        Raises:
            MissingRequiredFieldError: title or posterURL is empty. The
                draft is left untouched so it can be corrected.
        """
        missing = draft.missing_required_fields()
        if missing:
            raise MissingRequiredFieldError(missing)

        record = draft.to_record()
        self._records.append(record)
        draft.reset()

        logger.info("movie_appended", title=record.title, rating=record.rating, catalog_size=len(self._records))
        return record

    def all(self) -> List[MovieRecord]:
        """Snapshot of the catalog in insertion order."""
        return list(self._records)

    def find_by_identifier(self, title: str) -> Optional[MovieRecord]:
        """
        Return the first record whose title equals `title` exactly.

        Matching is case-sensitive. With duplicate titles the earliest
        record wins.
        """
        for record in self._records:
            if record.title == title:
                return record
        return None

    def __len__(self) -> int:
        return len(self._records)
