"""
Derived views over a catalog snapshot.

Everything here is a pure function of its arguments: nothing reads or
writes session state.
"""

from typing import Any, Dict, Iterable, List

from movielibrary.schemas import FilterCriteria, MovieRecord

STAR_COUNT = 5
FILLED_STAR = "⭐"
EMPTY_STAR = "☆"


def filtered(records: Iterable[MovieRecord], criteria: FilterCriteria) -> List[MovieRecord]:
    """
    Return the records matching the filter, in their original order.

    A record matches when its title contains the criteria substring
    (case-insensitive) and its rating is at least the minimum rating.
    """
    needle = criteria.title_substring.lower()
    return [
        record for record in records
        if needle in record.title.lower() and record.rating >= criteria.min_rating
    ]


def rating_glyphs(rating: int) -> List[bool]:
    """
    Filled/empty flags for the five star positions.

    Out-of-range ratings degrade instead of failing: negative values give
    all empty stars, values above five give all filled stars.
    """
    return [position < rating for position in range(STAR_COUNT)]


def render_stars(rating: int, filled: str = FILLED_STAR, empty: str = EMPTY_STAR) -> str:
    """Render the rating as a five-character star string."""
    return "".join(filled if flag else empty for flag in rating_glyphs(rating))


def project_card(record: MovieRecord) -> Dict[str, Any]:
    """JSON payload for a movie card: wire fields plus star flags and text."""
    card = record.to_dict()
    card["stars"] = rating_glyphs(record.rating)
    card["starText"] = render_stars(record.rating)
    return card
