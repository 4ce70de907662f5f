"""
Data schemas for the Movie Library catalog.

This module defines Pydantic models for movie records, the add-movie draft,
and the listing filter. Wire names follow the camelCase shape the frontend
uses (posterURL, trailerURL, titleSubstring, minRating); Python code uses
the snake_case attribute names.
"""

import math
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field, field_validator, ConfigDict


def _coerce_rating(v: Any) -> Any:
    """Coerce form input to an int the way a numeric input does ('' -> 0)."""
    if v is None:
        return 0
    if isinstance(v, str):
        v = v.strip()
        if not v:
            return 0
        try:
            v = float(v)
        except ValueError:
            # Let pydantic report the bad value
            return v
    if isinstance(v, float):
        if not math.isfinite(v):
            raise ValueError("rating must be a finite number")
        return int(v)
    return v


class MovieRecord(BaseModel):
    """
    A single movie in the catalog.

    The title doubles as the routing identifier; it is neither unique nor
    normalized. Rating is not range-checked here.
    """
    title: str = Field(..., description="Movie title, also used as the detail route key")
    description: str = Field("", description="Free-text synopsis")
    poster_url: str = Field("", alias="posterURL", description="Poster image URL")
    rating: int = Field(0, description="Star rating, nominally 0-5")
    trailer_url: Optional[str] = Field("", alias="trailerURL", description="Embeddable trailer URL")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "title": "Inception",
                "description": "A skilled thief leads a dream heist.",
                "posterURL": "https://m.media-amazon.com/images/I/81p+xe8cbnL._AC_SY679_.jpg",
                "rating": 5,
                "trailerURL": "",
            }
        }
    )

    @field_validator('rating', mode='before')
    @classmethod
    def coerce_rating(cls, v):
        return _coerce_rating(v)

    @field_validator('trailer_url', mode='before')
    @classmethod
    def ensure_trailer_url(cls, v):
        """Treat a missing trailer as an empty string."""
        return "" if v is None else v

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the wire (camelCase) field names."""
        return self.model_dump(by_alias=True)


class DraftMovie(MovieRecord):
    """
    In-progress record composed through the add-movie form.

    Every field has an empty default so a half-filled draft is valid.
    """
    title: str = Field("", description="Movie title")

    def missing_required_fields(self) -> list:
        """Return the wire names of required fields that are still empty."""
        missing = []
        if not self.title:
            missing.append("title")
        if not self.poster_url:
            missing.append("posterURL")
        return missing

    def to_record(self) -> MovieRecord:
        """Copy the draft into a catalog record."""
        return MovieRecord(**self.model_dump())

    def reset(self):
        """Clear every field back to its empty default, in place."""
        for name, field in type(self).model_fields.items():
            setattr(self, name, field.get_default(call_default_factory=True))


class DraftUpdate(BaseModel):
    """Partial update for the draft; only the fields sent are applied."""
    title: Optional[str] = None
    description: Optional[str] = None
    poster_url: Optional[str] = Field(None, alias="posterURL")
    rating: Optional[int] = None
    trailer_url: Optional[str] = Field(None, alias="trailerURL")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator('rating', mode='before')
    @classmethod
    def coerce_rating(cls, v):
        if v is None:
            return None
        return _coerce_rating(v)

    def apply_to(self, draft: DraftMovie) -> DraftMovie:
        """Copy the explicitly set, non-null fields onto the draft."""
        for name in self.model_fields_set:
            value = getattr(self, name)
            if value is not None:
                setattr(draft, name, value)
        return draft


class FilterCriteria(BaseModel):
    """
    Title/rating filter for the listing.

    An empty substring and a minimum rating of 0 match every record.
    """
    title_substring: str = Field("", alias="titleSubstring", description="Case-insensitive title fragment")
    min_rating: int = Field(0, alias="minRating", description="Minimum rating, inclusive")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {"titleSubstring": "inter", "minRating": 0}
        }
    )

    @field_validator('title_substring', mode='before')
    @classmethod
    def ensure_substring(cls, v):
        return "" if v is None else v

    @field_validator('min_rating', mode='before')
    @classmethod
    def coerce_min_rating(cls, v):
        return _coerce_rating(v)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
