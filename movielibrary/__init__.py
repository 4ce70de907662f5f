"""
Movie Library

A Flask-based movie catalog browser: per-session movie catalogs with
title/rating filtering, an add-movie draft and title-addressed detail views.
"""

__version__ = "1.0.0"

from .catalog import (
    CatalogStore,
    CatalogError,
    ValidationError,
    MissingRequiredFieldError,
)
from .projector import filtered, rating_glyphs
from .schemas import MovieRecord, DraftMovie, FilterCriteria

__all__ = [
    "CatalogStore",
    "CatalogError",
    "ValidationError",
    "MissingRequiredFieldError",
    "filtered",
    "rating_glyphs",
    "MovieRecord",
    "DraftMovie",
    "FilterCriteria",
]
