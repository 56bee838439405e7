"""Pydantic models for TMDB responses and Douban subjects."""

from .tmdb import (
    MediaType,
    ListCategory,
    TMDBItem,
)
from .douban import (
    DoubanImages,
    DoubanRating,
    DoubanPerson,
    DoubanSubject,
    normalize_to_douban,
)

__all__ = [
    "MediaType",
    "ListCategory",
    "TMDBItem",
    "DoubanImages",
    "DoubanRating",
    "DoubanPerson",
    "DoubanSubject",
    "normalize_to_douban",
]
