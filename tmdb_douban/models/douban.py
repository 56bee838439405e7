"""Douban-shaped subject models and the TMDB → Douban normalizer."""

from typing import Any, Optional
from pydantic import BaseModel, Field

from .tmdb import TMDBItem

IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w500"
PLACEHOLDER_IMAGE = "https://via.placeholder.com/400x600?text=No+Cover"


class DoubanImages(BaseModel):
    """Poster URLs in the three sizes Douban clients ask for."""
    large: str
    medium: Optional[str] = None
    small: Optional[str] = None


class DoubanRating(BaseModel):
    """Ten-point rating block."""
    average: float = 0


class DoubanPerson(BaseModel):
    """A cast member or director."""
    name: str
    id: Optional[str] = None


class DoubanSubject(BaseModel):
    """A subject record as returned by the Douban movie API."""
    id: str
    title: str = ""
    original_title: str = ""
    year: str = ""
    images: DoubanImages
    rating: DoubanRating = Field(default_factory=DoubanRating)
    genres: list[str] = Field(default_factory=list)
    casts: list[DoubanPerson] = Field(default_factory=list)
    directors: list[DoubanPerson] = Field(default_factory=list)
    summary: str = ""


def poster_url(poster_path: Optional[str], image_base_url: str = IMAGE_BASE_URL) -> str:
    """Resolve a TMDB poster path, falling back to a grey placeholder."""
    if poster_path:
        return f"{image_base_url}{poster_path}"
    return PLACEHOLDER_IMAGE


def normalize_to_douban(item: Any, image_base_url: str = IMAGE_BASE_URL) -> DoubanSubject:
    """Convert a TMDB list/search result into a Douban subject.

    Never raises: missing or malformed fields fall back to empty strings,
    a zero rating or the placeholder poster. List endpoints carry no genre
    names or credits, so genres, casts and directors are always empty.
    """
    parsed = TMDBItem.from_raw(item)
    poster = poster_url(parsed.poster_path, image_base_url)

    return DoubanSubject(
        id=str(parsed.id) if parsed.id is not None else "",
        title=parsed.display_title,
        original_title=parsed.display_original_title,
        year=parsed.year,
        images=DoubanImages(large=poster, medium=poster, small=poster),
        rating=DoubanRating(average=parsed.vote_average or 0),
        summary=parsed.overview or "",
    )
