"""Pydantic models for TMDB API responses."""

from enum import Enum
from typing import Any, Optional, Union
from pydantic import BaseModel, ConfigDict, ValidationError


class MediaType(str, Enum):
    """Media type enumeration."""
    MOVIE = "movie"
    TV = "tv"


class ListCategory(str, Enum):
    """TMDB listing endpoints reachable from a Douban tag."""
    POPULAR = "popular"
    NOW_PLAYING = "now_playing"
    ON_THE_AIR = "on_the_air"
    TOP_RATED = "top_rated"


class TMDBItem(BaseModel):
    """A movie or TV result from a TMDB list or search page."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[Union[int, float, str]] = None
    media_type: Optional[str] = None
    title: Optional[str] = None           # For movies
    name: Optional[str] = None            # For TV shows
    original_title: Optional[str] = None
    original_name: Optional[str] = None
    release_date: Optional[str] = None
    first_air_date: Optional[str] = None
    poster_path: Optional[str] = None
    vote_average: Optional[float] = None
    overview: Optional[str] = None

    @classmethod
    def from_raw(cls, data: Any) -> "TMDBItem":
        """Build an item from an untyped payload, dropping fields that fail validation."""
        if isinstance(data, TMDBItem):
            return data
        if not isinstance(data, dict):
            return cls()

        fields = {k: v for k, v in data.items() if k in cls.model_fields}
        try:
            return cls(**fields)
        except ValidationError as e:
            bad = {err["loc"][0] for err in e.errors() if err.get("loc")}
            return cls(**{k: v for k, v in fields.items() if k not in bad})

    @property
    def media_kind(self) -> MediaType:
        """TV when a first air date is present, otherwise movie."""
        return MediaType.TV if self.first_air_date else MediaType.MOVIE

    @property
    def display_title(self) -> str:
        return self.title or self.name or ""

    @property
    def display_original_title(self) -> str:
        return self.original_title or self.original_name or ""

    @property
    def date(self) -> str:
        return self.release_date or self.first_air_date or ""

    @property
    def year(self) -> str:
        """Extract year from release date."""
        date = self.date
        if date:
            return date.split("-", 1)[0]
        return ""
