"""TMDB API client that serves Douban-shaped subjects."""

import asyncio
import logging
import os
from typing import Any, Optional
import aiohttp

from ..models.douban import IMAGE_BASE_URL, DoubanSubject, normalize_to_douban
from ..models.tmdb import ListCategory, MediaType

logger = logging.getLogger(__name__)

TMDB_BASE_URL = "https://api.themoviedb.org/3"
DEFAULT_LANGUAGE = "zh-CN"

# Douban tag -> TMDB listing. Unknown tags fall back to popular.
TAG_CATEGORIES = {
    "hot": ListCategory.POPULAR,
    "热门": ListCategory.POPULAR,
    "latest": ListCategory.NOW_PLAYING,
    "最新": ListCategory.NOW_PLAYING,
    "top250": ListCategory.TOP_RATED,
    "high_score": ListCategory.TOP_RATED,
}


class TMDBError(Exception):
    """Base exception for TMDB client errors."""
    pass


def resolve_media_type(type: str) -> MediaType:
    """Map a Douban list type to a TMDB media type; anything but "tv" is a movie."""
    return MediaType.TV if type == MediaType.TV.value else MediaType.MOVIE


def resolve_list_endpoint(type: str, tag: str) -> str:
    """Get the TMDB listing path for a Douban type and tag."""
    media_type = resolve_media_type(type)
    category = TAG_CATEGORIES.get(tag, ListCategory.POPULAR)

    # TMDB has no now_playing listing for TV
    if category == ListCategory.NOW_PLAYING and media_type == MediaType.TV:
        category = ListCategory.ON_THE_AIR

    return f"/{media_type.value}/{category.value}"


class TMDBClient:
    """Async client for the TMDB v3 API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        language: Optional[str] = None,
        image_base_url: Optional[str] = None,
    ):
        self.api_key = api_key or os.getenv("TMDB_API_KEY", "")
        self.base_url = (base_url or os.getenv("TMDB_BASE_URL", TMDB_BASE_URL)).rstrip("/")
        self.language = language or os.getenv("TMDB_LANGUAGE", DEFAULT_LANGUAGE)
        self.image_base_url = image_base_url or os.getenv("TMDB_IMAGE_BASE_URL", IMAGE_BASE_URL)
        self._session: Optional[aiohttp.ClientSession] = None

        if not self.api_key:
            raise TMDBError("TMDB_API_KEY not configured")

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"Accept": "application/json"}
            )
        return self._session

    async def close(self):
        """Close the session."""
        if self._session and not self._session.closed:
            await self._session.close()

    def _build_params(self, params: Optional[dict[str, str]] = None) -> dict[str, str]:
        query = {"api_key": self.api_key, "language": self.language}
        query.update(params or {})
        return query

    async def _request(self, endpoint: str, params: Optional[dict[str, str]] = None) -> Optional[Any]:
        """Make a GET request, returning the decoded body or None on any failure."""
        session = await self._get_session()
        url = f"{self.base_url}{endpoint}"

        try:
            async with session.get(url, params=self._build_params(params)) as response:
                if not 200 <= response.status < 300:
                    text = await response.text()
                    logger.error(f"TMDB error {response.status} for {endpoint}: {text}")
                    return None
                return await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            # aiohttp error strings embed the request URL, api_key included
            logger.error(f"TMDB request failed for {endpoint}: {type(e).__name__}")
            return None
        except ValueError as e:
            logger.error(f"TMDB returned an undecodable body for {endpoint}: {e}")
            return None

    def _extract_results(self, data: Any, endpoint: str) -> Optional[list]:
        """Pull the results array out of a page, or None if the shape is wrong."""
        if data is None:
            return None
        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list):
            logger.warning(f"TMDB response for {endpoint} has no results list")
            return None
        return results

    async def get_status(self) -> Optional[dict]:
        """Get the API configuration, used as a connectivity probe."""
        return await self._request("/configuration")

    async def get_movie_list(
        self,
        type: str,
        tag: str = "hot",
        page: int = 1,
        limit: int = 20,
    ) -> list[DoubanSubject]:
        """Get a Douban-style subject list for a type and tag.

        Args:
            type: "tv" for TV shows, anything else for movies
            tag: Douban category tag ("hot", "latest", "top250", ...)
            page: TMDB page number
            limit: Accepted for Douban compatibility; TMDB pages are fixed size

        Returns:
            Normalized subjects, empty if the request failed
        """
        endpoint = resolve_list_endpoint(type, tag)
        data = await self._request(endpoint, {"page": str(page)})

        results = self._extract_results(data, endpoint)
        if results is None:
            return []

        return [normalize_to_douban(item, self.image_base_url) for item in results]

    async def search_movies(self, query: str, page: int = 1) -> list[DoubanSubject]:
        """Search movies and TV shows, dropping people and other result types."""
        endpoint = "/search/multi"
        data = await self._request(endpoint, {"query": query, "page": str(page)})

        results = self._extract_results(data, endpoint)
        if results is None:
            return []

        media_types = (MediaType.MOVIE.value, MediaType.TV.value)
        return [
            normalize_to_douban(item, self.image_base_url)
            for item in results
            if isinstance(item, dict) and item.get("media_type") in media_types
        ]
