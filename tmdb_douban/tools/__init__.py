"""HTTP clients."""

from .tmdb_client import TMDBClient, TMDBError

__all__ = [
    "TMDBClient",
    "TMDBError",
]
