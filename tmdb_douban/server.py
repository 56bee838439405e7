"""TMDB Douban MCP Server - Douban-shaped movie lists and search backed by TMDB."""

import argparse
import logging
import os
from typing import Optional

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from .models.douban import DoubanSubject
from .tools.tmdb_client import TMDBClient, TMDBError

load_dotenv()

# Configure logging
logging.basicConfig(
    level=getattr(logging, os.getenv("LOG_LEVEL", "INFO")),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize MCP server
mcp = FastMCP("tmdb-douban-mcp")

# Global client instance
_client: Optional[TMDBClient] = None


def get_client() -> TMDBClient:
    """Get or create the TMDB client."""
    global _client
    if _client is None:
        try:
            _client = TMDBClient()
        except TMDBError as e:
            raise ToolError(f"Configuration error: {str(e)}")
    return _client


def subjects_payload(subjects: list[DoubanSubject], **extra) -> dict:
    """Wrap subjects the way Douban list responses do."""
    return {
        **extra,
        "count": len(subjects),
        "subjects": [s.model_dump() for s in subjects],
    }


@mcp.tool()
async def get_movie_list(
    type: str = "movie",
    tag: str = "hot",
    page: int = 1,
    limit: int = 20,
) -> dict:
    """Get a Douban-style list of movies or TV shows.

    Args:
        type: "movie" or "tv"
        tag: Douban category tag - "hot"/"热门", "latest"/"最新", "top250"/"high_score".
            Other tags return the popular list.
        page: Page number (default 1)
        limit: Kept for Douban compatibility; pages are fixed at 20 items

    Returns:
        Subjects with ids, titles, years, poster images, ratings and summaries
    """
    try:
        client = get_client()
        subjects = await client.get_movie_list(type, tag=tag, page=page, limit=limit)
        return subjects_payload(subjects, type=type, tag=tag, page=page)
    except ToolError:
        raise
    except Exception as e:
        raise ToolError(f"Unexpected error: {str(e)}")


@mcp.tool()
async def search_movies(query: str, page: int = 1) -> dict:
    """Search movies and TV shows by title.

    People and other result types are left out.

    Args:
        query: Search term (movie or TV show title)
        page: Page number (default 1)

    Returns:
        Matching subjects in Douban format
    """
    try:
        client = get_client()
        subjects = await client.search_movies(query, page=page)
        return subjects_payload(subjects, query=query, page=page)
    except ToolError:
        raise
    except Exception as e:
        raise ToolError(f"Unexpected error: {str(e)}")


@mcp.tool()
async def health_check() -> dict:
    """Check TMDB connectivity.

    Returns:
        Server status and the configured language
    """
    try:
        client = get_client()
        status = await client.get_status()
    except ToolError as e:
        return {
            "status": "error",
            "error": str(e),
        }

    if status is None:
        return {
            "status": "unhealthy",
            "error": "TMDB request failed, see server logs",
        }
    return {
        "status": "healthy",
        "tmdb": {
            "base_url": client.base_url,
            "language": client.language,
        },
    }


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="TMDB Douban MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse", "streamable-http"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host for HTTP transport (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("PORT", "8080")),
        help="Port for HTTP transport (default: 8080)",
    )

    args = parser.parse_args()

    logger.info(f"Starting TMDB Douban MCP server with {args.transport} transport")

    if args.transport == "stdio":
        mcp.run()
    elif args.transport == "sse":
        mcp.run(transport="sse", host=args.host, port=args.port, stateless_http=True)
    elif args.transport == "streamable-http":
        mcp.run(transport="streamable-http", host=args.host, port=args.port, stateless_http=True)


if __name__ == "__main__":
    main()
