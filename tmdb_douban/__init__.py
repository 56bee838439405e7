"""TMDB-backed Douban movie API compatibility layer."""
