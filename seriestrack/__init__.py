"""Tracking of TV series, viewers and followers, and queries over IMDb-style title data."""

__version__ = "0.1.0"

__all__ = ["graph", "imdb", "imdb_io", "imdb_records", "index", "models"]