"""Adapters package initialization."""
from schema_markup.adapters.fetcher import ContentFetcher, FetchResult

__all__ = ["ContentFetcher", "FetchResult"]
