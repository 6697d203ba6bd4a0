"""Scraping primitives used by the crawl loop.

Cache, HTTP client with its retrying fetcher, listing page parser and the
error types they raise.
"""

from .cache import DiskCache, MemoryCache, cache_key
from .errors import (
    BadStatusError,
    CrawlerError,
    FetchAttemptsExhausted,
    RowExtractionError,
)
from .fetcher import HttpClient, ResilientFetcher
from .parser import extract_page, find_next_page, parse_count

__all__ = [
    "DiskCache",
    "MemoryCache",
    "cache_key",
    "HttpClient",
    "ResilientFetcher",
    "extract_page",
    "find_next_page",
    "parse_count",
    "CrawlerError",
    "BadStatusError",
    "RowExtractionError",
    "FetchAttemptsExhausted",
]
