"""Response cache keyed by request URI.

A cached body is trusted forever: once a page has been fetched successfully
it is never requested again, not even by a later run pointed at the same
cache directory. This is what makes re-running an interrupted crawl cheap.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict

from dependents_crawler.core.interfaces import ResponseCache


def cache_key(uri: str) -> str:
    """Filesystem-safe key for `uri`: every "/" becomes "_"."""
    return uri.replace("/", "_")


class DiskCache(ResponseCache):
    """One UTF-8 text file per URI under `cache_dir`.

    Usage:
        cache = DiskCache("cache")
        body = cache.get_or_fetch(url, lambda: client.get_text(url))
    """

    def __init__(self, cache_dir: str | Path) -> None:
        self.cache_dir = Path(cache_dir)

    def path_for(self, uri: str) -> Path:
        return self.cache_dir / cache_key(uri)

    def get_or_fetch(self, uri: str, fetch_fn: Callable[[], str]) -> str:
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        path = self.path_for(uri)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            pass

        body = fetch_fn()
        path.write_text(body, encoding="utf-8")
        return body


class MemoryCache(ResponseCache):
    """Dict-backed cache with the same semantics, for tests and dry runs."""

    def __init__(self, entries: Dict[str, str] | None = None) -> None:
        self.entries: Dict[str, str] = dict(entries or {})

    def get_or_fetch(self, uri: str, fetch_fn: Callable[[], str]) -> str:
        key = cache_key(uri)
        if key in self.entries:
            return self.entries[key]
        body = fetch_fn()
        self.entries[key] = body
        return body
