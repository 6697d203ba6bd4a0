from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from dependents_crawler.core.models import ResultSet


class ResponseCache(ABC):
    """
    Contract every response cache must follow.

    The fetcher only talks to this interface, so the disk-backed cache can be
    swapped for an in-memory one without touching the retry loop.
    """

    @abstractmethod
    def get_or_fetch(self, uri: str, fetch_fn: Callable[[], str]) -> str:
        """
        Return the stored body for `uri`, or call `fetch_fn`, store its
        result and return it. Nothing is stored when `fetch_fn` raises.
        """
        pass


class ResultStorage(ABC):
    """Durable destination for the accumulated result set."""

    @abstractmethod
    def save(self, results: "ResultSet") -> str:
        """Overwrite the stored results with `results` and return the location."""
        raise NotImplementedError()
