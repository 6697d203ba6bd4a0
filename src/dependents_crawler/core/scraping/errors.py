"""Exception types raised by the scraping primitives.

Transport problems are reported by `requests` itself; the classes here cover
what `requests` does not know about (non-2xx responses, malformed listing
rows, a bounded retry loop giving up).
"""

from __future__ import annotations

from typing import Optional

_BODY_PREVIEW = 500


class CrawlerError(Exception):
    """Base class for crawler errors."""


class BadStatusError(CrawlerError):
    """HTTP response outside the 2xx range.

    The full body is kept on the instance for diagnostics; the message only
    carries a preview of it.
    """

    def __init__(self, status_code: int, url: str, body: str) -> None:
        self.status_code = status_code
        self.url = url
        self.body = body
        preview = body if len(body) <= _BODY_PREVIEW else body[:_BODY_PREVIEW] + "..."
        super().__init__(f"Bad status {status_code} from {url}: {preview}")


class RowExtractionError(CrawlerError):
    """A listing row is missing one of its expected parts."""


class FetchAttemptsExhausted(CrawlerError):
    def __init__(
        self, uri: str, attempts: int, last_error: Optional[BaseException] = None
    ) -> None:
        self.uri = uri
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"Giving up on {uri} after {attempts} attempts: {last_error}")
