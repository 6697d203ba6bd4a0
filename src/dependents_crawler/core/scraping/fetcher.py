"""HTTP client and the resilient fetch loop built on top of it.

`HttpClient` is a thin `requests.Session` wrapper that turns non-2xx
responses into `BadStatusError`. `ResilientFetcher` adds the response cache,
a jittered delay between attempts and retries until a page comes back.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Callable, Dict, Optional

import requests
from bs4 import BeautifulSoup
from prefect.logging import get_logger
from requests.adapters import HTTPAdapter

from dependents_crawler.core.config import DEFAULT_USER_AGENT
from dependents_crawler.core.interfaces import ResponseCache
from dependents_crawler.core.scraping.errors import (
    BadStatusError,
    FetchAttemptsExhausted,
)

DEFAULT_JITTER_MS = 250


class HttpClient:
    """Small HTTP client with sensible defaults for scraping.

    Usage:
        client = HttpClient(timeout=30)
        html = client.get_text(url)
    """

    def __init__(
        self,
        timeout: float = 30,
        user_agent: str = DEFAULT_USER_AGENT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        if session is None:
            session = requests.Session()
            # retries are handled by ResilientFetcher, not by urllib3
            adapter = HTTPAdapter(max_retries=0)
            session.mount("https://", adapter)
            session.mount("http://", adapter)
        self.session = session

    def _headers(self, headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        base = {"User-Agent": self.user_agent}
        if headers:
            base.update(headers)
        return base

    def get(self, url: str, headers: Optional[Dict[str, str]] = None, **kwargs):
        return self.session.get(
            url, headers=self._headers(headers), timeout=self.timeout, **kwargs
        )

    def get_text(self, url: str, headers: Optional[Dict[str, str]] = None) -> str:
        """GET `url` and return the body, raising `BadStatusError` outside 2xx."""
        resp = self.get(url, headers=headers)
        if not 200 <= resp.status_code <= 299:
            raise BadStatusError(resp.status_code, resp.url or url, resp.text)
        return resp.text

    def close(self) -> None:
        self.session.close()


class ResilientFetcher:
    """Fetch a page through the cache, retrying until it succeeds.

    `fetch` blocks until a 2xx body is available. With the default
    `max_attempts=None` there is no upper bound: a target that never
    recovers keeps the caller waiting forever. Transport errors and bad
    statuses are logged and retried; anything else (a broken cache directory,
    for instance) propagates.
    """

    def __init__(
        self,
        client: HttpClient,
        cache: ResponseCache,
        jitter_ms: float = DEFAULT_JITTER_MS,
        max_attempts: Optional[int] = None,
        logger: Optional[logging.Logger] = None,
        sleep: Callable[[float], None] = time.sleep,
        uniform: Callable[[float, float], float] = random.uniform,
    ) -> None:
        self.client = client
        self.cache = cache
        self.jitter_ms = jitter_ms
        self.max_attempts = max_attempts
        self.logger = logger or get_logger(__name__)
        self._sleep = sleep
        self._uniform = uniform

    def fetch(self, uri: str, headers: Optional[Dict[str, str]] = None) -> BeautifulSoup:
        attempt = 0
        last_error: Optional[BaseException] = None
        while self.max_attempts is None or attempt < self.max_attempts:
            attempt += 1
            self._sleep(self._uniform(0, self.jitter_ms) / 1000)

            try:
                body = self.cache.get_or_fetch(
                    uri, lambda: self.client.get_text(uri, headers=headers)
                )
            except (requests.RequestException, BadStatusError) as exc:
                last_error = exc
                self.logger.error("Attempt %d for %s failed: %s", attempt, uri, exc)
                continue

            return BeautifulSoup(body, "html.parser")

        raise FetchAttemptsExhausted(uri, attempt, last_error)
