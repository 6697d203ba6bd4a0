"""Pagination-following crawl loop over the dependents listing.

The loop is an explicit state machine: `DependentsCrawler.step` takes a
`CrawlState` and returns the next one, and `run` repeats it until the state
reaches `CrawlPhase.DONE`.

    START -> FETCHING_PAGE -> EXTRACTING -> PERSISTING -> ADVANCING
                   ^                                          |
                   +------------- next page link -------------+
                                                              |
                                          no next link -> DONE

Pages are visited strictly one after another; the whole result set is
rewritten to storage after every page.
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Dict, Optional

from bs4 import BeautifulSoup
from prefect.logging import get_logger

from dependents_crawler.core.config import CrawlConfig
from dependents_crawler.core.interfaces import ResultStorage
from dependents_crawler.core.models import ResultSet
from dependents_crawler.core.scraping.cache import DiskCache
from dependents_crawler.core.scraping.fetcher import HttpClient, ResilientFetcher
from dependents_crawler.core.scraping.parser import extract_page
from dependents_crawler.services.storage import JsonFileStorage


class CrawlPhase(str, Enum):
    START = "start"
    FETCHING_PAGE = "fetching_page"
    EXTRACTING = "extracting"
    PERSISTING = "persisting"
    ADVANCING = "advancing"
    DONE = "done"


@dataclass(frozen=True)
class CrawlState:
    phase: CrawlPhase
    uri: Optional[str] = None
    document: Optional[BeautifulSoup] = None
    next_uri: Optional[str] = None
    pages_fetched: int = 0


class DependentsCrawler:
    """Drive fetcher, extractor and storage across every listing page.

    The fetcher is injected (anything with `fetch(uri, headers)`), which
    keeps the loop testable with canned pages.
    """

    def __init__(
        self,
        seed_url: str,
        fetcher: ResilientFetcher,
        storage: ResultStorage,
        headers: Optional[Dict[str, str]] = None,
        page_delay_ms: tuple[float, float] = (1000, 5000),
        logger: Optional[logging.Logger] = None,
        sleep: Callable[[float], None] = time.sleep,
        uniform: Callable[[float, float], float] = random.uniform,
    ) -> None:
        self.seed_url = seed_url
        self.fetcher = fetcher
        self.storage = storage
        self.headers = headers or {}
        self.page_delay_ms = page_delay_ms
        self.logger = logger or get_logger(__name__)
        self._sleep = sleep
        self._uniform = uniform
        self.results = ResultSet()

    @classmethod
    def from_config(
        cls, config: CrawlConfig, logger: Optional[logging.Logger] = None
    ) -> "DependentsCrawler":
        logger = logger or get_logger(__name__)
        client = HttpClient(timeout=config.request_timeout, user_agent=config.user_agent)
        fetcher = ResilientFetcher(
            client,
            DiskCache(config.cache_dir),
            jitter_ms=config.jitter_ms,
            max_attempts=config.max_attempts,
            logger=logger,
        )
        return cls(
            seed_url=config.seed_url,
            fetcher=fetcher,
            storage=JsonFileStorage(config.output_path),
            headers=config.headers,
            page_delay_ms=(config.page_delay_min_ms, config.page_delay_max_ms),
            logger=logger,
        )

    def step(self, state: CrawlState) -> CrawlState:
        """Perform exactly one transition of the crawl state machine."""
        if state.phase is CrawlPhase.START:
            self.results = ResultSet()
            return CrawlState(CrawlPhase.FETCHING_PAGE, uri=self.seed_url)

        if state.phase is CrawlPhase.FETCHING_PAGE:
            low, high = self.page_delay_ms
            self._sleep(self._uniform(low, high) / 1000)
            document = self.fetcher.fetch(state.uri, self.headers)
            self.logger.info("Fetched %s", state.uri)
            return replace(
                state,
                phase=CrawlPhase.EXTRACTING,
                document=document,
                pages_fetched=state.pages_fetched + 1,
            )

        if state.phase is CrawlPhase.EXTRACTING:
            records, next_uri = extract_page(
                state.document, base_url=state.uri, logger=self.logger
            )
            self.results.extend(records)
            return replace(
                state, phase=CrawlPhase.PERSISTING, document=None, next_uri=next_uri
            )

        if state.phase is CrawlPhase.PERSISTING:
            self.storage.save(self.results)
            return replace(state, phase=CrawlPhase.ADVANCING)

        if state.phase is CrawlPhase.ADVANCING:
            if state.next_uri:
                return CrawlState(
                    CrawlPhase.FETCHING_PAGE,
                    uri=state.next_uri,
                    pages_fetched=state.pages_fetched,
                )
            self.logger.info("Done")
            return replace(state, phase=CrawlPhase.DONE, uri=None)

        raise ValueError(f"No transition out of {state.phase.value!r}")

    def run(self) -> ResultSet:
        """Crawl from the seed page until no next-page link is left.

        May block indefinitely: the fetcher retries a failing page without
        an upper bound unless configured with `max_attempts`.
        """
        state = CrawlState(CrawlPhase.START)
        while state.phase is not CrawlPhase.DONE:
            state = self.step(state)
        return self.results
