"""HTML parsing helpers for GitHub dependents listing pages.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag
from prefect.logging import get_logger

from dependents_crawler.core.models import DependentRecord
from dependents_crawler.core.scraping.errors import RowExtractionError

ROW_SELECTOR = "#dependents .Box-row"
USER_SELECTOR = "a[data-hovercard-type=user], a[data-hovercard-type=organization]"
REPOSITORY_SELECTOR = "a[data-hovercard-type=repository]"
STAR_SELECTOR = ".octicon-star"
FORK_SELECTOR = ".octicon-repo-forked"
NEXT_PAGE_SELECTOR = "#dependents .paginate-container a.btn:nth-child(2)"


def parse_count(raw: str) -> int:
    """Parse a displayed count such as "1,234" into an int."""
    text = (raw or "").strip().replace(",", "")
    if not text.isdecimal():
        raise RowExtractionError(f"not a count: {raw!r}")
    return int(text)


def _link_text(row: Tag, selector: str, what: str) -> str:
    link = row.select_one(selector)
    if link is None:
        raise RowExtractionError(f"missing {what} link")
    return link.get_text(strip=True)


def _count_next_to(row: Tag, selector: str, what: str) -> int:
    icon = row.select_one(selector)
    if icon is None or icon.parent is None:
        raise RowExtractionError(f"missing {what} marker")
    return parse_count(icon.parent.get_text())


def extract_row(row: Tag) -> DependentRecord:
    return DependentRecord(
        user=_link_text(row, USER_SELECTOR, "user"),
        project=_link_text(row, REPOSITORY_SELECTOR, "repository"),
        stars=_count_next_to(row, STAR_SELECTOR, "star"),
        forks=_count_next_to(row, FORK_SELECTOR, "fork"),
    )


def find_next_page(document: BeautifulSoup, base_url: Optional[str] = None) -> Optional[str]:
    button = document.select_one(NEXT_PAGE_SELECTOR)
    if button is None:
        return None
    href = (button.get("href") or "").strip()
    if not href:
        return None
    return urljoin(base_url, href) if base_url else href


def extract_page(
    document: BeautifulSoup,
    base_url: Optional[str] = None,
    logger: Optional[logging.Logger] = None,
) -> Tuple[List[DependentRecord], Optional[str]]:
    """Return the records of one listing page and the next page URL (or None).

    - Records keep the row order of the page.
    - Rows that cannot be read are logged and skipped.
    - Relative next-page links are resolved against `base_url` when given.
    """
    logger = logger or get_logger(__name__)
    records: List[DependentRecord] = []

    for index, row in enumerate(document.select(ROW_SELECTOR)):
        try:
            records.append(extract_row(row))
        except RowExtractionError as exc:
            logger.warning("Skipping row %d of %s: %s", index, base_url or "page", exc)

    return records, find_next_page(document, base_url)
