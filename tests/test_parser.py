import logging

import pytest
from bs4 import BeautifulSoup

from dependents_crawler.core.models import DependentRecord
from dependents_crawler.core.scraping.errors import RowExtractionError
from dependents_crawler.core.scraping.parser import extract_page, find_next_page, parse_count

PAGE_URL = "https://github.com/octo/lib/network/dependents?dependent_type=PACKAGE"
LOGGER = logging.getLogger("tests.parser")


def soup(html):
    return BeautifulSoup(html, "html.parser")


@pytest.mark.parametrize(
    "raw, expected",
    [("1,234", 1234), ("0", 0), ("\n      12\n    ", 12), ("1,050", 1050), ("12,345,678", 12345678)],
)
def test_parse_count(raw, expected):
    assert parse_count(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", "1.2k", "-3", "n/a"])
def test_parse_count_rejects_non_numeric_text(raw):
    with pytest.raises(RowExtractionError):
        parse_count(raw)


def test_extract_page_two_rows_without_next_link(listing_page, listing_row):
    html = listing_page(
        [
            listing_row("alice", "alice/foo", "12", "3"),
            listing_row("bob-org", "bob-org/bar", "1,050", "0", user_type="organization"),
        ]
    )

    records, next_uri = extract_page(soup(html), base_url=PAGE_URL, logger=LOGGER)

    assert records == [
        DependentRecord(user="alice", project="alice/foo", stars=12, forks=3),
        DependentRecord(user="bob-org", project="bob-org/bar", stars=1050, forks=0),
    ]
    assert next_uri is None


def test_extract_page_reads_next_link(listing_page, listing_row):
    next_href = "https://github.com/octo/lib/network/dependents?dependents_after=MjA"
    html = listing_page([listing_row("alice", "alice/foo", "1", "1")], next_href=next_href)

    _, next_uri = extract_page(soup(html), logger=LOGGER)

    assert next_uri == next_href


def test_next_link_ignores_previous_button_on_last_page(listing_page, listing_row):
    html = listing_page(
        [listing_row("alice", "alice/foo", "1", "1")],
        prev_href="https://github.com/octo/lib/network/dependents?dependents_before=MQ",
    )

    assert find_next_page(soup(html)) is None


def test_next_link_with_both_buttons_picks_the_second(listing_page):
    html = listing_page([], prev_href="/prev", next_href="/next")
    assert find_next_page(soup(html)) == "/next"


def test_relative_next_link_is_resolved_against_page_url(listing_page):
    html = listing_page([], next_href="/octo/lib/network/dependents?dependents_after=Mg")

    assert find_next_page(soup(html), base_url=PAGE_URL) == (
        "https://github.com/octo/lib/network/dependents?dependents_after=Mg"
    )


def test_rows_outside_the_listing_are_ignored(listing_row):
    html = f"<div>{listing_row('mallory', 'mallory/x', '5', '5')}</div><div id='dependents'></div>"

    records, next_uri = extract_page(soup(html), logger=LOGGER)

    assert records == []
    assert next_uri is None


def test_malformed_rows_are_logged_and_skipped(listing_page, listing_row, caplog):
    broken_stars = listing_row("carol", "carol/baz", "lots", "1")
    no_fork_icon = listing_row("dave", "dave/qux", "2", "2").replace("octicon-repo-forked", "octicon-eye")
    no_repo_link = listing_row("erin", "erin/zed", "2", "2").replace('"repository"', '"team"')
    html = listing_page(
        [
            listing_row("alice", "alice/foo", "12", "3"),
            broken_stars,
            no_fork_icon,
            no_repo_link,
            listing_row("bob-org", "bob-org/bar", "7", "0", user_type="organization"),
        ]
    )

    with caplog.at_level(logging.WARNING, logger="tests.parser"):
        records, _ = extract_page(soup(html), base_url=PAGE_URL, logger=LOGGER)

    assert [r.user for r in records] == ["alice", "bob-org"]
    messages = [r.getMessage() for r in caplog.records if r.name == LOGGER.name]
    assert len(messages) == 3
    assert "row 1" in messages[0] and "'lots'" in messages[0]
    assert "fork" in messages[1]
    assert "repository" in messages[2]
