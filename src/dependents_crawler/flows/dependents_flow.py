"""Prefect flow wrapping the dependents crawl.

The flow validates the configuration, then runs the crawl as a single task.
The task has no Prefect retries: the fetcher already retries each page on
its own, and a failure that escapes it (bad cache directory, unwritable
output) should fail the run.
"""

from __future__ import annotations

from typing import List

from prefect import flow, get_run_logger, task

from dependents_crawler.core.config import CrawlConfig
from dependents_crawler.core.crawler import DependentsCrawler


@task(name="crawl_dependents", retries=0)
def crawl_dependents_task(config: CrawlConfig) -> List[dict]:
    logger = get_run_logger()
    crawler = DependentsCrawler.from_config(config, logger=logger)
    results = crawler.run()
    logger.info("Saved %d dependents of %s to %s", len(results), config.project, config.output_path)
    return results.to_list()


@flow(name="Dependents Crawler", log_prints=True)
def dependents_crawl_flow(config_dict: dict) -> List[dict]:
    """Crawl every dependents page of `config_dict["project"]`.

    config_dict: must conform to `CrawlConfig`.
    """
    logger = get_run_logger()
    try:
        config = CrawlConfig(**config_dict)
        logger.info("Crawling dependents of %s from %s", config.project, config.seed_url)
    except Exception as e:
        logger.error("Invalid config: %s", e)
        raise

    return crawl_dependents_task(config)
