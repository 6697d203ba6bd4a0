"""
Command line entry point: crawl the dependents of one package.

    dependents-crawler --project psf/requests --output requests.json
"""

from __future__ import annotations

import argparse
from typing import Optional

from prefect.logging import get_logger

from dependents_crawler.flows.dependents_flow import dependents_crawl_flow

logger = get_logger("dependents_crawler.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Crawl the GitHub dependents listing of a package"
    )
    parser.add_argument("--project", required=True, help="Package repository, e.g. owner/repo")
    parser.add_argument("--cache-dir", default="cache", help="Directory for cached responses")
    parser.add_argument("--output", default="results.json", help="Output JSON file path")
    parser.add_argument(
        "--dependent-type",
        default="PACKAGE",
        choices=["PACKAGE", "REPOSITORY"],
        help="Which dependents listing to crawl",
    )
    parser.add_argument("--jitter-ms", type=int, default=250, help="Max random delay between attempts")
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=None,
        help="Give up on a page after this many attempts (default: retry forever)",
    )
    return parser


def main(argv: Optional[list] = None) -> int:
    args = build_parser().parse_args(argv)
    config = {
        "project": args.project,
        "cache_dir": args.cache_dir,
        "output_path": args.output,
        "dependent_type": args.dependent_type,
        "jitter_ms": args.jitter_ms,
        "max_attempts": args.max_attempts,
    }

    try:
        dependents_crawl_flow(config)
    except Exception:
        logger.exception("Crawl of %s failed", args.project)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
