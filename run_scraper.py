# run_scraper.py
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import requests

from bbref.config import get_settings
from bbref.crawl import scrape_season
from bbref.logging_utils import get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Scrape basketball-reference player gamelogs for one season"
    )
    parser.add_argument(
        "--season",
        type=str,
        help="Season to scrape, by its ending year. Example: --season 2022 (2021-22)",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        help="Directory for <id>.csv gamelogs and index.json. Default: output/gamelogs",
    )
    parser.add_argument(
        "--workers",
        type=int,
        help="Concurrent page fetches (default: 4)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Also write logs to this file",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log per-cell parsing details",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    overrides = {}
    if args.season:
        overrides["season"] = args.season
    if args.output_dir:
        overrides["output_dir"] = Path(args.output_dir)
    if args.workers:
        overrides["max_workers"] = args.workers
    if args.log_file:
        overrides["log_file"] = args.log_file
    if args.verbose:
        overrides["log_level"] = "DEBUG"
    settings = get_settings().model_copy(update=overrides)

    setup_logging(
        level=settings.log_level,
        log_file=settings.log_file,
    )

    logger.info("Scraping %s gamelogs into %s", settings.season, settings.output_dir)
    try:
        names = scrape_season(settings)
    except requests.RequestException as e:
        logger.error("Could not load teams index %s: %s", settings.teams_url, e)
        return 1

    logger.info("Done. %d gamelogs written, index at %s", len(names), settings.index_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
