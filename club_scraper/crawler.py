"""High-level orchestration of the letter-by-letter crawl."""

from __future__ import annotations

import logging
import time
from typing import List, Optional

import requests

from .browser import open_session
from .config import LISTING_URL_TEMPLATE, RunConfiguration
from .enrich import PageLoader, enrich
from .errors import FatalError, NavigationFailure
from .extract import parse_listing
from .models import PartitionMetrics, RunResult

logger = logging.getLogger("club_scraper")

ALPHABET = "abcdefghijklmnopqrstuvwxyz"


def partitions_for(config: RunConfiguration) -> List[str]:
    """Letters to crawl: just ``a`` in reduced mode, otherwise a to z."""
    if config.reduced_mode:
        return [ALPHABET[0]]
    return list(ALPHABET)


def listing_url(letter: str) -> str:
    return LISTING_URL_TEMPLATE.format(letter=letter)


async def crawl_partition(
    session: PageLoader,
    letter: str,
    config: RunConfiguration,
    result: RunResult,
    http: Optional[requests.Session] = None,
) -> PartitionMetrics:
    """Crawl one letter page and append every club it lists to ``result``."""
    start = time.perf_counter()
    url = listing_url(letter)
    logger.info('Scraping letter "%s": %s', letter.upper(), url)
    try:
        html = await session.load(url)
    except NavigationFailure as exc:
        raise FatalError(f"Listing page for {letter.upper()} did not load: {exc}") from exc

    stubs = parse_listing(html)
    logger.info('Found %d clubs for letter "%s"', len(stubs), letter.upper())

    partial = 0
    for index, stub in enumerate(stubs, start=1):
        logger.info("Processing club %d/%d: %s", index, len(stubs), stub.name)
        outcome = await enrich(session, stub, config, http)
        if outcome.is_partial:
            partial += 1
            logger.debug(
                "Partial enrichment for %s (%s)", stub.name, outcome.failure_kind
            )
        result.entities.append(outcome.entity)

    elapsed = time.perf_counter() - start
    logger.info('Completed letter "%s" in %.2fs', letter.upper(), elapsed)
    return PartitionMetrics(
        letter=letter,
        url=url,
        stub_count=len(stubs),
        partial_count=partial,
        seconds=elapsed,
    )


async def crawl(
    session: PageLoader,
    config: RunConfiguration,
    http: Optional[requests.Session] = None,
) -> RunResult:
    """Run every partition sequentially through a single navigation context."""
    overall_start = time.perf_counter()
    letters = partitions_for(config)
    if config.reduced_mode:
        logger.info('Reduced mode: only scraping clubs starting with "%s"', letters[0].upper())
    else:
        logger.info("Full mode: scraping clubs A-Z")

    if config.download_images:
        config.asset_dir.mkdir(parents=True, exist_ok=True)

    result = RunResult()
    for letter in letters:
        metrics = await crawl_partition(session, letter, config, result, http)
        result.partitions.append(metrics)

    result.total_seconds = time.perf_counter() - overall_start
    return result


async def run_crawler(config: RunConfiguration) -> RunResult:
    """Launch a browser, crawl with it, and close it again."""
    with requests.Session() as http:
        async with open_session(config) as session:
            return await crawl(session, config, http)
