"""Detail-page enrichment for a single club."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

import requests

from .assets import asset_destination, fetch
from .config import ASSET_SUBDIR, RunConfiguration
from .errors import FatalError, FetchError, NavigationFailure
from .extract import extract_detail
from .models import (
    EXTRACTION_MISS,
    FETCH_ERROR,
    NAVIGATION_FAILURE,
    UNEXPECTED_ERROR,
    EnrichedEntity,
    EnrichmentOutcome,
    EntityStub,
)

logger = logging.getLogger("club_scraper")


class PageLoader(Protocol):
    async def load(self, url: str) -> str:
        ...


def download_primary_image(
    entity: EnrichedEntity,
    config: RunConfiguration,
    http: Optional[requests.Session] = None,
) -> bool:
    """Fetch the entity's primary image and record its relative path."""
    assert entity.primary_image_url is not None
    try:
        destination = asset_destination(entity.primary_image_url, config.asset_dir)
        fetch(entity.primary_image_url, destination, session=http)
    except FetchError as exc:
        logger.warning("Failed to download image for %s: %s", entity.name, exc)
        entity.local_image_path = None
        return False
    entity.local_image_path = (ASSET_SUBDIR / destination.name).as_posix()
    logger.info("Downloaded %s", destination.name)
    return True


async def enrich(
    session: PageLoader,
    stub: EntityStub,
    config: RunConfiguration,
    http: Optional[requests.Session] = None,
) -> EnrichmentOutcome:
    """Visit the stub's detail page and return the enriched entity.

    Per-club failures never escape: the entity comes back with the fields
    that could be filled and the outcome is marked partial.
    """
    entity = EnrichedEntity.from_stub(stub)
    try:
        html = await session.load(stub.detail_url)
        detail = extract_detail(html, stub.detail_url)
        entity.primary_image_url = detail.primary_image_url
        entity.secondary_image_url = detail.secondary_image_url

        downloaded = True
        if entity.primary_image_url and config.download_images:
            downloaded = download_primary_image(entity, config, http)
        elif entity.primary_image_url:
            logger.debug("Skipped download (disabled) for %s", entity.name)
    except FatalError:
        raise
    except NavigationFailure as exc:
        logger.warning("Error processing club %s: %s", stub.name, exc)
        return EnrichmentOutcome.partial(entity, NAVIGATION_FAILURE, str(exc))
    except Exception as exc:  # pylint: disable=broad-except
        logger.warning("Error processing club %s: %s", stub.name, exc)
        return EnrichmentOutcome.partial(entity, UNEXPECTED_ERROR, str(exc))

    if not downloaded:
        return EnrichmentOutcome.partial(entity, FETCH_ERROR)
    if detail.misses:
        return EnrichmentOutcome.partial(
            entity, EXTRACTION_MISS, ", ".join(detail.misses)
        )
    return EnrichmentOutcome.success(entity)
