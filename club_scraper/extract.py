"""HTML extraction for listing and detail pages."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup, Tag

from .config import BASE_ORIGIN, LOGO_ALT_PREFIX
from .errors import ExtractionMiss
from .models import DetailFields, EntityStub

logger = logging.getLogger("club_scraper")

PRIMARY_IMAGE_SELECTOR = "picture img.img-fluid"
SECONDARY_IMAGE_SELECTOR = ".card-body address img"


def _resolve(base: str, src: str) -> str:
    # Listing markup uses root-relative paths; urljoin also copes with bare ones.
    return urljoin(base.rstrip("/") + "/", src.strip())


def clean_logo_label(alt: Optional[str]) -> str:
    """Strip the boilerplate prefix from a logo's alt text."""
    return (alt or "").replace(LOGO_ALT_PREFIX, "", 1).strip()


def _stub_from_row(row: Tag) -> Optional[EntityStub]:
    img = row.find("img")
    anchors = row.find_all("a")
    if img is None or len(anchors) < 2:
        return None
    src = img.get("src")
    href = anchors[1].get("href")
    if not src or not href:
        return None
    return EntityStub(
        logo_url=_resolve(BASE_ORIGIN, src),
        logo_label=clean_logo_label(img.get("alt")),
        name=anchors[1].get_text().strip(),
        detail_url=_resolve(BASE_ORIGIN, href),
    )


def extract_listing(rows: Iterable[Tag]) -> List[EntityStub]:
    """Build stubs from listing rows, dropping rows without logo and link."""
    stubs: List[EntityStub] = []
    for row in rows:
        stub = _stub_from_row(row)
        if stub is not None:
            stubs.append(stub)
    return stubs


def parse_listing(html: str) -> List[EntityStub]:
    """Parse a letter page and return its stubs in document order."""
    soup = BeautifulSoup(html, "html.parser")
    return extract_listing(soup.find_all("li"))


def _select_src(soup: BeautifulSoup, selector: str, field: str, page_url: str) -> str:
    element = soup.select_one(selector)
    if element is None:
        raise ExtractionMiss(field, selector)
    src = element.get("src")
    if not src or not src.strip():
        raise ExtractionMiss(field, selector)
    parsed = urlparse(page_url)
    return urljoin(f"{parsed.scheme}://{parsed.netloc}/", src.strip())


def primary_image_url(soup: BeautifulSoup, page_url: str) -> str:
    """Return the large logo from the page's media section."""
    return _select_src(soup, PRIMARY_IMAGE_SELECTOR, "primary_image_url", page_url)


def secondary_image_url(soup: BeautifulSoup, page_url: str) -> str:
    """Return the shirt image from the address block of the card body."""
    return _select_src(soup, SECONDARY_IMAGE_SELECTOR, "secondary_image_url", page_url)


def extract_detail(html: str, page_url: str) -> DetailFields:
    """Extract enrichment fields; each missing field becomes None."""
    soup = BeautifulSoup(html, "html.parser")
    values = {}
    misses: List[str] = []
    for name, lookup in (
        ("primary_image_url", primary_image_url),
        ("secondary_image_url", secondary_image_url),
    ):
        try:
            values[name] = lookup(soup, page_url)
        except ExtractionMiss as exc:
            logger.debug("No %s on %s (%s)", name, page_url, exc.selector)
            values[name] = None
            misses.append(name)
    return DetailFields(
        primary_image_url=values["primary_image_url"],
        secondary_image_url=values["secondary_image_url"],
        misses=misses,
    )
