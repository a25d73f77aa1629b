"""Image downloading utilities."""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import Optional
from urllib.parse import unquote, urlparse

import requests

from .errors import FetchError

logger = logging.getLogger("club_scraper")

DEFAULT_TIMEOUT = 15.0
CHUNK_SIZE = 64 * 1024


def filename_from_url(url: str) -> str:
    """Basename of the URL path, ignoring query string and fragment."""
    name = PurePosixPath(unquote(urlparse(url).path)).name
    if not name:
        raise FetchError(f"Cannot derive a filename from {url}")
    return name


def asset_destination(url: str, asset_dir: Path) -> Path:
    return asset_dir / filename_from_url(url)


def _discard(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning("Could not remove partial download %s: %s", path, exc)


def fetch(
    url: str,
    destination: Path,
    session: Optional[requests.Session] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Path:
    """Download ``url`` to ``destination`` in a single attempt.

    Parent directories are created as needed. Raises FetchError on a
    network error, a non-success status or a failed write; in every failure
    case nothing is left at ``destination``.
    """
    http = session or requests.Session()
    destination.parent.mkdir(parents=True, exist_ok=True)
    try:
        with http.get(url, stream=True, timeout=timeout) as resp:
            resp.raise_for_status()
            with destination.open("wb") as handle:
                for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        handle.write(chunk)
    except requests.RequestException as exc:
        _discard(destination)
        raise FetchError(f"Failed to get {url}: {exc}") from exc
    except OSError as exc:
        _discard(destination)
        raise FetchError(f"Failed to write {destination}: {exc}") from exc
    finally:
        if session is None:
            http.close()
    return destination
