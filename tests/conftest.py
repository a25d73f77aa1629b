from typing import Dict, Iterable, List, Optional

import pytest
import requests

from club_scraper.errors import NavigationFailure


LISTING_A = """
<html><body>
<ul class="nav"><li><a href="/">Home</a></li></ul>
<ul class="clubs">
  <li>
    <a href="/clubs/a/ajax/"><img src="/img/logos/ajax-small.png" alt="Clublogo voetbalvereniging Ajax"></a>
    <a href="/clubs/a/ajax/">  Ajax  </a>
  </li>
  <li>
    <a href="/clubs/a/az/"><img src="/img/logos/az-small.png" alt="Clublogo voetbalvereniging AZ "></a>
    <a href="/clubs/a/az/">AZ</a>
  </li>
  <li><a href="/clubs/a/no-logo/">No logo</a><a href="/clubs/a/no-logo/">No logo</a></li>
  <li><img src="/img/logos/lonely.png" alt="Clublogo voetbalvereniging Lonely"><a href="/x/">Lonely</a></li>
</ul>
</body></html>
"""

DETAIL_FULL = """
<html><body>
<picture><img class="img-fluid" src="/img/logos/big/ajax.png?v=3" alt="Ajax"></picture>
<div class="card"><div class="card-body">
  <address>Arena 1<img src="shirts/ajax.png"></address>
</div></div>
</body></html>
"""

DETAIL_EMPTY = "<html><body><p>Nothing here</p></body></html>"


class FakeSession:
    """Serves canned HTML per URL; unknown URLs fail to load."""

    def __init__(self, pages: Dict[str, str]) -> None:
        self.pages = pages
        self.visited: List[str] = []

    async def load(self, url: str) -> str:
        self.visited.append(url)
        if url not in self.pages:
            raise NavigationFailure(url, "HTTP 404")
        return self.pages[url]


class FakeResponse:
    def __init__(self, status: int, chunks: Iterable[bytes], fail_after: Optional[int] = None) -> None:
        self.status_code = status
        self.chunks = list(chunks)
        self.fail_after = fail_after

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")

    def iter_content(self, chunk_size: int = 1):
        for index, chunk in enumerate(self.chunks):
            if self.fail_after is not None and index >= self.fail_after:
                raise requests.ConnectionError("connection reset")
            yield chunk


class FakeHttp:
    """Stand-in for requests.Session keyed by URL."""

    def __init__(self, responses: Optional[Dict[str, FakeResponse]] = None) -> None:
        self.responses = responses or {}
        self.requested: List[str] = []

    def get(self, url: str, stream: bool = False, timeout: float = 0):
        self.requested.append(url)
        if url not in self.responses:
            raise requests.ConnectionError(f"no route to {url}")
        return self.responses[url]


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def fake_http():
    return FakeHttp


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def listing_html() -> str:
    return LISTING_A


@pytest.fixture
def detail_html() -> str:
    return DETAIL_FULL


@pytest.fixture
def empty_detail_html() -> str:
    return DETAIL_EMPTY
