import asyncio

import pytest

from club_scraper.config import RunConfiguration
from club_scraper.enrich import enrich
from club_scraper.errors import FatalError
from club_scraper.models import (
    EXTRACTION_MISS,
    FETCH_ERROR,
    NAVIGATION_FAILURE,
    EntityStub,
)

STUB = EntityStub(
    logo_url="https://www.hollandsevelden.nl/img/logos/ajax-small.png",
    logo_label="Ajax",
    name="Ajax",
    detail_url="https://www.hollandsevelden.nl/clubs/a/ajax/",
)
BIG_LOGO = "https://www.hollandsevelden.nl/img/logos/big/ajax.png?v=3"


def test_enrich_downloads_primary_image(tmp_path, detail_html, fake_session, fake_http, fake_response):
    config = RunConfiguration(download_images=True, output_root=tmp_path)
    session = fake_session({STUB.detail_url: detail_html})
    http = fake_http({BIG_LOGO: fake_response(200, [b"png"])})

    outcome = asyncio.run(enrich(session, STUB, config, http))

    assert not outcome.is_partial
    entity = outcome.entity
    assert entity.name == "Ajax"
    assert entity.primary_image_url == BIG_LOGO
    assert entity.local_image_path == "logos/big/ajax.png"
    assert (tmp_path / "logos" / "big" / "ajax.png").read_bytes() == b"png"


def test_enrich_without_downloads_never_fetches(tmp_path, detail_html, fake_session, fake_http, fake_response):
    config = RunConfiguration(download_images=False, output_root=tmp_path)
    http = fake_http({BIG_LOGO: fake_response(200, [b"png"])})

    outcome = asyncio.run(enrich(fake_session({STUB.detail_url: detail_html}), STUB, config, http))

    assert outcome.entity.primary_image_url == BIG_LOGO
    assert outcome.entity.local_image_path is None
    assert http.requested == []
    assert not (tmp_path / "logos").exists()


def test_enrich_failed_download_is_partial(tmp_path, detail_html, fake_session, fake_http, fake_response):
    config = RunConfiguration(download_images=True, output_root=tmp_path)
    http = fake_http({BIG_LOGO: fake_response(404, [])})

    outcome = asyncio.run(enrich(fake_session({STUB.detail_url: detail_html}), STUB, config, http))

    assert outcome.is_partial
    assert outcome.failure_kind == FETCH_ERROR
    assert outcome.entity.primary_image_url == BIG_LOGO
    assert outcome.entity.local_image_path is None
    assert not (tmp_path / "logos" / "big" / "ajax.png").exists()


def test_enrich_navigation_failure_still_returns_entity(tmp_path, fake_session, fake_http):
    config = RunConfiguration(output_root=tmp_path)
    outcome = asyncio.run(enrich(fake_session({}), STUB, config, fake_http()))

    assert outcome.is_partial
    assert outcome.failure_kind == NAVIGATION_FAILURE
    assert outcome.entity.name == "Ajax"
    assert outcome.entity.primary_image_url is None
    assert outcome.entity.secondary_image_url is None
    assert outcome.entity.local_image_path is None


def test_enrich_missing_fields_is_partial(tmp_path, fake_session, fake_http, empty_detail_html):
    config = RunConfiguration(output_root=tmp_path)
    http = fake_http()
    outcome = asyncio.run(enrich(fake_session({STUB.detail_url: empty_detail_html}), STUB, config, http))

    assert outcome.failure_kind == EXTRACTION_MISS
    assert outcome.entity.primary_image_url is None
    assert http.requested == []


def test_enrich_lets_fatal_errors_through(tmp_path):
    class DeadSession:
        async def load(self, url):
            raise FatalError("browser crashed")

    with pytest.raises(FatalError):
        asyncio.run(enrich(DeadSession(), STUB, RunConfiguration(output_root=tmp_path)))
