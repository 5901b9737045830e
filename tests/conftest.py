"""Shared test fixtures."""

from __future__ import annotations

from typing import Callable

import httpx
import pytest

from uscf_roster.core.config import ScraperConfig
from uscf_roster.scraping.api import RatingsClient

API_HOST = "ratings-api.uschess.org"
SITE_HOST = "ratings.uschess.org"


def route(pages: dict[tuple[str, str], object]) -> Callable[[httpx.Request], httpx.Response]:
    """Handler serving canned responses keyed by (host, path).

    Values may be a dict/list (JSON body), a str (HTML body), an int (bare
    status code) or an exception instance to raise. Unknown routes get 404.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        key = (request.url.host, request.url.path)
        if key not in pages:
            return httpx.Response(404)
        value = pages[key]
        if isinstance(value, Exception):
            raise value
        if isinstance(value, int):
            return httpx.Response(value)
        if isinstance(value, str):
            return httpx.Response(200, text=value)
        return httpx.Response(200, json=value)

    return handler


@pytest.fixture
def config() -> ScraperConfig:
    return ScraperConfig()


@pytest.fixture
def make_client(config):
    """Factory for a RatingsClient served by a handler or a route table."""

    def _make(handler) -> RatingsClient:
        if not callable(handler):
            handler = route(handler)
        return RatingsClient(config, transport=httpx.MockTransport(handler))

    return _make
