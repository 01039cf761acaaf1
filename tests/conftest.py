# File: tests/conftest.py
from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from typing import Dict, List

import pytest
from aiohttp import web

from site_mapper.config import CrawlerConfig
from site_mapper.crawler.fetcher import FetchError
from site_mapper.logger import LOGGER_NAME
from site_mapper.utils import request_uri


class FakeSite:
    """In-memory stand-in for the HTTP client.

    *pages* maps request URIs to markup; any other URI fails like an
    unreachable host. ``requests`` records every URL asked for, and
    ``max_in_flight`` the highest number of overlapping fetches.
    """

    def __init__(self, pages: Dict[str, str], delay: float = 0.0) -> None:
        self.pages = pages
        self.delay = delay
        self.requests: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def __call__(self, url: str) -> str:
        self.requests.append(url)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            uri = request_uri(url)
            if uri not in self.pages:
                raise FetchError(url, "connection refused")
            return self.pages[uri]
        finally:
            self.in_flight -= 1


def anchors(*hrefs: str) -> str:
    return "".join(f'<a href="{h}">{h}</a>' for h in hrefs)


@pytest.fixture(autouse=True)
def reset_project_logger():
    """Drop handlers installed by CLI runs so later tests log through caplog."""
    yield
    lg = logging.getLogger(LOGGER_NAME)
    for handler in lg.handlers[:]:
        lg.removeHandler(handler)
        handler.close()
    lg.propagate = True
    lg.setLevel(logging.NOTSET)


@pytest.fixture()
def basic_config() -> CrawlerConfig:
    """Return a basic valid CrawlerConfig for crawler tests."""
    return CrawlerConfig(concurrency=5, max_pages=100, timeout=2.0, user_agent="TestAgent/1.0")


@pytest.fixture()
def sample_site() -> Dict[str, str]:
    """
    ``/`` links to ``/foo`` and ``/bar?x=1`` (plus an external page), both of
    which link back to ``/`` and to each other.
    """
    return {
        "/": (
            '<html><head><link rel="stylesheet" href="/a.css">'
            '<script src="http://cdn.test/b.js"></script></head><body>'
            + anchors("/foo", "/bar?x=1", "http://other.test/page")
            + "</body></html>"
        ),
        "/foo": anchors("/", "/bar?x=1"),
        "/bar?x=1": anchors("/", "/foo"),
    }


async def serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()
