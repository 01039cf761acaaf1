# File: tests/test_fetcher.py
from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from aiohttp import web

from site_mapper.config import CrawlerConfig
from site_mapper.crawler.fetcher import Fetcher, FetchError
from site_mapper.engine import crawl

from tests.conftest import anchors, serve_app


@pytest.fixture()
def seen_agents() -> list:
    return []


@pytest_asyncio.fixture
async def test_server(unused_tcp_port: int, sample_site, seen_agents) -> AsyncIterator[str]:
    app = web.Application()

    async def handle_root(request):
        seen_agents.append(request.headers.get("User-Agent"))
        return web.Response(text=sample_site["/"], content_type="text/html")

    async def handle_foo(_):
        # content type is not filtered
        return web.Response(text=sample_site["/foo"], content_type="application/xml")

    async def handle_bar(_):
        return web.Response(text=sample_site["/bar?x=1"], content_type="text/html")

    async def handle_missing(_):
        return web.Response(text="<h1>Not Found</h1>" + anchors("/"), status=404, content_type="text/html")

    async def handle_binary(_):
        return web.Response(body=b"\xff\xfe\xfa\x00", content_type="text/html", charset="utf-8")

    app.router.add_get("/", handle_root)
    app.router.add_get("/foo", handle_foo)
    app.router.add_get("/bar", handle_bar)
    app.router.add_get("/missing", handle_missing)
    app.router.add_get("/binary", handle_binary)

    async for url in serve_app(app, unused_tcp_port):
        yield url


@pytest.mark.asyncio()
async def test_fetch_returns_body(basic_config, test_server: str, sample_site):
    async with Fetcher(basic_config) as fetcher:
        body = await fetcher.fetch(f"{test_server}/")
    assert body == sample_site["/"]


@pytest.mark.asyncio()
async def test_fetch_ignores_status_code(basic_config, test_server: str):
    async with Fetcher(basic_config) as fetcher:
        body = await fetcher.fetch(f"{test_server}/missing")
    assert "Not Found" in body


@pytest.mark.asyncio()
async def test_fetch_undecodable_body_raises(basic_config, test_server: str):
    async with Fetcher(basic_config) as fetcher:
        with pytest.raises(FetchError) as info:
            await fetcher.fetch(f"{test_server}/binary")
    assert info.value.url == f"{test_server}/binary"
    assert isinstance(info.value.reason, UnicodeDecodeError)


@pytest.mark.asyncio()
async def test_fetch_connection_refused(basic_config, unused_tcp_port: int):
    async with Fetcher(basic_config) as fetcher:
        with pytest.raises(FetchError):
            await fetcher.fetch(f"http://localhost:{unused_tcp_port}/")


@pytest.mark.asyncio()
async def test_fetch_retries_with_backoff(monkeypatch, unused_tcp_port: int):
    delays = []

    async def fake_sleep(delay):
        delays.append(delay)

    monkeypatch.setattr("site_mapper.crawler.fetcher.asyncio.sleep", fake_sleep)
    config = CrawlerConfig(retry_times=2, timeout=2.0)
    async with Fetcher(config) as fetcher:
        with pytest.raises(FetchError):
            await fetcher(f"http://127.0.0.1:{unused_tcp_port}/")
    assert [d for d in delays if d] == [2, 4]


@pytest.mark.asyncio()
async def test_fetch_requires_session(basic_config):
    with pytest.raises(RuntimeError):
        await Fetcher(basic_config).fetch("http://localhost/")


@pytest.mark.asyncio()
async def test_crawl_over_http(basic_config, test_server: str):
    sitemap = await crawl(f"{test_server}/", basic_config)

    pages = {p.path: p for p in sitemap.pages}
    assert sorted(pages) == ["/", "/bar", "/foo"]
    assert sitemap.pages[0].path == "/"
    assert pages["/"].links == ["/bar?x=1", "/foo"]
    assert pages["/"].assets == ["/a.css", "http://cdn.test/b.js"]
    assert pages["/foo"].links == ["/", "/bar?x=1"]


@pytest.mark.asyncio()
async def test_crawl_sends_user_agent(test_server: str, seen_agents):
    await crawl(f"{test_server}/", CrawlerConfig(user_agent="TestAgent/1.0"))
    assert seen_agents == ["TestAgent/1.0"]


@pytest.mark.asyncio()
async def test_undecodable_body_is_not_retried(monkeypatch, test_server: str):
    delays = []

    async def fake_sleep(delay):
        delays.append(delay)

    monkeypatch.setattr("site_mapper.crawler.fetcher.asyncio.sleep", fake_sleep)
    async with Fetcher(CrawlerConfig(retry_times=3, timeout=2.0)) as fetcher:
        with pytest.raises(FetchError):
            await fetcher.fetch(f"{test_server}/binary")
    assert [d for d in delays if d] == []
