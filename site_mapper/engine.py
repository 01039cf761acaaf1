"""site_mapper.engine: entry point that validates a seed URL, runs one crawl and builds the sitemap."""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlsplit

from site_mapper.config import CrawlerConfig
from site_mapper.crawler.crawler import AsyncCrawler
from site_mapper.crawler.fetcher import Fetcher, FetchFunc
from site_mapper.crawler.models import Sitemap
from site_mapper.crawler.visited import VisitedSet
from site_mapper.logger import logger

__all__ = ["CrawlError", "crawl", "validate_seed"]


class CrawlError(ValueError):
    """The seed URL cannot be crawled."""


def validate_seed(url: str) -> None:
    """Raise CrawlError unless *url* carries both a host and a path."""
    try:
        parts = urlsplit(url)
    except ValueError as exc:
        raise CrawlError(f"invalid URL {url!r}: {exc}") from exc
    if not parts.netloc:
        raise CrawlError(f"host missing from URL {url!r}")
    if not parts.path:
        raise CrawlError(f"path missing from URL {url!r}")


async def crawl(
    url: str,
    config: Optional[CrawlerConfig] = None,
    fetch: Optional[FetchFunc] = None,
) -> Sitemap:
    """Crawl every same-host page reachable from *url* and return its sitemap.

    *fetch* replaces the HTTP client; it must return the page body or raise
    :class:`~site_mapper.crawler.fetcher.FetchError`. Each call gets its own
    visited set, so concurrent crawls do not interfere.
    """
    validate_seed(url)
    config = config or CrawlerConfig()
    visited = VisitedSet(config.max_pages)

    if fetch is not None:
        pages = await AsyncCrawler(config, fetch, visited).crawl(url)
    else:
        async with Fetcher(config) as fetcher:
            pages = await AsyncCrawler(config, fetcher.fetch, visited).crawl(url)

    logger.debug("Visited %d identifiers for %s", len(visited), url)
    return Sitemap(url=url, pages=pages)
