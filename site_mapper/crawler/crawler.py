# === FILE: site_mapper/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import logging
import time
from typing import List, Optional

from site_mapper.config import CrawlerConfig
from site_mapper.crawler.fetcher import FetchError, FetchFunc
from site_mapper.crawler.link_extractor import scan
from site_mapper.crawler.models import Page
from site_mapper.crawler.visited import VisitedSet
from site_mapper.logger import LOGGER_NAME
from site_mapper.utils import request_uri, resolve_url, url_path

__all__ = ("AsyncCrawler",)


class AsyncCrawler:
    """Recursive fan-out/fan-in crawler over one host.

    Every discovered link becomes its own task; a parent waits for its own
    children only and appends their pages after its own, in the order the
    children finish. One :class:`VisitedSet` is shared by all branches of a
    crawler, so build a fresh crawler per crawl.
    """

    def __init__(
        self,
        config: CrawlerConfig,
        fetch: FetchFunc,
        visited: Optional[VisitedSet] = None,
    ) -> None:
        self.config = config
        self._fetch = fetch
        self.visited = visited if visited is not None else VisitedSet(config.max_pages)
        self.failed: List[str] = []
        self.logger = logging.getLogger(LOGGER_NAME)
        self._slots = asyncio.Semaphore(config.concurrency)

    async def crawl(self, url: str) -> List[Page]:
        """Crawl *url* and everything reachable from it, return the pages found."""
        self.logger.info("Crawl started: %s", url)
        start = time.monotonic()
        pages = await self._crawl(url)
        duration = time.monotonic() - start
        self.logger.info(
            "Finished crawling %s: %d pages in %.2f s", url, len(pages), duration
        )
        if self.failed:
            self.logger.info("Pages that could not be fetched: %d", len(self.failed))
        if self.visited.exhausted:
            self.logger.warning("Page cap of %s reached, crawl truncated", self.config.max_pages)
        return pages

    async def _crawl(self, url: str) -> List[Page]:
        if not self.visited.try_claim(request_uri(url)):
            return []

        self.logger.debug("Crawling URL: %s", url)
        try:
            async with self._slots:
                content = await self._fetch(url)
        except FetchError as exc:
            self.logger.warning("Error fetching page for URL %s: %s", url, exc.reason)
            self.failed.append(url)
            return []

        links, assets = scan(content, url)
        pages = [Page(path=url_path(url), links=links, assets=assets)]

        children: List[str] = []
        for link in links:
            try:
                children.append(resolve_url(url, link))
            except ValueError as exc:
                self.logger.warning("Unable to parse child link %s: %s", link, exc)

        if children:
            async with asyncio.TaskGroup() as tg:
                for child in children:
                    tg.create_task(self._collect(child, pages))
        return pages

    async def _collect(self, url: str, into: List[Page]) -> None:
        into.extend(await self._crawl(url))
