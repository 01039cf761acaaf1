# site_mapper/crawler/fetcher.py
"""
Fetcher module: plain HTTP GET of a page body with timeout and retry/backoff.

Status codes and content types are not interpreted; whatever body the server
sends back is the page content.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from aiohttp import ClientError, ClientSession, ClientTimeout

from site_mapper.config import CrawlerConfig
from site_mapper.logger import LOGGER_NAME

__all__ = ("FetchError", "FetchFunc", "Fetcher")

#: Signature of anything the crawler can use to load a page.
FetchFunc = Callable[[str], Awaitable[str]]


class FetchError(Exception):
    """Transport-level failure while loading *url*."""

    def __init__(self, url: str, reason: object) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class Fetcher:
    """Loads page bodies through an aiohttp session.

    Use as an async context manager to own the session, or pass an existing
    *session* to share one.
    """

    def __init__(self, config: CrawlerConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self.session = session
        self._owns_session = session is None
        self.logger = logging.getLogger(LOGGER_NAME)

    async def __aenter__(self) -> Fetcher:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    async def fetch(self, url: str) -> str:
        """
        Return the decoded body of *url*.

        Raises FetchError at once for an undecodable body, and after
        ``retry_times`` retries of a connection error or a timeout.
        """
        if not self.session:
            raise RuntimeError("Session not initialized")

        attempts = 0
        while True:
            try:
                async with self.session.get(url) as resp:
                    return await resp.text()
            except UnicodeDecodeError as exc:
                raise FetchError(url, exc) from exc
            except (ClientError, asyncio.TimeoutError) as exc:
                attempts += 1
                if attempts > self.config.retry_times:
                    raise FetchError(url, exc) from exc
                # exponential backoff, cap at 60s
                backoff = min(2**attempts, 60)
                self.logger.debug(
                    "Retry %d/%d for %s after %s s", attempts, self.config.retry_times, url, backoff
                )
                await asyncio.sleep(backoff)

    __call__ = fetch
