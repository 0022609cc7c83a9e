# site_walker/crawler/fetcher.py
"""
Fetcher module: one HTTP GET per call, with timeout and optional retry/backoff.

Failures are raised as :class:`~site_walker.crawler.errors.FetchError`
subclasses; the caller decides what a failure means for the crawl.
"""
from __future__ import annotations

import asyncio
from typing import List, Optional, Sequence

from aiohttp import ClientError, ClientSession, ClientTimeout

from site_walker.config import CrawlerConfig
from site_walker.crawler.errors import ContentError, FetchError, StatusError, TransportError
from site_walker.crawler.link_extractor import extract_links
from site_walker.crawler.models import PageData
from site_walker.logger import logger

__all__ = ("Fetcher", "LinkFetcher")


class Fetcher:
    """Handles HTTP fetching with timeout and bounded retries."""

    _RETRY_STATUS: Sequence[int] = tuple(range(500, 600)) + (429,)

    def __init__(self, config: CrawlerConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self) -> Fetcher:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    async def fetch(self, url: str) -> PageData:
        """
        Fetch *url* and return its decoded HTML body.

        Transport errors and 5xx/429 answers are retried up to
        ``config.retry_times`` times; anything else fails at once.
        """
        attempts = 0
        while True:
            try:
                return await self._get(url)
            except (TransportError, StatusError) as exc:
                if not self._retryable(exc) or attempts >= self.config.retry_times:
                    raise
                attempts += 1
                backoff = min(60.0, self.config.retry_backoff * 2 ** (attempts - 1))
                logger.debug("Retry %d/%d for %s after %.2f s", attempts, self.config.retry_times, url, backoff)
                await asyncio.sleep(backoff)

    async def _get(self, url: str) -> PageData:
        if not self.session:
            raise RuntimeError("Session not initialized")
        try:
            async with self.session.get(url) as resp:
                if not 200 <= resp.status < 300:
                    raise StatusError(url, resp.status, resp.reason)
                mime = resp.headers.get("Content-Type", "").split(";", 1)[0].strip().lower()
                if mime and "html" not in mime:
                    raise ContentError(url, f"unexpected content type {mime}")
                try:
                    text = await resp.text()
                except (UnicodeDecodeError, LookupError) as exc:
                    raise ContentError(url, str(exc)) from exc
                return PageData(str(resp.url), text, resp.status)
        except (ClientError, asyncio.TimeoutError) as exc:
            raise TransportError(url, str(exc) or type(exc).__name__) from exc
        except ValueError as exc:
            # yarl rejects some malformed URLs before any request is sent
            raise TransportError(url, str(exc)) from exc

    def _retryable(self, exc: FetchError) -> bool:
        if isinstance(exc, StatusError):
            return exc.status in self._RETRY_STATUS
        return True


class LinkFetcher:
    """The ``Fetch(url) -> links`` operation used by the crawl: fetch, then extract links."""

    def __init__(self, fetcher: Fetcher) -> None:
        self.fetcher = fetcher

    async def __call__(self, url: str) -> List[str]:
        page = await self.fetcher.fetch(url)
        return extract_links(page)
