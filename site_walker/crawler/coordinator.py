# site_walker/crawler/coordinator.py
"""
Worklist coordinator: breadth-first traversal with deduplication, bounded
concurrency and termination detection.

One coordinator loop owns the dedup set and the outstanding-work counter.
Fetch tasks never touch either; they hand their link batch back through a
queue, so the loop is the single writer and no locks are needed.
"""
from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Callable, Iterable, List, Optional, Set

import click

from site_walker.crawler.dedup import DedupSet
from site_walker.crawler.errors import FetchError
from site_walker.crawler.limiter import DEFAULT_CAPACITY, FetchLimiter
from site_walker.crawler.models import CrawlReport, LinkBatch
from site_walker.logger import logger

__all__ = ("Coordinator", "FetchFunc", "crawl", "echo_url")

FetchFunc = Callable[[str], Awaitable[List[str]]]
VisitHook = Callable[[str], None]


def echo_url(url: str) -> None:
    """Default progress line: the URL being visited, on stdout."""
    click.echo(url)


class Coordinator:
    """
    Dispatches one fetch task per unseen URL and waits until every dispatched
    task has reported back.

    ``outstanding`` counts batches not yet received: the seed batch plus every
    dispatched fetch. Each fetch delivers exactly one batch (empty on
    failure), so the loop ends exactly when no more work can appear.
    """

    def __init__(
        self,
        fetch: FetchFunc,
        concurrency: int = DEFAULT_CAPACITY,
        max_urls: Optional[int] = None,
        max_depth: Optional[int] = None,
        on_visit: Optional[VisitHook] = None,
    ) -> None:
        self.fetch = fetch
        self.limiter = FetchLimiter(concurrency)
        self.max_urls = max_urls
        self.max_depth = max_depth
        self.on_visit = on_visit or echo_url
        self.seen = DedupSet()
        self.outstanding = 0
        self.report = CrawlReport()
        self._tasks: Set[asyncio.Task] = set()
        # URLs turned away by a cap and never dispatched
        self._refused: Set[str] = set()

    async def run(self, seeds: Iterable[str]) -> CrawlReport:
        """Crawl from *seeds* until no fetch is outstanding; return the report."""
        start = time.monotonic()
        self.seen = DedupSet()
        self.report = CrawlReport()
        self._refused = set()
        queue: asyncio.Queue[LinkBatch] = asyncio.Queue()

        self.outstanding = 1
        queue.put_nowait(LinkBatch(list(seeds), depth=0))

        while self.outstanding > 0:
            batch = await queue.get()
            self.outstanding -= 1
            if batch.error is not None and batch.source is not None:
                self.report.failures[batch.source] = batch.error
            self._dispatch(batch, queue)

        # every task has already delivered; let them finish unwinding
        if self._tasks:
            await asyncio.gather(*self._tasks)

        self.report.skipped = len(self._refused)
        self.report.peak_concurrency = self.limiter.peak
        self.report.duration = time.monotonic() - start
        logger.info(
            "Crawl finished: %d visited, %d failed in %.2f s",
            len(self.report.visited),
            len(self.report.failures),
            self.report.duration,
        )
        return self.report

    def _dispatch(self, batch: LinkBatch, queue: asyncio.Queue[LinkBatch]) -> None:
        for url in batch.links:
            if not self._admits(batch.depth):
                if url not in self.seen:
                    self._refused.add(url)
                continue
            if not self.seen.mark(url):
                continue
            self._refused.discard(url)
            self.outstanding += 1
            self.report.visited.append(url)
            task = asyncio.create_task(self._fetch_task(url, batch.depth, queue))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

    def _admits(self, depth: int) -> bool:
        if self.max_depth is not None and depth > self.max_depth:
            return False
        if self.max_urls is not None and len(self.report.visited) >= self.max_urls:
            return False
        return True

    async def _fetch_task(self, url: str, depth: int, queue: asyncio.Queue[LinkBatch]) -> None:
        links: List[str] = []
        error: Optional[str] = None
        try:
            async with self.limiter:
                self.on_visit(url)
                links = list(await self.fetch(url))
        except FetchError as exc:
            logger.warning("%s", exc)
            error = str(exc)
        except Exception as exc:
            logger.exception("Unexpected error while fetching %s", url)
            error = f"{type(exc).__name__}: {exc}"
        finally:
            queue.put_nowait(LinkBatch(links, depth=depth + 1, source=url, error=error))


async def crawl(seeds: Iterable[str], fetch: FetchFunc, **kwargs) -> CrawlReport:
    """Run one traversal with a fresh :class:`Coordinator`."""
    return await Coordinator(fetch, **kwargs).run(seeds)
