# File: site_walker/engine.py
"""site_walker.engine: wiring of config, HTTP fetcher and coordinator for one crawl."""

from __future__ import annotations

from typing import Iterable, List, Optional

from site_walker.config import CrawlerConfig
from site_walker.crawler.coordinator import Coordinator, VisitHook
from site_walker.crawler.fetcher import Fetcher, LinkFetcher
from site_walker.crawler.link_extractor import outline
from site_walker.crawler.models import CrawlReport
from site_walker.logger import logger

__all__ = ["start_crawl", "fetch_outline"]


def _merge_seeds(cfg: CrawlerConfig, seeds: Optional[Iterable[str]]) -> List[str]:
    merged = list(cfg.seeds)
    if seeds:
        merged.extend(seeds)
    return merged


async def start_crawl(
    cfg: CrawlerConfig,
    seeds: Optional[Iterable[str]] = None,
    on_visit: Optional[VisitHook] = None,
) -> CrawlReport:
    """
    Crawl from the config seeds plus *seeds* and return the report.

    Parameters
    ----------
    cfg : CrawlerConfig
        Crawl configuration.
    seeds : iterable of str, optional
        Extra seed URLs, typically from the command line.
    on_visit : callable, optional
        Progress hook called with each URL as its fetch begins.
    """
    all_seeds = _merge_seeds(cfg, seeds)
    logger.info("Starting crawl: %d seed(s), concurrency %d", len(all_seeds), cfg.concurrency)
    async with Fetcher(cfg) as fetcher:
        coordinator = Coordinator(
            LinkFetcher(fetcher),
            concurrency=cfg.concurrency,
            max_urls=cfg.max_urls,
            max_depth=cfg.max_depth,
            on_visit=on_visit,
        )
        return await coordinator.run(all_seeds)


async def fetch_outline(cfg: CrawlerConfig, url: str) -> List[str]:
    """Fetch one page and return its tag outline."""
    async with Fetcher(cfg) as fetcher:
        page = await fetcher.fetch(url)
    return outline(page)
