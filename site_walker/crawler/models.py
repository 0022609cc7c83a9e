# site_walker/crawler/models.py
"""
Data models for the SiteWalker crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(slots=True)
class PageData:
    """Holds the final URL (after redirects), status and decoded body of a fetched page."""

    url: str
    content: str
    status: int = 200


@dataclass(slots=True)
class LinkBatch:
    """
    Links discovered on one page, in document order; duplicates allowed.

    ``source`` is the fetched URL (None for the seed batch) and ``error`` the
    failure message when the fetch failed, in which case ``links`` is empty.
    """

    links: List[str]
    depth: int = 0
    source: Optional[str] = None
    error: Optional[str] = None


@dataclass(slots=True)
class CrawlReport:
    """Outcome of one crawl invocation."""

    visited: List[str] = field(default_factory=list)
    failures: Dict[str, str] = field(default_factory=dict)
    skipped: int = 0
    peak_concurrency: int = 0
    duration: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "visited": list(self.visited),
            "failures": dict(self.failures),
            "skipped": self.skipped,
            "peak_concurrency": self.peak_concurrency,
            "duration": round(self.duration, 3),
        }
