"""site_walker.crawler: fetch, link extraction and the worklist coordinator."""

from .coordinator import Coordinator, crawl
from .dedup import DedupSet
from .errors import ContentError, FetchError, StatusError, TransportError
from .limiter import FetchLimiter
from .models import CrawlReport, LinkBatch, PageData

__all__ = [
    "Coordinator",
    "crawl",
    "DedupSet",
    "FetchLimiter",
    "FetchError",
    "TransportError",
    "StatusError",
    "ContentError",
    "CrawlReport",
    "LinkBatch",
    "PageData",
]
