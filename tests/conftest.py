# File: tests/conftest.py
import asyncio
from typing import Dict, Iterable, List

import pytest

from site_walker.config import CrawlerConfig
from site_walker.crawler.errors import StatusError
from site_walker.crawler.models import PageData
from site_walker.logger import init_logging


class FakeWeb:
    """
    In-memory link graph standing in for HTTP + HTML parsing.

    Records every fetch and the peak number of fetches running at once.
    URLs in *failing* answer like a 404; URLs in *broken* raise RuntimeError.
    """

    def __init__(
        self,
        graph: Dict[str, List[str]],
        failing: Iterable[str] = (),
        broken: Iterable[str] = (),
        delay: float = 0.0,
    ) -> None:
        self.graph = graph
        self.failing = set(failing)
        self.broken = set(broken)
        self.delay = delay
        self.calls: List[str] = []
        self.active = 0
        self.peak = 0

    async def __call__(self, url: str) -> List[str]:
        self.calls.append(url)
        self.active += 1
        self.peak = max(self.peak, self.active)
        try:
            await asyncio.sleep(self.delay)
            if url in self.failing:
                raise StatusError(url, 404, "Not Found")
            if url in self.broken:
                raise RuntimeError("parser exploded")
            return list(self.graph.get(url, []))
        finally:
            self.active -= 1


@pytest.fixture(autouse=True)
def reset_logging():
    """CLI tests point the log handler at CliRunner streams; restore it afterwards."""
    yield
    init_logging()


@pytest.fixture()
def small_graph() -> Dict[str, List[str]]:
    """A links to B and C; B links back to A and on to D."""
    return {"A": ["B", "C"], "B": ["A", "D"], "C": [], "D": []}


@pytest.fixture()
def basic_config() -> CrawlerConfig:
    """
    Return a basic valid CrawlerConfig for fetcher tests.
    """
    return CrawlerConfig(
        timeout=2.0,
        user_agent="TestAgent/1.0",
        retry_backoff=0.0,
    )


@pytest.fixture()
def mock_page_data() -> PageData:
    """
    Provide a simple PageData instance with HTML content.
    """
    html = (
        '<html><body>'
        '<a href="/link1">L1</a>'
        '<a href="http://external.com">X</a>'
        '<a href="sub/page?q=1#frag">Rel</a>'
        '<a href="/link1">L1 again</a>'
        '<a name="anchor">no href</a>'
        '</body></html>'
    )
    return PageData(url="http://example.com/dir/index.html", content=html)
