# site_walker/crawler/errors.py
"""
Failure taxonomy for a single fetch.

Every error here is local to the URL that produced it: the crawl logs it and
carries on with an empty link batch.
"""
from __future__ import annotations

from typing import Optional

__all__ = ("FetchError", "TransportError", "StatusError", "ContentError")


class FetchError(Exception):
    """Base class for failures of one fetch."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(message)
        self.url = url


class TransportError(FetchError):
    """Connection failure, DNS error or timeout."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(url, f"getting {url}: {reason}")


class StatusError(FetchError):
    """The server answered with a non-success HTTP status."""

    def __init__(self, url: str, status: int, reason: Optional[str] = None) -> None:
        text = f"{status} {reason}" if reason else str(status)
        super().__init__(url, f"getting {url}: {text}")
        self.status = status


class ContentError(FetchError):
    """The body could not be decoded or parsed as HTML."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(url, f"parsing {url} as HTML: {reason}")
