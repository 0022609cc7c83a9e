# site_walker/crawler/limiter.py
"""
Counting gate that caps the number of fetches in flight.
"""
from __future__ import annotations

import asyncio
from types import TracebackType
from typing import Optional, Type

DEFAULT_CAPACITY = 20


class FetchLimiter:
    """
    ``async with limiter:`` holds one token for the duration of the block.

    The token is returned on every exit path, including exceptions and
    cancellation. ``active`` and ``peak`` are kept for reporting.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.capacity = capacity
        self._sem = asyncio.Semaphore(capacity)
        self.active = 0
        self.peak = 0

    async def acquire(self) -> None:
        await self._sem.acquire()
        self.active += 1
        if self.active > self.peak:
            self.peak = self.active

    def release(self) -> None:
        self.active -= 1
        self._sem.release()

    async def __aenter__(self) -> FetchLimiter:
        await self.acquire()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.release()
