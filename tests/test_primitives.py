# File: tests/test_primitives.py
import asyncio

import pytest

from site_walker.crawler.dedup import DedupSet
from site_walker.crawler.limiter import DEFAULT_CAPACITY, FetchLimiter


def test_dedup_marks_once():
    seen = DedupSet()
    assert seen.mark("http://a/") is True
    assert seen.mark("http://a/") is False
    assert seen.mark("http://a") is True
    assert "http://a/" in seen
    assert "http://b/" not in seen
    assert len(seen) == 2
    assert list(seen) == ["http://a/", "http://a"]


def test_limiter_default_capacity():
    assert FetchLimiter().capacity == DEFAULT_CAPACITY == 20


@pytest.mark.parametrize("capacity", [0, -3])
def test_limiter_rejects_bad_capacity(capacity):
    with pytest.raises(ValueError):
        FetchLimiter(capacity)


@pytest.mark.asyncio()
async def test_limiter_releases_on_error():
    limiter = FetchLimiter(1)

    with pytest.raises(RuntimeError):
        async with limiter:
            assert limiter.active == 1
            raise RuntimeError("boom")

    assert limiter.active == 0
    # a leaked token would block here forever
    await asyncio.wait_for(limiter.acquire(), timeout=1.0)
    limiter.release()


@pytest.mark.asyncio()
async def test_limiter_caps_holders():
    limiter = FetchLimiter(2)
    running = 0
    observed = []

    async def job():
        nonlocal running
        async with limiter:
            running += 1
            observed.append(running)
            await asyncio.sleep(0.01)
            running -= 1

    await asyncio.gather(*(job() for _ in range(10)))

    assert max(observed) == 2
    assert limiter.peak == 2
    assert limiter.active == 0
