# site_walker/crawler/dedup.py
"""
Record of URLs already scheduled for fetching.
"""
from __future__ import annotations

from typing import Dict, Iterator


class DedupSet:
    """
    Insert-only set of URL strings.

    Identity is exact string equality; no normalization is applied. Not safe
    for concurrent writers: the coordinator loop is its only owner.
    """

    def __init__(self) -> None:
        # dict keeps insertion order
        self._seen: Dict[str, bool] = {}

    def mark(self, url: str) -> bool:
        """Mark *url* as seen. Returns True only the first time."""
        if url in self._seen:
            return False
        self._seen[url] = True
        return True

    def __contains__(self, url: object) -> bool:
        return url in self._seen

    def __len__(self) -> int:
        return len(self._seen)

    def __iter__(self) -> Iterator[str]:
        return iter(self._seen)
