# site_walker/crawler/link_extractor.py
"""
Link extraction and document outline utilities for SiteWalker.
"""
from __future__ import annotations

from typing import Callable, List, Optional, Tuple
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import PageElement, Tag

from site_walker.crawler.models import PageData

__all__ = ("walk", "extract_links", "outline")

Visitor = Callable[[PageElement], None]


def walk(node: PageElement, pre: Optional[Visitor] = None, post: Optional[Visitor] = None) -> None:
    """
    Depth-first traversal of a parsed document.

    *pre* is called before a node's children are visited, *post* after.
    Either may be omitted. Uses an explicit stack, so nesting depth is not
    bounded by the interpreter's recursion limit.
    """
    stack: List[Tuple[PageElement, bool]] = [(node, False)]
    while stack:
        current, entered = stack.pop()
        if entered:
            if post is not None:
                post(current)
            continue
        if pre is not None:
            pre(current)
        stack.append((current, True))
        if isinstance(current, Tag):
            stack.extend((child, False) for child in reversed(list(current.children)))


def _is_element(node: PageElement) -> bool:
    return isinstance(node, Tag) and not isinstance(node, BeautifulSoup)


def extract_links(page: PageData) -> List[str]:
    """
    Return every ``<a href>`` of *page* resolved against ``page.url``.

    Links keep document order; duplicates are not removed. A href that
    cannot be resolved is skipped without failing the page.
    """
    soup = BeautifulSoup(page.content, "html.parser")
    links: List[str] = []

    def visit(node: PageElement) -> None:
        if not _is_element(node) or node.name != "a":
            return
        href = node.get("href")
        if not isinstance(href, str):
            return
        try:
            links.append(urljoin(page.url, href.strip()))
        except ValueError:
            # malformed href, e.g. an unterminated IPv6 host
            return

    walk(soup, visit)
    return links


def outline(page: PageData, indent: int = 2) -> List[str]:
    """Return the element structure of *page* as indented ``<tag>`` / ``</tag>`` lines."""
    soup = BeautifulSoup(page.content, "html.parser")
    lines: List[str] = []
    depth = 0

    def start(node: PageElement) -> None:
        nonlocal depth
        if _is_element(node):
            lines.append(f"{' ' * (depth * indent)}<{node.name}>")
            depth += 1

    def end(node: PageElement) -> None:
        nonlocal depth
        if _is_element(node):
            depth -= 1
            lines.append(f"{' ' * (depth * indent)}</{node.name}>")

    walk(soup, start, end)
    return lines
