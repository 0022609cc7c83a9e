# File: tests/test_link_extractor.py
from bs4 import BeautifulSoup

from site_walker.crawler.link_extractor import extract_links, outline, walk
from site_walker.crawler.models import PageData


def test_extract_links_resolves_against_page_url(mock_page_data):
    links = extract_links(mock_page_data)
    assert links == [
        "http://example.com/link1",
        "http://external.com",
        "http://example.com/dir/sub/page?q=1#frag",
        "http://example.com/link1",
    ]


def test_extract_links_skips_malformed_href():
    page = PageData(
        url="http://example.com/",
        content='<a href="http://[::1">bad</a><a href="/ok">ok</a><a href="mailto:a@b.c">m</a>',
    )
    assert extract_links(page) == ["http://example.com/ok", "mailto:a@b.c"]


def test_extract_links_nested_and_empty():
    page = PageData(
        url="http://example.com/a/",
        content="<div><p><a href='b'>b</a></p><section><a href=''>self</a></section></div>",
    )
    assert extract_links(page) == ["http://example.com/a/b", "http://example.com/a/"]
    assert extract_links(PageData(url="http://example.com/", content="")) == []


def test_walk_pre_and_post_order():
    soup = BeautifulSoup("<a><b></b><c></c></a>", "html.parser")
    events = []
    walk(
        soup.a,
        pre=lambda n: events.append(f"+{n.name}") if n.name else None,
        post=lambda n: events.append(f"-{n.name}") if n.name else None,
    )
    assert events == ["+a", "+b", "-b", "+c", "-c", "-a"]


DEEP = 3000


def deeply_nested_page() -> PageData:
    html = "<div>" * DEEP + '<a href="/x">x</a>' + "</div>" * DEEP
    return PageData(url="http://e.com/", content=html)


def test_extract_links_on_deeply_nested_document():
    assert extract_links(deeply_nested_page()) == ["http://e.com/x"]


def test_outline_on_deeply_nested_document():
    lines = outline(deeply_nested_page())
    assert len(lines) == 2 * (DEEP + 1)
    assert lines[0] == "<div>"
    assert lines[DEEP] == " " * (2 * DEEP) + "<a>"
    assert lines[DEEP + 1] == " " * (2 * DEEP) + "</a>"
    assert lines[-1] == "</div>"


def test_outline_indents_elements():
    page = PageData(url="http://example.com/", content="<html><body><p>hi</p></body></html>")
    assert outline(page) == [
        "<html>",
        "  <body>",
        "    <p>",
        "    </p>",
        "  </body>",
        "</html>",
    ]
