"""Fixture HTML and fake fetchers shared by the test suites."""

from __future__ import annotations

from typing import Dict, List, Optional

from refranero.ingest.fetcher import FetchError, HtmlDocument


def detail_html(idiom: str = "", definition: str = "", usage: str = "") -> str:
    """Build a detail page with the sections that have a value."""
    paragraphs = []
    if idiom:
        paragraphs.append(f"<p><strong>Enunciado:</strong> {idiom}</p>")
    if usage:
        paragraphs.append(f"<p><strong>Marcador de uso:</strong> {usage}</p>")
    if definition:
        paragraphs.append(f"<p><strong>Significado:</strong> {definition}</p>")
    return (
        "<html><body><div class='tabber'>"
        f"<div class='tabbertab'>{''.join(paragraphs)}</div>"
        "<div class='tabbertab'><p><strong>Enunciado:</strong> Otra lengua</p></div>"
        "</div></body></html>"
    )


def listing_html(links: List[Optional[str]]) -> str:
    """Build a listing page; `None` entries become anchors without href."""
    items = []
    for link in links:
        if link is None:
            items.append("<li><a>sin enlace</a></li>")
        else:
            items.append(f"<li><a href='{link}'>{link}</a></li>")
    return (
        "<html><body><ul><li><a href='menu.aspx'>Menu</a></li></ul>"
        f"<ol id='lista_az'>{''.join(items)}</ol></body></html>"
    )


class FakeSite:
    """Serves fixture pages by URL, raising FetchError for unknown ones."""

    def __init__(self, pages: Dict[str, str]) -> None:
        self.pages = pages
        self.requested: List[str] = []

    def __call__(self, url: str, **kwargs) -> HtmlDocument:
        self.requested.append(url)
        if url not in self.pages:
            raise FetchError(url, "404 Client Error: Not Found")
        return HtmlDocument.from_html(self.pages[url])
