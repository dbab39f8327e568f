"""
Document fetcher for the Refranero site.

This module is the only place that talks HTTP.  `fetch_document` issues
a plain GET with `requests` and parses the body with BeautifulSoup.  The
parsed page is wrapped in `HtmlDocument`, a narrow query interface
(`find_first`, `find_all`, `text`, `attribute`) so that the extraction
and enumeration code never touches BeautifulSoup directly and can be
driven from fixture HTML in tests.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Union

import requests
from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

USER_AGENT = "refranero/0.1 (+https://cvc.cervantes.es/lengua/refranero/)"


class FetchError(Exception):
    """A page could not be retrieved (transport error or non-2xx status)."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class HtmlDocument:
    """Queryable view over a parsed page or a region of one.

    Every node returned by `find_first` / `find_all` is itself an
    `HtmlDocument`, so a sub-region (e.g. a tab panel) can be searched
    with the same selectors as the whole page.
    """

    def __init__(self, root: Union[BeautifulSoup, Tag]) -> None:
        self._root = root

    @classmethod
    def from_html(cls, html: Union[str, bytes]) -> "HtmlDocument":
        # Given bytes, BeautifulSoup honours <meta charset> before guessing.
        return cls(BeautifulSoup(html, "html.parser"))

    def find_first(self, selector: str) -> Optional["HtmlDocument"]:
        node = self._root.select_one(selector)
        return HtmlDocument(node) if node is not None else None

    def find_all(self, selector: str) -> List["HtmlDocument"]:
        return [HtmlDocument(node) for node in self._root.select(selector)]

    def parent(self) -> Optional["HtmlDocument"]:
        node = self._root.parent
        return HtmlDocument(node) if node is not None else None

    @staticmethod
    def text(node: "HtmlDocument") -> str:
        # Concatenated text of all descendants, like the DOM textContent.
        return node._root.get_text()

    @staticmethod
    def attribute(node: "HtmlDocument", name: str) -> Optional[str]:
        value = node._root.get(name)
        if isinstance(value, list):
            # bs4 returns multi-valued attributes (class, rel) as lists.
            return " ".join(value)
        return value


def fetch_document(url: str, *, session: Optional[requests.Session] = None,
                   timeout: Optional[float] = None) -> HtmlDocument:
    """Fetch `url` and return it parsed.

    Args:
        url: Absolute URL to GET.
        session: Optional `requests.Session` to reuse connections.
        timeout: Seconds before giving up; `None` waits indefinitely.

    Raises:
        FetchError: on any transport failure or a non-2xx response.
    """
    getter = session.get if session is not None else requests.get
    logger.debug("GET %s", url)
    try:
        resp = getter(url, headers={"User-Agent": USER_AGENT}, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise FetchError(url, str(exc)) from exc
    return HtmlDocument.from_html(resp.content)
