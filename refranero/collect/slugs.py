"""
Slug enumeration over the alphabetical index.

Every letter of `Config.letters` has one listing page.  Each page is
fetched on its own thread and every ``ol#lista_az > li > a`` link on it
is handed to the caller as a slug.  The merged stream is unordered and
ends once all letter threads have finished.

By default a letter that cannot be fetched aborts the whole enumeration
with `EnumerationError`.  With ``config.keep_going`` the letter is
logged and skipped instead.
"""

from __future__ import annotations

import logging
import queue
import threading
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional

from ..config import Config
from ..ingest.fetcher import HtmlDocument, fetch_document

logger = logging.getLogger(__name__)

LISTING_SELECTOR = "ol#lista_az > li > a"

_DONE = object()


class EnumerationError(Exception):
    """A listing page failed while enumerating with the fatal policy."""

    def __init__(self, letter: str, cause: BaseException) -> None:
        super().__init__(f"listing for letter {letter} failed: {cause}")
        self.letter = letter
        self.cause = cause


@dataclass(frozen=True)
class _LetterFailure:
    letter: str
    error: BaseException


def _list_letter(letter: str, config: Config, fetch: Callable[..., HtmlDocument],
                 out: queue.Queue, aborted: threading.Event) -> None:
    try:
        document = fetch(config.listing_page_url(letter), timeout=config.timeout)
    except Exception as exc:  # noqa: BLE001
        out.put(_LetterFailure(letter, exc))
        return
    count = 0
    for anchor in document.find_all(LISTING_SELECTOR):
        link = HtmlDocument.attribute(anchor, "href")
        if link is None:
            continue
        if aborted.is_set():
            return
        out.put(link)
        count += 1
    logger.debug("Letter %s: %d slugs", letter, count)


def _close_when_done(threads: List[threading.Thread], out: queue.Queue) -> None:
    for t in threads:
        t.join()
    out.put(_DONE)


def _drain(out: queue.Queue) -> None:
    """Discard hand-offs until the closer posts the end marker."""
    while out.get() is not _DONE:
        pass


def enumerate_slugs(config: Config, *,
                    fetch: Optional[Callable[..., HtmlDocument]] = None) -> Iterator[str]:
    """Yield every slug listed under the configured letters.

    Raises:
        EnumerationError: when a listing page fails and
            ``config.keep_going`` is false.  Nothing is yielded after
            the failure is seen.
    """
    fetch = fetch or fetch_document
    out: queue.Queue = queue.Queue(maxsize=1)
    aborted = threading.Event()
    threads = [
        threading.Thread(
            target=_list_letter,
            args=(letter, config, fetch, out, aborted),
            name=f"refranero-letter-{letter}",
            daemon=True,
        )
        for letter in config.letters
    ]
    logger.info("Enumerating slugs for %d letters", len(threads))
    for t in threads:
        t.start()
    threading.Thread(target=_close_when_done, args=(threads, out),
                     name="refranero-letters-closer", daemon=True).start()

    skipped: List[str] = []
    finished = False
    try:
        while True:
            item = out.get()
            if item is _DONE:
                finished = True
                break
            if isinstance(item, _LetterFailure):
                if not config.keep_going:
                    logger.error("Listing for letter %s failed: %s", item.letter, item.error)
                    raise EnumerationError(item.letter, item.error)
                logger.warning("Skipping letter %s: %s", item.letter, item.error)
                skipped.append(item.letter)
                continue
            yield item
    finally:
        if not finished:
            # Aborted or abandoned: unblock letter threads waiting in put()
            # so they see `aborted` and exit, then let the closer finish.
            aborted.set()
            threading.Thread(target=_drain, args=(out,),
                             name="refranero-letters-drain", daemon=True).start()
    if skipped:
        logger.warning("Enumeration finished without letters: %s", ", ".join(skipped))
