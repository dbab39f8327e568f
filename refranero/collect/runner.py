"""
Record fetcher.

`fetch_records` turns a stream of slugs into a stream of `Record`
objects using a fixed pool of worker threads.  Jobs and results are
handed over through single-slot queues, so a worker only takes a new
slug once it has handed its previous record to the consumer; a slow
writer therefore stalls the pool instead of letting fetched pages pile
up in memory.  At most `config.workers` fetches are in flight.

A failed fetch never stops the pool.  The worker wraps the exception in
a `Record` (``record.error``) and moves on to the next slug, so every
slug submitted yields exactly one record.

Records come out in completion order, not submission order.
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Callable, Iterable, Iterator, Optional

import requests

from ..config import Config
from ..ingest.fetcher import HtmlDocument, fetch_document
from ..normalize.schema import Record
from ..normalize.sections import extract_record

logger = logging.getLogger(__name__)

Fetcher = Callable[..., HtmlDocument]

# End-of-stream marker for both queues.
_STOP = object()


def _fetch_one(slug: str, config: Config, fetch: Fetcher,
               session: requests.Session) -> Record:
    try:
        document = fetch(config.detail_url(slug), session=session, timeout=config.timeout)
        return extract_record(document, slug, config)
    except Exception as exc:  # noqa: BLE001
        logger.warning("Failed to fetch %s: %s", slug, exc)
        return Record(slug=slug, error=exc)


def _worker(jobs: queue.Queue, results: queue.Queue, done: threading.Barrier,
            config: Config, fetch: Fetcher) -> None:
    session = requests.Session()
    handled = 0
    try:
        while True:
            slug = jobs.get()
            if slug is _STOP:
                break
            results.put(_fetch_one(slug, config, fetch, session))
            handled += 1
    finally:
        session.close()
        logger.debug("%s finished after %d slugs", threading.current_thread().name, handled)
        done.wait()


def _feed(slugs: Iterable[str], jobs: queue.Queue, workers: int) -> None:
    """Hand slugs to the pool, then one stop marker per worker."""
    try:
        for slug in slugs:
            jobs.put(slug)
    except Exception:  # noqa: BLE001
        logger.exception("Reading slugs failed; no further slugs will be fetched")
    finally:
        for _ in range(workers):
            jobs.put(_STOP)


def fetch_records(slugs: Iterable[str], config: Config, *,
                  fetch: Optional[Fetcher] = None) -> Iterator[Record]:
    """Fetch and parse the detail page of every slug.

    Args:
        slugs: Any iterable of slugs; it is consumed lazily from a
            background thread, so it may be a blocking reader such as
            ``sys.stdin``.
        config: Run configuration; `workers`, `base_url`, `timeout` and
            the section labels are used.
        fetch: Callable with the signature of `fetch_document`; defaults
            to `fetch_document`.  Tests substitute a fake here.

    Yields:
        One `Record` per slug, in completion order.  The generator
        finishes once the slug source is exhausted and every worker has
        drained.
    """
    fetch = fetch or fetch_document
    workers = config.workers
    jobs: queue.Queue = queue.Queue(maxsize=1)
    results: queue.Queue = queue.Queue(maxsize=1)
    # The barrier action runs once, after the last worker arrives.
    done = threading.Barrier(workers, action=lambda: results.put(_STOP))

    threads = [
        threading.Thread(
            target=_worker,
            args=(jobs, results, done, config, fetch),
            name=f"refranero-worker-{i}",
            daemon=True,
        )
        for i in range(workers)
    ]
    threads.append(
        threading.Thread(target=_feed, args=(slugs, jobs, workers),
                         name="refranero-feeder", daemon=True)
    )
    logger.info("Fetching records with %d workers", workers)
    for t in threads:
        t.start()

    produced = failed = 0
    while True:
        record = results.get()
        if record is _STOP:
            break
        produced += 1
        if record.failed:
            failed += 1
        yield record
    logger.info("Fetched %d records (%d failed)", produced, failed)
