"""
Line-oriented writers for records and slugs.

Records are written as tab-separated rows under a fixed header, in the
order they arrive.  Fields are not escaped; the site text does not
contain tabs after newline collapsing.  Each line is flushed so a
downstream pipe sees progress while the crawl is still running.
"""

from __future__ import annotations

import logging
from typing import Iterable, TextIO

from .schema import RECORD_HEADERS, Record

logger = logging.getLogger(__name__)


def write_records(records: Iterable[Record], out: TextIO) -> int:
    """Write the header and one line per non-empty record.

    Args:
        records: Records in arrival order.
        out: Text stream, usually ``sys.stdout``.

    Returns:
        Number of lines written after the header (rows plus error lines).
    """
    out.write("\t".join(RECORD_HEADERS) + "\n")
    out.flush()
    written = skipped = 0
    for record in records:
        if record.failed:
            line = f"ERROR: {record.error}"
        elif record.is_empty:
            logger.debug("Skipping empty record for %s", record.slug)
            skipped += 1
            continue
        else:
            line = "\t".join(record.to_row())
        out.write(line + "\n")
        out.flush()
        written += 1
    logger.info("Wrote %d lines (%d empty records skipped)", written, skipped)
    return written


def write_slugs(slugs: Iterable[str], out: TextIO) -> int:
    written = 0
    for slug in slugs:
        out.write(slug + "\n")
        out.flush()
        written += 1
    logger.info("Wrote %d slugs", written)
    return written
