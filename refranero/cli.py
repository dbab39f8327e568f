"""
Command line interface for refranero.

Two mutually exclusive modes are available:

``--print-slugs``
    Crawl the alphabetical index and print every slug, one per line.

``--read-slugs``
    Read slugs from stdin, fetch each detail page and print the idiom,
    definition and usage as tab-separated rows under a header.

Typical use chains both::

    refranero --print-slugs > slugs.txt
    refranero --read-slugs < slugs.txt > refranes.tsv

Diagnostics go to stderr through `logging`; stdout only carries data.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterator, List, Optional, TextIO

from .collect.runner import fetch_records
from .collect.slugs import EnumerationError, enumerate_slugs
from .config import Config, ConfigError
from .normalize.write_tsv import write_records, write_slugs

logger = logging.getLogger("refranero.cli")


def _read_slugs(stream: TextIO) -> Iterator[str]:
    # Lazy so the pool can start before stdin is exhausted.  Blank lines
    # are slugs too: each input line yields exactly one record.
    for line in stream:
        yield line.rstrip("\r\n")


def cmd_print_slugs(config: Config, out: TextIO) -> int:
    """Enumerate all slugs and print them."""
    try:
        write_slugs(enumerate_slugs(config), out)
    except EnumerationError as exc:
        logger.error("Enumeration aborted: %s", exc)
        return 1
    return 0


def cmd_read_slugs(config: Config, stdin: TextIO, out: TextIO) -> int:
    """Fetch records for slugs read from stdin and print them as TSV."""
    write_records(fetch_records(_read_slugs(stdin), config), out)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="refranero",
        description="Scrape the Centro Virtual Cervantes refranero",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--print-slugs",
        dest="print_slugs",
        action="store_true",
        help="crawl all links for the entire alphabet, and print them line-by-line to stdout",
    )
    mode.add_argument(
        "--read-slugs",
        dest="read_slugs",
        action="store_true",
        help="read slugs, line by line, from stdin, and print the idiom, definition and usage",
    )
    parser.add_argument("--workers", type=int, help="Number of concurrent page fetches (default 10)")
    parser.add_argument("--timeout", type=float, help="Per-request timeout in seconds (default: none)")
    parser.add_argument("--config", help="YAML file overriding site URLs, letters, workers or timeout")
    parser.add_argument(
        "--keep-going",
        dest="keep_going",
        action="store_true",
        help="with --print-slugs, skip letters whose listing fails instead of aborting",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None, *, stdin: Optional[TextIO] = None,
         stdout: Optional[TextIO] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )
    try:
        config = Config.from_args(args)
    except (ConfigError, OSError) as exc:
        parser.error(str(exc))

    out = stdout if stdout is not None else sys.stdout
    if config.print_slugs:
        return cmd_print_slugs(config, out)
    if config.read_slugs:
        return cmd_read_slugs(config, stdin if stdin is not None else sys.stdin, out)
    logger.debug("No mode selected; nothing to do")
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
