"""
Normalization subsystem for refranero.

This package turns fetched detail pages into `Record` instances and
writes records (or bare slugs) as lines of text.  The TSV layout is
defined by `RECORD_HEADERS` in `schema.py`.
"""

from .schema import RECORD_HEADERS, Record  # noqa: F401
from .sections import extract_record, extract_section, strip_usage_comment  # noqa: F401
from .write_tsv import write_records, write_slugs  # noqa: F401
