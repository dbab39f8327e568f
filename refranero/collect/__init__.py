"""
Collection subsystem for refranero.

`enumerate_slugs` discovers slugs from the alphabetical index and
`fetch_records` fetches and parses detail pages for a stream of slugs.
Both fan work out to threads and merge the results into one unordered
iterator.
"""

from .runner import fetch_records  # noqa: F401
from .slugs import EnumerationError, enumerate_slugs  # noqa: F401
