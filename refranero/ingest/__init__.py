"""
Network access for refranero.

`fetch_document` retrieves one page from the Centro Virtual Cervantes
site and returns it as an `HtmlDocument`.  Failures are raised as
`FetchError`; callers decide whether they are fatal.
"""

from .fetcher import FetchError, HtmlDocument, fetch_document  # noqa: F401
