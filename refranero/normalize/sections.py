"""
Labelled-section extraction for refrán detail pages.

A detail page holds its data in the first ``div.tabbertab`` panel as a
series of paragraphs whose first child is a ``<strong>`` label, e.g.
``<p><strong>Significado:</strong> Indica que ...</p>``.  The helpers
here find the paragraph for a label and return its text without the
label.  Nothing in this module does I/O.
"""

from __future__ import annotations

from ..config import Config, MISSING_MARKER
from ..ingest.fetcher import HtmlDocument
from .schema import Record

TAB_PANEL_SELECTOR = "div.tabbertab"
LABEL_SELECTOR = "p > strong"


def extract_section(panel: HtmlDocument, label: str) -> str:
    """Return the text of the section introduced by `label`.

    Labels are compared against the trimmed text of each ``p > strong``
    element.  When several elements carry the same label the last one in
    document order is used.  A missing label yields `MISSING_MARKER`.
    """
    headers = panel.find_all(LABEL_SELECTOR)
    found_idx = -1
    for i, header in enumerate(headers):
        if HtmlDocument.text(header).strip() == label:
            found_idx = i
    if found_idx == -1:
        return MISSING_MARKER
    parent = headers[found_idx].parent()
    if parent is None:
        return MISSING_MARKER
    text = HtmlDocument.text(parent)
    if text.startswith(label):
        text = text[len(label):]
    text = text.replace("\n", " ")
    return text.strip()


def strip_usage_comment(usage: str, marker: str) -> str:
    """Drop the editorial comment that may follow the usage marker."""
    return usage.split(marker, 1)[0]


def extract_record(document: HtmlDocument, slug: str, config: Config) -> Record:
    """Build a `Record` from a fetched detail page.

    Pages without a tab panel produce an empty record, which the writer
    later skips.
    """
    panel = document.find_first(TAB_PANEL_SELECTOR)
    if panel is None:
        return Record(slug=slug)
    usage = extract_section(panel, config.usage_label)
    return Record(
        slug=slug,
        idiom=extract_section(panel, config.idiom_label),
        usage=strip_usage_comment(usage, config.usage_comment),
        definition=extract_section(panel, config.definition_label),
    )
