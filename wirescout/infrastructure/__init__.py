"""Infrastructure public API for Wirescout.

Exposes the concrete adapters so consumers can import them from
``wirescout.infrastructure`` directly.
"""

from .dates import DateNormalizer, normalize
from .document import SoupDocumentParser, SoupNode, normalize_selector_query
from .fetcher import RequestsPageFetcher
from .inspector import SelectorSuggestion, suggest_selectors
from .notifications import SmtpEmailSink, render_email_html, render_email_text
from .snapshot_store import JsonSnapshotStore

__all__ = [
    "DateNormalizer",
    "JsonSnapshotStore",
    "RequestsPageFetcher",
    "SelectorSuggestion",
    "SmtpEmailSink",
    "SoupDocumentParser",
    "SoupNode",
    "normalize",
    "normalize_selector_query",
    "render_email_html",
    "render_email_text",
    "suggest_selectors",
]
