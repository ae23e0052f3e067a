"""Selectors that describe where article fields live inside a listing page."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SiteSelectors:
    """Groups the CSS selectors used to read articles from a site."""

    #: Selector matching every article block on the listing page.
    container: str
    #: Selector, relative to the container, holding the visible title.
    title: str
    #: Selector, relative to the container, whose ``href`` points to the article.
    link: Optional[str] = None
    #: Selector, relative to the container, holding the publication date text.
    date: Optional[str] = None
    #: Selector, relative to the container, holding a short summary.
    summary: Optional[str] = None
