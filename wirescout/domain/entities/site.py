"""Entity describing a site configured for monitoring."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional
from urllib.parse import urlsplit

from .selector import SiteSelectors


@dataclass(frozen=True)
class SiteSpec:
    """Represents a site whose listing page is scraped on every run."""

    #: Unique name used as the ``source`` of extracted articles.
    name: str
    #: Absolute URL of the listing page.
    url: str
    #: Extraction rules applied to the listing page.
    selectors: SiteSelectors
    #: Base used to resolve relative links; defaults to ``url``.
    base_url: Optional[str] = None
    #: Extra HTTP headers sent when fetching the listing page.
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def link_base(self) -> str:
        return self.base_url or self.url


@dataclass(frozen=True)
class MissingField:
    """Describes the first field that makes a ``SiteSpec`` unusable."""

    name: str
    reason: str = "missing"

    def __str__(self) -> str:
        return f"{self.name}: {self.reason}"


def is_absolute_url(value: str | None) -> bool:
    """Return whether ``value`` carries both a scheme and a host."""

    if not value:
        return False
    try:
        parts = urlsplit(value.strip())
    except ValueError:
        return False
    return bool(parts.scheme and parts.netloc)


def validate_site(spec: SiteSpec) -> MissingField | None:
    """Check a site before any network activity.

    Returns ``None`` when the site can be scraped, otherwise a
    :class:`MissingField` naming the offending field. The mandatory selectors
    are checked first so the message points at the configuration people edit
    most often.
    """

    selectors = spec.selectors
    if not (selectors.container or "").strip():
        return MissingField("container")
    if not (selectors.title or "").strip():
        return MissingField("title")
    if not (spec.url or "").strip():
        return MissingField("url")
    if not is_absolute_url(spec.url):
        return MissingField("url", "not an absolute URL")
    return None
