"""Public API of the Wirescout domain.

Entities, ports and repository contracts are re-exported here so they can be
imported directly from ``wirescout.domain``.
"""

from .entities import ArticleRecord, MissingField, SiteSelectors, SiteSpec, validate_site
from .errors import (
    ConfigurationError,
    FetchError,
    InvalidSelectorError,
    NotificationError,
    WirescoutError,
)
from .ports import Destination, DocumentNode, DocumentParser, NotificationSink, PageFetcher
from .repositories import SnapshotRepository

__all__ = [
    "ArticleRecord",
    "ConfigurationError",
    "Destination",
    "DocumentNode",
    "DocumentParser",
    "FetchError",
    "InvalidSelectorError",
    "MissingField",
    "NotificationError",
    "NotificationSink",
    "PageFetcher",
    "SiteSelectors",
    "SiteSpec",
    "SnapshotRepository",
    "WirescoutError",
    "validate_site",
]
