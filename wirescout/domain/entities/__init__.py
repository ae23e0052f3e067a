"""Domain entities used while monitoring sites."""
from .article import ArticleRecord, IdentityKey
from .selector import SiteSelectors
from .site import MissingField, SiteSpec, is_absolute_url, validate_site

__all__ = [
    "ArticleRecord",
    "IdentityKey",
    "MissingField",
    "SiteSelectors",
    "SiteSpec",
    "is_absolute_url",
    "validate_site",
]
