"""Wirescout - watches listing pages and e-mails the articles it has not seen yet."""
from .application import ExtractionEngine, RunController, RunResult, SiteOrchestrator
from .domain import ArticleRecord, SiteSelectors, SiteSpec, validate_site

__all__ = [
    "ArticleRecord",
    "ExtractionEngine",
    "RunController",
    "RunResult",
    "SiteOrchestrator",
    "SiteSelectors",
    "SiteSpec",
    "validate_site",
]

__version__ = "1.0.0"
