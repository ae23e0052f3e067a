"""Ports connecting the application with external collaborators."""
from .document import DocumentNode, DocumentParser
from .notification_sink import Destination, NotificationSink
from .page_fetcher import PageFetcher

__all__ = [
    "Destination",
    "DocumentNode",
    "DocumentParser",
    "NotificationSink",
    "PageFetcher",
]
