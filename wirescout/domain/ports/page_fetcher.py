"""Input port responsible for retrieving raw listing pages."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping, Optional


class PageFetcher(ABC):
    """Defines how the application downloads the markup of a site."""

    @abstractmethod
    def fetch(self, url: str, headers: Optional[Mapping[str, str]] = None) -> str:
        """Return the page body or raise ``FetchError``."""
