"""Input port describing the queries the extractor runs against a page."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterator, Optional


class DocumentNode(ABC):
    """A node of a parsed HTML document.

    Only four capabilities are exposed so extraction rules never depend on the
    object model of a particular HTML library.
    """

    @abstractmethod
    def select_all(self, selector: str) -> Iterator["DocumentNode"]:
        """Yield every descendant matching ``selector`` in document order."""

    @abstractmethod
    def select_first(self, selector: str) -> Optional["DocumentNode"]:
        """Return the first descendant matching ``selector``, if any."""

    @abstractmethod
    def text(self) -> str:
        """Return the node text with surrounding whitespace removed."""

    @abstractmethod
    def attribute(self, name: str) -> Optional[str]:
        """Return the trimmed value of attribute ``name`` or ``None``."""


class DocumentParser(ABC):
    """Turns raw markup into a queryable :class:`DocumentNode` tree."""

    @abstractmethod
    def parse(self, markup: str) -> DocumentNode:
        """Parse ``markup`` and return the document root."""
