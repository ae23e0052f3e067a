"""Document queries implemented on top of BeautifulSoup and soupsieve."""
from __future__ import annotations

import logging
import re
from typing import Iterator, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag
from soupsieve import SelectorSyntaxError

from wirescout.domain import DocumentNode, DocumentParser, InvalidSelectorError

_log = logging.getLogger("wirescout.document")

_COLLAPSE_WHITESPACE_RE = re.compile(r"\s+", re.UNICODE)


def normalize_selector_query(query: str) -> str:
    """Close the attribute brackets and quotes left open in ``query``.

    A ``]`` reached while a quote is open closes the quote first, so
    ``meta[property='og:title]`` becomes ``meta[property='og:title']``.
    """

    repaired: list[str] = []
    open_quote: str | None = None
    depth = 0

    for char in query:
        if open_quote is not None:
            if char == open_quote:
                open_quote = None
            elif char == "]":
                repaired.append(open_quote)
                open_quote = None
                depth = max(depth - 1, 0)
        elif char in ("'", '"'):
            open_quote = char
        elif char == "[":
            depth += 1
        elif char == "]":
            depth = max(depth - 1, 0)
        repaired.append(char)

    if open_quote is not None:
        repaired.append(open_quote)
    return "".join(repaired) + "]" * depth


class SoupNode(DocumentNode):
    """Wraps a BeautifulSoup element behind the ``DocumentNode`` port."""

    __slots__ = ("_element",)

    def __init__(self, element: Tag) -> None:
        self._element = element

    def select_all(self, selector: str) -> Iterator[DocumentNode]:
        for match in self._run(selector, first=False):
            yield SoupNode(match)

    def select_first(self, selector: str) -> Optional[DocumentNode]:
        matches = self._run(selector, first=True)
        return SoupNode(matches[0]) if matches else None

    def text(self) -> str:
        return _COLLAPSE_WHITESPACE_RE.sub(" ", self._element.get_text()).strip()

    def attribute(self, name: str) -> Optional[str]:
        value = self._element.get(name)
        if value is None:
            return None
        if isinstance(value, list):
            value = " ".join(value)
        return str(value).strip()

    def _run(self, selector: str, *, first: bool) -> list[Tag]:
        """Run a CSS query, repairing the selector once if it is malformed."""

        try:
            return self._select(selector, first)
        except SelectorSyntaxError as exc:
            repaired = normalize_selector_query(selector)
            if repaired == selector:
                raise InvalidSelectorError(f"Selector '{selector}' is invalid: {exc}") from exc
        _log.debug("repairing malformed selector '%s' as '%s'", selector, repaired)
        try:
            return self._select(repaired, first)
        except SelectorSyntaxError as exc:
            raise InvalidSelectorError(f"Selector '{selector}' is invalid: {exc}") from exc

    def _select(self, query: str, first: bool) -> list[Tag]:
        if first:
            match = self._element.select_one(query)
            return [match] if match is not None else []
        return list(self._element.select(query))


class SoupDocumentParser(DocumentParser):
    """Parses markup with BeautifulSoup using the configured tree builder."""

    def __init__(self, features: str = "html.parser") -> None:
        self._features = features

    def parse(self, markup: str) -> DocumentNode:
        return SoupNode(BeautifulSoup(markup, self._features))


__all__ = ["SoupDocumentParser", "SoupNode", "normalize_selector_query"]
