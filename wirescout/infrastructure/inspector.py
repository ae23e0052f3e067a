"""Selector suggestions for a listing page that is not configured yet."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from bs4 import BeautifulSoup
from bs4.element import Tag

CONTAINER_CANDIDATES: Tuple[str, ...] = (
    "article",
    "li.content-list-item",
    "div.article",
    "div.news-item",
    "div.post",
    'div[class*="teaser"]',
    'div[class*="result"]',
    'div[class*="item"]',
)

_HEADING_QUERY = (
    "h1, h2, h3, h4, h5, h6, span[class*='title'], span[class*='headline'], "
    "div[class*='title'], div[class*='headline']"
)
_SUMMARY_QUERY = (
    "p, div[class*='text'], div[class*='description'], div[class*='summary'], "
    "span[class*='text']"
)
_PREVIEW_LENGTH = 80


@dataclass(frozen=True)
class ElementSample:
    """An element found inside the first container, with a selector for it."""

    selector: str
    text: str


@dataclass(frozen=True)
class SelectorSuggestion:
    """Selectors proposed for a page plus the evidence behind them."""

    container: str
    title: str
    link: str
    summary: str
    container_counts: List[Tuple[str, int]] = field(default_factory=list)
    headings: List[ElementSample] = field(default_factory=list)
    links: List[ElementSample] = field(default_factory=list)
    paragraphs: List[ElementSample] = field(default_factory=list)

    def to_site_config(self, url: str, name: str = "Site Name") -> Dict[str, Any]:
        """Return a site object in the ``SITES_CONFIG`` format."""

        return {
            "name": name,
            "url": url,
            "selectors": {
                "container": self.container,
                "title": self.title,
                "link": self.link,
                "summary": self.summary,
            },
        }


def _preview(text: str) -> str:
    if len(text) > _PREVIEW_LENGTH:
        return text[:_PREVIEW_LENGTH] + "..."
    return text


def _simple_selector(element: Tag) -> str:
    classes = element.get("class") or []
    if classes:
        return f"{element.name}.{classes[0]}"
    return element.name


def _text_samples(
    container: Tag, query: str, min_length: int, max_length: int
) -> List[ElementSample]:
    samples: List[ElementSample] = []
    for element in container.select(query):
        text = " ".join(element.get_text().split())
        if text and min_length < len(text) < max_length:
            samples.append(ElementSample(_simple_selector(element), _preview(text)))
    return samples


def count_containers(soup: BeautifulSoup) -> List[Tuple[str, int]]:
    """Count the matches of every candidate container, fewest first."""

    counts = [(selector, len(soup.select(selector))) for selector in CONTAINER_CANDIDATES]
    found = [item for item in counts if item[1] > 0]
    return sorted(found, key=lambda item: item[1])


def suggest_selectors(markup: str) -> Optional[SelectorSuggestion]:
    """Guess container/title/link/summary selectors for ``markup``.

    Returns ``None`` when none of the usual container selectors match.
    """

    soup = BeautifulSoup(markup, "html.parser")
    counts = count_containers(soup)
    if not counts:
        return None

    # Listings usually show between 3 and 50 items.
    best = next((item for item in counts if 3 <= item[1] <= 50), counts[0])
    first = soup.select_one(best[0])

    headings = _text_samples(first, _HEADING_QUERY, 10, 200)
    links = [
        ElementSample(_simple_selector(element), str(element.get("href")))
        for element in first.select("a")
        if element.get("href")
    ]
    paragraphs = _text_samples(first, _SUMMARY_QUERY, 20, 500)

    return SelectorSuggestion(
        container=best[0],
        title=headings[0].selector if headings else "h2",
        link=links[0].selector if links else "a",
        summary=paragraphs[0].selector if paragraphs else "",
        container_counts=counts,
        headings=headings,
        links=links,
        paragraphs=paragraphs,
    )


__all__ = [
    "CONTAINER_CANDIDATES",
    "ElementSample",
    "SelectorSuggestion",
    "count_containers",
    "suggest_selectors",
]
