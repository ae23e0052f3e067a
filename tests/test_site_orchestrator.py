"""Tests for the concurrent scraping of several sites."""
from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone
from typing import Dict, Mapping, Optional

import pytest

from wirescout.application import ExtractionEngine, SiteOrchestrator, SiteOutcome
from wirescout.domain import ArticleRecord, FetchError, PageFetcher, SiteSelectors, SiteSpec
from wirescout.infrastructure import SoupDocumentParser

_T = datetime(2024, 6, 15, tzinfo=timezone.utc)


class _DummyFetcher(PageFetcher):
    def __init__(self, pages: Dict[str, str], failing: Dict[str, Exception] | None = None) -> None:
        self._pages = pages
        self._failing = failing or {}
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def fetch(self, url: str, headers: Optional[Mapping[str, str]] = None) -> str:
        with self._lock:
            self.calls.append(url)
        if url in self._failing:
            raise self._failing[url]
        return self._pages[url]


def _listing(*items: tuple[str, str]) -> str:
    blocks = "".join(
        f"<article><h2>{title}</h2><time>{date}</time></article>" for title, date in items
    )
    return f"<html><body>{blocks}</body></html>"


def _site(name: str, url: str) -> SiteSpec:
    return SiteSpec(
        name=name,
        url=url,
        selectors=SiteSelectors(container="article", title="h2", date="time"),
    )


@pytest.fixture
def engine() -> ExtractionEngine:
    return ExtractionEngine(clock=lambda: _T)


def test_failing_site_does_not_affect_the_others(engine) -> None:
    fetcher = _DummyFetcher(
        pages={
            "https://a.example.com/": _listing(("A newest", "15/06/2024")),
            "https://c.example.com/": _listing(("C oldest", "13/06/2024")),
        },
        failing={"https://b.example.com/": FetchError("https://b.example.com/", "HTTP 503: down")},
    )
    orchestrator = SiteOrchestrator(fetcher, SoupDocumentParser(), engine)
    sites = [
        _site("A", "https://a.example.com/"),
        _site("B", "https://b.example.com/"),
        _site("C", "https://c.example.com/"),
    ]

    outcomes = orchestrator.collect(sites)

    assert [outcome.site_name for outcome in outcomes] == ["A", "B", "C"]
    assert [outcome.ok for outcome in outcomes] == [True, False, True]
    assert outcomes[1].error == "HTTP 503: down"
    records = orchestrator.merge(outcomes)
    assert [record.title for record in records] == ["A newest", "C oldest"]


def test_run_sorts_records_newest_first(engine) -> None:
    fetcher = _DummyFetcher(
        pages={
            "https://a.example.com/": _listing(("two days ago", "13/06/2024")),
            "https://b.example.com/": _listing(("today", "15/06/2024"), ("yesterday", "14/06/2024")),
        }
    )
    orchestrator = SiteOrchestrator(fetcher, SoupDocumentParser(), engine, max_workers=2)

    records = orchestrator.run(
        [_site("A", "https://a.example.com/"), _site("B", "https://b.example.com/")]
    )

    assert [record.sort_date for record in records] == [
        _T,
        _T - timedelta(days=1),
        _T - timedelta(days=2),
    ]


def test_merge_keeps_site_then_document_order_for_ties() -> None:
    def record(source: str, title: str) -> ArticleRecord:
        return ArticleRecord(source=source, title=title, link=None, sort_date=_T)

    outcomes = [
        SiteOutcome.success("A", [record("A", "a1"), record("A", "a2")]),
        SiteOutcome.failure("B", "boom"),
        SiteOutcome.success("C", [record("C", "c1")]),
    ]

    merged = SiteOrchestrator(_DummyFetcher({}), SoupDocumentParser()).merge(outcomes)

    assert [item.title for item in merged] == ["a1", "a2", "c1"]


def test_invalid_site_is_reported_without_fetching(engine) -> None:
    fetcher = _DummyFetcher(pages={"https://a.example.com/": _listing(("ok", "15/06/2024"))})
    orchestrator = SiteOrchestrator(fetcher, SoupDocumentParser(), engine)
    broken = SiteSpec(
        name="Broken",
        url="https://broken.example.com/",
        selectors=SiteSelectors(container="", title="h2"),
    )

    outcomes = orchestrator.collect([broken, _site("A", "https://a.example.com/")])

    assert outcomes[0].site_name == "Broken"
    assert not outcomes[0].ok
    assert "container" in outcomes[0].error
    assert outcomes[1].ok
    assert fetcher.calls == ["https://a.example.com/"]


def test_site_without_matching_articles_is_a_failure(engine) -> None:
    fetcher = _DummyFetcher(pages={"https://a.example.com/": "<html><body></body></html>"})
    orchestrator = SiteOrchestrator(fetcher, SoupDocumentParser(), engine)

    outcomes = orchestrator.collect([_site("A", "https://a.example.com/")])

    assert outcomes == [SiteOutcome.failure("A", "no articles matched the selectors")]


def test_unexpected_exception_is_contained(engine) -> None:
    fetcher = _DummyFetcher(
        pages={"https://b.example.com/": _listing(("fine", "15/06/2024"))},
        failing={"https://a.example.com/": KeyError("boom")},
    )
    orchestrator = SiteOrchestrator(fetcher, SoupDocumentParser(), engine)

    outcomes = orchestrator.collect(
        [_site("A", "https://a.example.com/"), _site("B", "https://b.example.com/")]
    )

    assert not outcomes[0].ok
    assert outcomes[0].error.startswith("unexpected error")
    assert outcomes[1].records[0].title == "fine"


def test_empty_site_list_returns_no_outcomes() -> None:
    orchestrator = SiteOrchestrator(_DummyFetcher({}), SoupDocumentParser())

    assert orchestrator.collect([]) == []
    assert orchestrator.run([]) == []
