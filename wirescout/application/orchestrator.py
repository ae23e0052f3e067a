"""Concurrent scraping of every configured site."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from wirescout.domain import (
    ArticleRecord,
    DocumentParser,
    PageFetcher,
    SiteSpec,
    WirescoutError,
    validate_site,
)

from .extraction import ExtractionEngine


@dataclass(frozen=True)
class SiteOutcome:
    """Result of scraping one site: its records or the reason it failed."""

    #: Name of the site this outcome belongs to.
    site_name: str
    #: Records extracted from the site, in document order.
    records: Tuple[ArticleRecord, ...] = ()
    #: Failure reason; ``None`` when the site produced records.
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, site_name: str, records: Iterable[ArticleRecord]) -> "SiteOutcome":
        return cls(site_name=site_name, records=tuple(records))

    @classmethod
    def failure(cls, site_name: str, reason: str) -> "SiteOutcome":
        return cls(site_name=site_name, error=reason)


class SiteOrchestrator:
    """Fans extraction out across sites and merges the results.

    A failing site only loses its own contribution; the merge waits for every
    site before sorting.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        parser: DocumentParser,
        engine: ExtractionEngine | None = None,
        *,
        max_workers: int = 8,
    ) -> None:
        self._fetcher = fetcher
        self._parser = parser
        self._engine = engine or ExtractionEngine()
        self._max_workers = max(1, max_workers)
        self._log = logging.getLogger("wirescout.orchestrator")

    def run(self, sites: Sequence[SiteSpec]) -> List[ArticleRecord]:
        return self.merge(self.collect(sites))

    def collect(self, sites: Sequence[SiteSpec]) -> List[SiteOutcome]:
        """Scrape ``sites`` concurrently and return one outcome per site, in order."""

        outcomes: List[Optional[SiteOutcome]] = [None] * len(sites)
        runnable: List[Tuple[int, SiteSpec]] = []
        for index, site in enumerate(sites):
            problem = validate_site(site)
            if problem is not None:
                outcomes[index] = SiteOutcome.failure(site.name, f"invalid site ({problem})")
            else:
                runnable.append((index, site))

        if runnable:
            workers = min(self._max_workers, len(runnable))
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="wirescout") as executor:
                futures = [
                    (index, executor.submit(self._scrape_site, site)) for index, site in runnable
                ]
                for index, future in futures:
                    outcomes[index] = future.result()

        results = [outcome for outcome in outcomes if outcome is not None]
        for outcome in results:
            if outcome.ok:
                self._log.info("%s: %d articles", outcome.site_name, len(outcome.records))
            else:
                self._log.warning("%s: %s", outcome.site_name, outcome.error)
        return results

    def merge(self, outcomes: Iterable[SiteOutcome]) -> List[ArticleRecord]:
        """Flatten outcomes and sort them, most recent first.

        ``sorted`` is stable with ``reverse=True`` too, so ties keep site order
        and then document order.
        """

        merged = [record for outcome in outcomes for record in outcome.records]
        return sorted(merged, key=lambda record: record.sort_date, reverse=True)

    def _scrape_site(self, site: SiteSpec) -> SiteOutcome:
        try:
            markup = self._fetcher.fetch(site.url, headers=site.headers)
            document = self._parser.parse(markup)
            records = self._engine.extract(document, site)
        except WirescoutError as exc:
            return SiteOutcome.failure(site.name, str(exc))
        except Exception as exc:
            return SiteOutcome.failure(site.name, f"unexpected error: {exc!r}")
        if not records:
            return SiteOutcome.failure(site.name, "no articles matched the selectors")
        return SiteOutcome.success(site.name, records)


__all__ = ["SiteOrchestrator", "SiteOutcome"]
