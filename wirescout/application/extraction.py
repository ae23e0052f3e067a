"""Extraction of article records from a parsed listing page."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Iterator, List, Optional
from urllib.parse import urljoin

from wirescout.domain import ArticleRecord, DocumentNode, InvalidSelectorError, SiteSpec
from wirescout.domain.entities import is_absolute_url
from wirescout.infrastructure.dates import DateNormalizer


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ExtractionEngine:
    """Applies the selectors of a site to a document.

    Extraction never raises: an element that cannot be read is skipped and the
    remaining elements are still returned in document order.
    """

    def __init__(
        self,
        date_normalizer: DateNormalizer | None = None,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._dates = date_normalizer or DateNormalizer(clock=clock)
        self._clock = clock
        self._log = logging.getLogger("wirescout.extraction")

    def extract(self, document: DocumentNode, spec: SiteSpec) -> List[ArticleRecord]:
        extracted_at = self._clock()
        if extracted_at.tzinfo is None:
            extracted_at = extracted_at.replace(tzinfo=timezone.utc)

        records: List[ArticleRecord] = []
        try:
            for idx, element in enumerate(self._containers(document, spec), start=1):
                try:
                    record = self._build_record(element, spec, extracted_at)
                except Exception as exc:
                    self._log.debug("%s item %d: skipped: %s", spec.name, idx, exc)
                    continue
                if record is None:
                    self._log.debug("%s item %d: empty title, skipped", spec.name, idx)
                    continue
                records.append(record)
        except InvalidSelectorError as exc:
            self._log.warning("%s: container selector unusable: %s", spec.name, exc)
        return records

    def _containers(self, document: DocumentNode, spec: SiteSpec) -> Iterator[DocumentNode]:
        return document.select_all(spec.selectors.container)

    def _build_record(
        self, element: DocumentNode, spec: SiteSpec, extracted_at: datetime
    ) -> Optional[ArticleRecord]:
        selectors = spec.selectors
        title = self._first_text(element, selectors.title)
        if not title:
            return None

        raw_date = self._optional_text(element, selectors.date, spec, "date")
        sort_date = self._dates.parse(raw_date) or extracted_at

        return ArticleRecord(
            source=spec.name,
            title=title,
            link=self._extract_link(element, spec),
            sort_date=sort_date,
            raw_date=raw_date,
            summary=self._optional_text(element, selectors.summary, spec, "summary"),
        )

    def _first_text(self, element: DocumentNode, selector: Optional[str]) -> str:
        if not selector:
            return ""
        target = element.select_first(selector)
        return target.text() if target is not None else ""

    def _optional_text(
        self, element: DocumentNode, selector: Optional[str], spec: SiteSpec, field: str
    ) -> str:
        try:
            return self._first_text(element, selector)
        except InvalidSelectorError as exc:
            self._log.debug("%s: %s selector unusable: %s", spec.name, field, exc)
            return ""

    def _extract_link(self, element: DocumentNode, spec: SiteSpec) -> Optional[str]:
        selector = spec.selectors.link
        if not selector:
            return None
        try:
            target = element.select_first(selector)
        except InvalidSelectorError as exc:
            self._log.debug("%s: link selector unusable: %s", spec.name, exc)
            return None
        href = target.attribute("href") if target is not None else None
        if not href:
            return None
        if is_absolute_url(href):
            return href
        return urljoin(spec.link_base, href)


__all__ = ["ExtractionEngine"]
