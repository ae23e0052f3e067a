"""Entity representing an article extracted from a listing page."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Tuple, Union

IdentityKey = Union[str, Tuple[str, str]]


def _parse_sort_date(value: Any) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    else:
        candidate = str(value).strip()
        if candidate.endswith("Z"):
            candidate = candidate[:-1] + "+00:00"
        parsed = datetime.fromisoformat(candidate)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


@dataclass(frozen=True)
class ArticleRecord:
    """Stores the normalized fields of one article found on a site."""

    #: Name of the site the article was extracted from.
    source: str
    #: Trimmed, non-empty title.
    title: str
    #: Absolute URL of the article, when the site exposes one.
    link: Optional[str]
    #: Moment used to order articles, always timezone-aware UTC.
    sort_date: datetime
    #: Date text exactly as found on the page.
    raw_date: str = ""
    #: Trimmed summary text.
    summary: str = ""

    @property
    def identity_key(self) -> IdentityKey:
        """Key used to decide whether an article was already seen.

        Articles without a link fall back to ``(source, title)`` so they are
        not reported again on every run.
        """

        if self.link:
            return self.link
        return (self.source, self.title)

    def to_mapping(self) -> Dict[str, Any]:
        """Serialize the article to the persisted snapshot layout."""

        return {
            "source": self.source,
            "title": self.title,
            "link": self.link,
            "date": self.raw_date,
            "sortDate": self.sort_date.isoformat(),
            "summary": self.summary,
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ArticleRecord":
        """Rebuild an article from a snapshot entry.

        Raises:
            ValueError: When the entry lacks a title or a readable ``sortDate``.
        """

        title = str(data.get("title") or "").strip()
        if not title:
            raise ValueError("snapshot entry without title")
        sort_date_raw = data.get("sortDate")
        if sort_date_raw in (None, ""):
            raise ValueError("snapshot entry without sortDate")
        try:
            sort_date = _parse_sort_date(sort_date_raw)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"invalid sortDate {sort_date_raw!r}") from exc
        link = data.get("link")
        return cls(
            source=str(data.get("source") or ""),
            title=title,
            link=str(link) if link else None,
            sort_date=sort_date,
            raw_date=str(data.get("date") or ""),
            summary=str(data.get("summary") or ""),
        )
