"""Contract for persisting the articles of the last completed run."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, List, Sequence

from wirescout.domain.entities import ArticleRecord


class SnapshotRepository(ABC):
    """Stores the full article set of the most recent run."""

    @abstractmethod
    def load(self) -> List[ArticleRecord]:
        """Return the previous snapshot, or an empty list when unavailable."""

    @abstractmethod
    def save(self, records: Iterable[ArticleRecord]) -> None:
        """Replace the persisted snapshot with ``records``."""

    def reset(self) -> None:
        """Forget every previously seen article."""

        self.save([])

    @staticmethod
    def is_new(record: ArticleRecord, previous: Sequence[ArticleRecord]) -> bool:
        """Return ``True`` when no previous article shares the record identity."""

        key = record.identity_key
        return not any(item.identity_key == key for item in previous)

    def new_records(
        self, current: Iterable[ArticleRecord], previous: Sequence[ArticleRecord]
    ) -> List[ArticleRecord]:
        """Filter ``current`` down to the articles missing from ``previous``."""

        seen = {item.identity_key for item in previous}
        return [record for record in current if record.identity_key not in seen]
