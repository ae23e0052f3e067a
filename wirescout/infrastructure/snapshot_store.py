"""Snapshot of the last run persisted as a JSON file."""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Iterable, List

from wirescout.domain import ArticleRecord, SnapshotRepository

log = logging.getLogger("wirescout.snapshot")


class JsonSnapshotStore(SnapshotRepository):
    """Keeps the full article set of the latest run in a single JSON array."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> List[ArticleRecord]:
        if not self._path.exists():
            log.info("No snapshot at %s, starting from an empty history", self._path)
            return []
        try:
            with self._path.open("r", encoding="utf-8") as stream:
                payload = json.load(stream)
        except (OSError, ValueError) as exc:
            log.warning("Ignoring unreadable snapshot %s: %s", self._path, exc)
            return []
        if not isinstance(payload, list):
            log.warning(
                "Ignoring snapshot %s with unexpected format: %s", self._path, type(payload)
            )
            return []
        return self._decode(payload)

    def save(self, records: Iterable[ArticleRecord]) -> None:
        payload = [record.to_mapping() for record in records]
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as stream:
            json.dump(payload, stream, ensure_ascii=False, indent=2)
            stream.write("\n")
        os.replace(tmp_path, self._path)
        log.info("Snapshot with %d articles saved to %s", len(payload), self._path)

    def _decode(self, payload: list[Any]) -> List[ArticleRecord]:
        records: List[ArticleRecord] = []
        for index, item in enumerate(payload):
            if not isinstance(item, dict):
                log.debug("snapshot entry %d is not an object, skipping", index)
                continue
            try:
                records.append(ArticleRecord.from_mapping(item))
            except ValueError as exc:
                log.debug("snapshot entry %d skipped: %s", index, exc)
        return records


__all__ = ["JsonSnapshotStore"]
