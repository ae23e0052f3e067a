"""Tests for a complete monitoring pass."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import List, Sequence

import pytest

from wirescout.application import RunController, SiteOutcome
from wirescout.domain import (
    ArticleRecord,
    ConfigurationError,
    Destination,
    NotificationError,
    NotificationSink,
    SiteSelectors,
    SiteSpec,
)
from wirescout.infrastructure import JsonSnapshotStore

_T = datetime(2024, 6, 15, tzinfo=timezone.utc)
_DESTINATION = Destination(recipients=("team@example.com",), sender="bot@example.com")
_SITES = [
    SiteSpec(
        name="Allianz",
        url="https://a.example.com/",
        selectors=SiteSelectors(container="article", title="h2"),
    )
]


def _record(title: str, days_ago: int = 0) -> ArticleRecord:
    return ArticleRecord(
        source="Allianz",
        title=title,
        link=f"https://a.example.com/{title.lower().replace(' ', '-')}",
        sort_date=_T - timedelta(days=days_ago),
    )


class _DummyOrchestrator:
    def __init__(self, outcomes: List[SiteOutcome]) -> None:
        self._outcomes = outcomes
        self.collected: list[Sequence[SiteSpec]] = []

    def collect(self, sites):
        self.collected.append(sites)
        return self._outcomes

    def merge(self, outcomes):
        records = [record for outcome in outcomes for record in outcome.records]
        return sorted(records, key=lambda record: record.sort_date, reverse=True)


class _RecordingSink(NotificationSink):
    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[tuple[list[ArticleRecord], Destination]] = []
        self._error = error

    def send(self, records, destination) -> None:
        self.calls.append((list(records), destination))
        if self._error is not None:
            raise self._error


@pytest.fixture
def store(tmp_path: Path) -> JsonSnapshotStore:
    store = JsonSnapshotStore(tmp_path / "state.json")
    store.save([_record("Old one", 2), _record("Old two", 1)])
    return store


def _orchestrator() -> _DummyOrchestrator:
    return _DummyOrchestrator(
        [
            SiteOutcome.success(
                "Allianz", [_record("Fresh"), _record("Old two", 1), _record("Old one", 2)]
            )
        ]
    )


def test_only_new_records_are_sent_and_full_set_is_saved(store) -> None:
    sink = _RecordingSink()
    controller = RunController(_SITES, _orchestrator(), store, sink, _DESTINATION)

    result = controller.run()

    assert len(sink.calls) == 1
    sent, destination = sink.calls[0]
    assert [record.title for record in sent] == ["Fresh"]
    assert destination == _DESTINATION
    assert result.notified is True
    assert [record.title for record in store.load()] == ["Fresh", "Old two", "Old one"]


def test_snapshot_is_saved_even_when_notification_fails(store) -> None:
    sink = _RecordingSink(error=NotificationError("smtp down"))
    controller = RunController(_SITES, _orchestrator(), store, sink, _DESTINATION)

    result = controller.run()

    assert len(sink.calls) == 1
    assert result.notified is False
    assert [record.title for record in result.new_records] == ["Fresh"]
    assert len(store.load()) == 3


def test_unexpected_sink_error_is_contained(store) -> None:
    sink = _RecordingSink(error=RuntimeError("boom"))
    controller = RunController(_SITES, _orchestrator(), store, sink, _DESTINATION)

    result = controller.run()

    assert result.notified is False
    assert len(store.load()) == 3


def test_no_new_records_means_no_notification(store) -> None:
    orchestrator = _DummyOrchestrator(
        [SiteOutcome.success("Allianz", [_record("Old one", 2), _record("Old two", 1)])]
    )
    sink = _RecordingSink()

    result = RunController(_SITES, orchestrator, store, sink, _DESTINATION).run()

    assert sink.calls == []
    assert result.new_records == []
    assert len(store.load()) == 2


def test_first_run_reports_every_record(tmp_path: Path) -> None:
    store = JsonSnapshotStore(tmp_path / "state.json")
    sink = _RecordingSink()

    result = RunController(_SITES, _orchestrator(), store, sink, _DESTINATION).run()

    assert len(result.new_records) == 3
    assert len(sink.calls[0][0]) == 3


def test_failed_sites_are_reported_and_others_still_saved(tmp_path: Path) -> None:
    orchestrator = _DummyOrchestrator(
        [
            SiteOutcome.failure("Broken", "HTTP 500: error"),
            SiteOutcome.success("Allianz", [_record("Fresh")]),
        ]
    )
    store = JsonSnapshotStore(tmp_path / "state.json")

    result = RunController(_SITES, orchestrator, store, _RecordingSink(), _DESTINATION).run()

    assert [outcome.site_name for outcome in result.failed_sites] == ["Broken"]
    assert [record.title for record in store.load()] == ["Fresh"]


def test_dry_run_neither_sends_nor_saves(store) -> None:
    sink = _RecordingSink()
    messages: list[str] = []
    controller = RunController(
        _SITES,
        _orchestrator(),
        store,
        sink,
        _DESTINATION,
        dry_run=True,
        status_publisher=messages.append,
    )

    result = controller.run()

    assert sink.calls == []
    assert [record.title for record in result.new_records] == ["Fresh"]
    assert len(store.load()) == 2
    assert any("dry run" in message.lower() for message in messages)


def test_status_publisher_receives_progress(store) -> None:
    messages: list[str] = []
    controller = RunController(
        _SITES,
        _orchestrator(),
        store,
        _RecordingSink(),
        _DESTINATION,
        status_publisher=messages.append,
    )

    controller.run()

    assert messages[0] == "Monitoring 1 site(s)..."
    assert "Previous: 2 | Current: 3" in messages
    assert "Notification sent" in messages


def test_requires_sites(store) -> None:
    with pytest.raises(ConfigurationError):
        RunController([], _orchestrator(), store, _RecordingSink(), _DESTINATION)


def test_requires_recipients(store) -> None:
    destination = Destination(recipients=(), sender="bot@example.com")

    with pytest.raises(ConfigurationError):
        RunController(_SITES, _orchestrator(), store, _RecordingSink(), destination)
