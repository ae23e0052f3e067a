"""Dependency container wiring a monitoring run."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from wirescout.application import ExtractionEngine, RunController, SiteOrchestrator
from wirescout.infrastructure import (
    JsonSnapshotStore,
    RequestsPageFetcher,
    SmtpEmailSink,
    SoupDocumentParser,
)
from wirescout.settings import Settings


@dataclass
class RunContainer:
    """Container exposing the collaborators of a run."""

    fetcher: RequestsPageFetcher
    parser: SoupDocumentParser
    orchestrator: SiteOrchestrator
    snapshot_store: JsonSnapshotStore
    notification_sink: SmtpEmailSink
    run_controller: RunController


def build_snapshot_store(settings: Settings) -> JsonSnapshotStore:
    return JsonSnapshotStore(settings.state_file)


def build_run_container(
    settings: Settings,
    *,
    dry_run: bool = False,
    status_publisher: Callable[[str], None] | None = None,
) -> RunContainer:
    """Build the run container from already validated settings."""

    fetcher = RequestsPageFetcher(timeout=settings.fetch_timeout)
    parser = SoupDocumentParser()
    orchestrator = SiteOrchestrator(
        fetcher,
        parser,
        ExtractionEngine(),
        max_workers=settings.max_workers,
    )
    snapshot_store = build_snapshot_store(settings)
    notification_sink = SmtpEmailSink(
        host=settings.email.host,
        port=settings.email.port,
        user=settings.email.user or "",
        password=settings.email.password or "",
    )
    run_controller = RunController(
        settings.sites,
        orchestrator,
        snapshot_store,
        notification_sink,
        settings.email.destination(),
        dry_run=dry_run,
        status_publisher=status_publisher,
    )

    return RunContainer(
        fetcher=fetcher,
        parser=parser,
        orchestrator=orchestrator,
        snapshot_store=snapshot_store,
        notification_sink=notification_sink,
        run_controller=run_controller,
    )


__all__ = ["RunContainer", "build_run_container", "build_snapshot_store"]
