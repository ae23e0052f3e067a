"""Single monitoring pass: scrape, diff against the snapshot, notify, persist."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, List, Sequence

from wirescout.domain import (
    ArticleRecord,
    ConfigurationError,
    Destination,
    NotificationSink,
    SiteSpec,
    SnapshotRepository,
)

from .orchestrator import SiteOrchestrator, SiteOutcome


@dataclass(slots=True)
class RunResult:
    """Summary of one monitoring pass."""

    all_records: List[ArticleRecord]
    new_records: List[ArticleRecord]
    site_outcomes: List[SiteOutcome] = field(default_factory=list)
    notified: bool = False

    @property
    def failed_sites(self) -> List[SiteOutcome]:
        return [outcome for outcome in self.site_outcomes if not outcome.ok]


class RunController:
    """Coordinates the orchestrator, the snapshot store and the notification sink."""

    def __init__(
        self,
        sites: Sequence[SiteSpec],
        orchestrator: SiteOrchestrator,
        snapshot_store: SnapshotRepository,
        notification_sink: NotificationSink,
        destination: Destination,
        *,
        dry_run: bool = False,
        status_publisher: Callable[[str], None] | None = None,
    ) -> None:
        """Configure the controller with every collaborator of a run.

        Args:
            sites: Sites scraped on every run, in configuration order.
            orchestrator: Component scraping the sites concurrently.
            snapshot_store: Repository holding the previous run's articles.
            notification_sink: Destination of the new articles.
            destination: Recipients and sender used by the sink.
            dry_run: When ``True`` nothing is sent and the snapshot is kept.
            status_publisher: Optional callback receiving progress messages.

        Raises:
            ConfigurationError: When no site or no recipient is configured.
        """

        if not sites:
            raise ConfigurationError("No sites configured")
        if not destination.recipients:
            raise ConfigurationError("No notification recipients configured")

        self._sites = tuple(sites)
        self._orchestrator = orchestrator
        self._snapshot_store = snapshot_store
        self._notification_sink = notification_sink
        self._destination = destination
        self._dry_run = dry_run
        self._status_publisher = status_publisher
        self._log = logging.getLogger("wirescout.run")

    def _publish_status(self, message: str) -> None:
        self._log.info(message)
        if self._status_publisher:
            self._status_publisher(message)

    def run(self) -> RunResult:
        self._publish_status(f"Monitoring {len(self._sites)} site(s)...")

        # Loading the snapshot does not depend on the scrape.
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="wirescout-run") as executor:
            previous_future = executor.submit(self._snapshot_store.load)
            outcomes_future = executor.submit(self._orchestrator.collect, self._sites)
            previous = previous_future.result()
            outcomes = outcomes_future.result()

        all_records = self._orchestrator.merge(outcomes)
        self._publish_status(f"Previous: {len(previous)} | Current: {len(all_records)}")

        new_records = self._snapshot_store.new_records(all_records, previous)
        notified = False
        if not new_records:
            self._publish_status("No new articles")
        elif self._dry_run:
            self._publish_status(f"Found {len(new_records)} new articles (dry run, not sent)")
        else:
            self._publish_status(f"Found {len(new_records)} new articles!")
            notified = self._notify(new_records)

        if self._dry_run:
            self._publish_status("Dry run: snapshot left untouched")
        else:
            # Saved even when the notification failed, so the same articles
            # are not reported again on the next run.
            self._snapshot_store.save(all_records)

        return RunResult(
            all_records=all_records,
            new_records=new_records,
            site_outcomes=list(outcomes),
            notified=notified,
        )

    def _notify(self, records: List[ArticleRecord]) -> bool:
        try:
            self._notification_sink.send(records, self._destination)
        except Exception as exc:
            self._log.warning("Notification failed, articles will not be resent: %s", exc)
            return False
        self._publish_status("Notification sent")
        return True


__all__ = ["RunController", "RunResult"]
