"""Command line interface to run Wirescout."""
from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from wirescout.container import build_run_container
from wirescout.domain import ConfigurationError, FetchError, validate_site
from wirescout.infrastructure import JsonSnapshotStore, RequestsPageFetcher, suggest_selectors
from wirescout.schemas import parse_sites_config
from wirescout.settings import Settings, state_file_from_env


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Wirescout - e-mails new articles found on listing pages"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: WIRESCOUT_LOG_LEVEL or INFO)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser(
        "run", help="Scrape every configured site once and notify new articles"
    )
    run.add_argument(
        "--dry-run",
        action="store_true",
        help="Report new articles without sending e-mail or saving the snapshot",
    )

    inspect = subparsers.add_parser(
        "inspect", help="Fetch a page and suggest selectors for it"
    )
    inspect.add_argument("url", help="Listing page to analyse")
    inspect.add_argument("--name", default="Site Name", help="Name used in the suggestion")

    sites_config = subparsers.add_parser(
        "sites-config",
        help="Print a sites file as single-line JSON for the SITES_CONFIG secret",
    )
    sites_config.add_argument("path", type=Path, help="Path to the JSON sites file")

    subparsers.add_parser("reset-state", help="Forget every previously seen article")

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    load_dotenv()
    args = parse_args(argv)
    console = Console()
    level_name = args.log_level or os.getenv("WIRESCOUT_LOG_LEVEL", "INFO")
    handler = RichHandler(console=console, markup=False, rich_tracebacks=True)
    logging.basicConfig(
        level=getattr(logging, str(level_name).upper(), logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    logger = logging.getLogger("wirescout.cli")

    try:
        if args.command == "run":
            _run(console, dry_run=args.dry_run)
        elif args.command == "inspect":
            _inspect(console, args.url, args.name)
        elif args.command == "sites-config":
            _print_sites_config(console, args.path)
        elif args.command == "reset-state":
            store = JsonSnapshotStore(state_file_from_env())
            store.reset()
            console.print(f"[green]State cleared: {store.path}[/green]")
        else:
            raise ValueError(f"Unknown command: {args.command}")
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        sys.exit(1)


def _run(console: Console, *, dry_run: bool) -> None:
    settings = Settings.from_env()
    settings.validate()

    with console.status("[cyan]Wirescout starting...") as status:
        container = build_run_container(
            settings,
            dry_run=dry_run,
            status_publisher=lambda message: status.update(f"[cyan]{message}"),
        )
        try:
            result = container.run_controller.run()
        finally:
            container.fetcher.close()

    for outcome in result.failed_sites:
        console.print(
            f"[yellow]- {escape(outcome.site_name)}: {escape(outcome.error or '')}[/yellow]"
        )
    if not result.new_records:
        console.print("[green]No new articles found - no email sent[/green]")
    elif result.notified:
        console.print(
            f"[green]{len(result.new_records)} new articles sent to "
            f"{', '.join(settings.email.recipients)}.[/green]"
        )
    elif dry_run:
        for record in result.new_records:
            console.print(
                f"[bold]-[/bold] {escape(record.source)}: {escape(record.title)} {record.link or ''}"
            )
    else:
        console.print(
            f"[yellow]{len(result.new_records)} new articles found but the e-mail "
            "could not be sent.[/yellow]"
        )


def _inspect(console: Console, url: str, name: str) -> None:
    fetcher = RequestsPageFetcher()
    try:
        markup = fetcher.fetch(url)
    except FetchError as exc:
        console.print(f"[red]{exc}[/red]")
        sys.exit(1)
    finally:
        fetcher.close()

    suggestion = suggest_selectors(markup)
    if suggestion is None:
        console.print(
            "[yellow]No common containers found. Try inspecting the page manually.[/yellow]"
        )
        return

    console.print("[bold]Container candidates:[/bold]")
    for selector, count in suggestion.container_counts:
        console.print(f"   {selector}: {count} elements", markup=False)
    console.print(f"[green]Using container: {escape(suggestion.container)}[/green]")
    for label, samples in (
        ("Headings", suggestion.headings),
        ("Links", suggestion.links),
        ("Paragraphs/summaries", suggestion.paragraphs),
    ):
        console.print(f"[bold]{label} found:[/bold]")
        for sample in samples[:3]:
            console.print(f"   {sample.selector}: {sample.text!r}", markup=False)
    console.print("[bold]Suggested configuration:[/bold]")
    console.print_json(data=suggestion.to_site_config(url, name))


def _print_sites_config(console: Console, path: Path) -> None:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read sites file {path}: {exc}") from exc
    payload = parse_sites_config(raw)

    console.print("[bold]Configured sites:[/bold]")
    for index, site in enumerate(payload.to_domain(), start=1):
        problem = validate_site(site)
        if problem is None:
            console.print(f"   {index}. {site.name}", markup=False)
        else:
            console.print(
                f"   {index}. {escape(site.name)} "
                f"[yellow](invalid: {escape(str(problem))})[/yellow]"
            )
    console.print("[bold]Single-line JSON for SITES_CONFIG:[/bold]")
    # Plain stdout keeps the line unwrapped so it can be copied as is.
    print(payload.to_json())
    console.print("[bold]Formatted JSON for reference:[/bold]")
    console.print_json(payload.to_json(indent=2))


if __name__ == "__main__":
    main()
