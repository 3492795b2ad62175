"""
SpyGuard CLI.

Command-line interface for classifying application descriptors and inspecting
the threat database.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .core.config import get_config
from .core.exceptions import DescriptorLoadError
from .core.logging import setup_logging

app = typer.Typer(
    name="spyguard",
    help="Layered threat classification for mobile applications",
    add_completion=False,
)
database_app = typer.Typer(help="Inspect and export the threat database", add_completion=False)
app.add_typer(database_app, name="database")

console = Console()

RISK_STYLES = {
    "high": "bold red",
    "medium": "yellow",
    "low": "cyan",
    "safe": "green",
}


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        from . import __version__
        console.print(f"SpyGuard v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """SpyGuard: spyware, predatory loan and data leak detection."""
    pass


def _build_database(database_file: Path | None):
    """Threat database seeded from a local file, or the embedded default."""
    from .database import ThreatDatabase, load_database_file
    from .storage import LocalStorageBackend

    database = ThreatDatabase(get_config().database)
    if database_file is not None:
        storage, key = LocalStorageBackend.for_file(database_file)
        payload = asyncio.run(load_database_file(storage, key))
        database.load_payload(payload)
    return database


@app.command()
def scan(
    apps_file: Optional[Path] = typer.Argument(
        None,
        help="JSON file with application descriptors (array, or object with 'apps')",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
    demo: bool = typer.Option(
        False,
        "--demo",
        help="Scan the built-in demonstration apps",
    ),
    offline: bool = typer.Option(
        False,
        "--offline",
        help="Skip the remote database refresh",
    ),
    database_file: Optional[Path] = typer.Option(
        None,
        "--database",
        "-d",
        help="Local whitelist/blacklist file replacing the embedded offline database",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print results as JSON",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable verbose logging",
    ),
) -> None:
    """Classify applications and report threats grouped by detection layer."""
    from .providers import FileAppsProvider, InstalledAppsProvider, sample_provider
    from .services.aggregation import (
        category_label,
        group_by_layer,
        layer_description,
        risk_label,
        summarize,
    )
    from .services.classification import ClassificationService
    from .storage import LocalStorageBackend

    config = get_config()
    if verbose:
        config = config.model_copy(update={"log_level": "DEBUG"})
    elif as_json:
        config = config.model_copy(update={"log_level": "WARNING"})
    setup_logging(config)

    provider: InstalledAppsProvider
    if apps_file is not None:
        storage, key = LocalStorageBackend.for_file(apps_file)
        provider = FileAppsProvider(storage, key)
    elif demo:
        provider = sample_provider()
    else:
        console.print("[red]Provide an apps file or use --demo[/red]")
        raise typer.Exit(1)

    try:
        database = _build_database(database_file)
        service = ClassificationService(database, config)
        outcome = asyncio.run(service.scan(provider, refresh=not offline))
    except DescriptorLoadError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    results = outcome.data or []

    if as_json:
        typer.echo(json.dumps([r.model_dump(mode="json", by_alias=True) for r in results], indent=2))
        return

    for warning in outcome.warnings:
        console.print(f"[yellow]{warning}[/yellow]")

    summary = summarize(results)
    if summary.is_clean:
        console.print(Panel.fit(
            f"[bold green]✓ No threats found[/bold green] ({summary.total_apps} apps scanned)",
            border_style="green",
        ))
        return

    threats = [r for r in results if r.is_threat]
    for layer, group in sorted(group_by_layer(threats).items()):
        table = Table(title=f"Layer {layer}: {layer_description(layer)}")
        table.add_column("App", style="cyan")
        table.add_column("Package")
        table.add_column("Category")
        table.add_column("Risk")
        table.add_column("Description")

        for result in group:
            style = RISK_STYLES.get(result.risk_level.value, "")
            table.add_row(
                result.name,
                result.package_name,
                category_label(result.category),
                f"[{style}]{risk_label(result.risk_level)}[/{style}]",
                result.description,
            )
        console.print(table)

    table = Table(title="Scan Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Apps Scanned", str(summary.total_apps))
    table.add_row("Threats", f"[red]{summary.threat_count}[/red]")
    for category, count in summary.by_category.items():
        table.add_row(category_label(category), str(count))
    table.add_row("Database", database.status().provenance.value)
    table.add_row("Duration", f"{outcome.duration_ms:.0f}ms")
    console.print(table)


@database_app.command("status")
def database_status(
    refresh: bool = typer.Option(
        False,
        "--refresh",
        help="Attempt a remote refresh before reporting",
    ),
) -> None:
    """Show threat database provenance and size."""
    from .database import ThreatDatabase

    config = get_config()
    setup_logging(config)

    database = ThreatDatabase(config.database)
    if refresh:
        result = asyncio.run(database.refresh())
        if not result.success:
            console.print(f"[yellow]Refresh failed: {result.error}[/yellow]")

    status = database.status()
    table = Table(title="Threat Database")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Provenance", "[green]online[/green]" if status.is_online else "offline")
    table.add_row("Last Fetch", status.last_fetch_time.isoformat() if status.last_fetch_time else "never")
    table.add_row("Whitelisted", str(status.whitelist_size))
    table.add_row("Blacklisted", str(status.blacklist_size))
    table.add_row("Remote URL", config.database.remote_url)

    console.print(table)


@database_app.command("export")
def database_export(
    output: Path = typer.Argument(
        ...,
        help="Destination JSON file",
        dir_okay=False,
        resolve_path=True,
    ),
    refresh: bool = typer.Option(
        False,
        "--refresh",
        help="Attempt a remote refresh before exporting",
    ),
) -> None:
    """Write the current whitelist/blacklist in the endpoint's JSON shape."""
    from .database import ThreatDatabase, export_database_file
    from .storage import LocalStorageBackend

    config = get_config()
    setup_logging(config)

    database = ThreatDatabase(config.database)
    if refresh:
        asyncio.run(database.refresh())

    storage, key = LocalStorageBackend.for_file(output)
    asyncio.run(export_database_file(storage, key, database.snapshot))

    status = database.status()
    console.print(
        f"[bold green]✓ Exported[/bold green] {status.whitelist_size} whitelisted and "
        f"{status.blacklist_size} blacklisted packages ({status.provenance.value}) to {output}"
    )


@app.command()
def config() -> None:
    """Show current configuration."""
    cfg = get_config()

    table = Table(title="Current Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Log Level", cfg.log_level)
    table.add_row("Database URL", cfg.database.remote_url)
    table.add_row("Database Timeout", f"{cfg.database.timeout_seconds:g}s")
    table.add_row("Simple Tool Background Limit", f"{cfg.heuristics.simple_tool_background_mb:g}MB")
    table.add_row("Background Data Limit", f"{cfg.heuristics.high_background_mb:g}MB")

    console.print(table)

    console.print("\n[dim]Configure via environment variables:[/dim]")
    console.print("  SPYGUARD_LOG_LEVEL, SPYGUARD_DATABASE_URL, SPYGUARD_DATABASE_TIMEOUT")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
