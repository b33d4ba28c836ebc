"""
Commandes CLI du pipeline de release (run).
"""

import asyncio
from enum import Enum
from typing import Annotated

import typer
from rich.table import Table

from ghostseed.adapters.cli.helpers import close_container, console, with_container
from ghostseed.core.errors import ConfigurationError
from ghostseed.services.release_pipeline import PipelineReport


class MediaFilter(str, Enum):
    """Filtre par type de media."""

    ALL = "all"
    MOVIES = "movies"
    SERIES = "series"


def run(
    filter_type: Annotated[
        MediaFilter,
        typer.Option("--filter", "-f", help="Type de medias a traiter"),
    ] = MediaFilter.ALL,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Exporte le seed sans creer ni envoyer de torrent"),
    ] = False,
    test_mode: Annotated[
        bool,
        typer.Option("--test-mode", help="Limite a 50 films et 10 series"),
    ] = False,
) -> None:
    """Execute le pipeline: nommage -> seed -> torrent -> tracker."""
    asyncio.run(_run_async(filter_type, dry_run, test_mode))


@with_container()
async def _run_async(
    container, filter_type: MediaFilter, dry_run: bool, test_mode: bool
) -> None:
    """Implementation async du pipeline."""
    settings = container.config()
    if dry_run:
        settings.torrent.dry_run = True
    if test_mode:
        settings.test_mode = True

    if not settings.radarr_enabled and not settings.sonarr_enabled:
        console.print("[yellow]Ni Radarr ni Sonarr ne sont configures.[/yellow]")
        raise typer.Exit(1)

    try:
        pipeline = container.release_pipeline()
    except ConfigurationError as e:
        console.print(f"[red]Configuration invalide: {e}[/red]")
        raise typer.Exit(1)

    try:
        if filter_type == MediaFilter.MOVIES:
            pipeline.ensure_seed_path()
            report = await pipeline.run_movies()
        elif filter_type == MediaFilter.SERIES:
            pipeline.ensure_seed_path()
            report = await pipeline.run_series()
        else:
            report = await pipeline.run()
    except ConfigurationError as e:
        console.print(f"[red]Configuration invalide: {e}[/red]")
        raise typer.Exit(1)
    finally:
        await close_container(container)

    display_report(report)
    if report.errors:
        raise typer.Exit(1)


def display_report(report: PipelineReport) -> None:
    """Affiche le bilan d'execution."""
    table = Table(title="Bilan")
    table.add_column("Traitees", justify="right", style="green")
    table.add_column("Envoyees", justify="right", style="cyan")
    table.add_column("Ignorees", justify="right", style="yellow")
    table.add_column("Echecs", justify="right", style="red")
    table.add_row(
        str(report.processed),
        str(report.uploaded),
        str(report.skipped),
        str(report.failed),
    )
    console.print(table)

    for name in report.names:
        console.print(f"  {name}")
    for error in report.errors:
        console.print(f"[red]Erreur: {error}[/red]")
