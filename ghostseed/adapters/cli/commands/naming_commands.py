"""
Commandes CLI d'inspection des noms de release (name parse/check/propose).
"""

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.table import Table

from ghostseed.adapters.cli.helpers import console, suppress_loguru
from ghostseed.container import Container
from ghostseed.core.value_objects.hints import MovieHints
from ghostseed.core.value_objects.technical_info import TechnicalInfo

name_app = typer.Typer(help="Inspection et construction des noms de release")


def _value(value) -> str:
    if value is None or value == "" or value == set() or value == []:
        return "-"
    if isinstance(value, (set, frozenset)):
        return ", ".join(sorted(value))
    if isinstance(value, list):
        return ".".join(value)
    return str(value)


@name_app.command("parse")
def parse_name(
    name: Annotated[str, typer.Argument(help="Nom de release a analyser")],
) -> None:
    """Affiche les champs reconnus dans un nom existant."""
    naming = Container().naming_service()
    parts = naming.parse(name)

    table = Table(title=name, show_header=False)
    table.add_column("Champ", style="cyan")
    table.add_column("Valeur")
    rows = [
        ("Titre", parts.title_tokens),
        ("Annee", parts.year),
        ("Resolution", parts.resolution),
        ("Source", parts.source),
        ("Codec video", parts.video_codec),
        ("Codec audio", parts.audio_codec),
        ("Canaux", parts.audio_channels),
        ("Profondeur", parts.bit_depth),
        ("HDR", "oui" if parts.hdr else None),
        ("Dolby Vision", "oui" if parts.dv else None),
        ("Extras", parts.extra_tags),
        ("Groupe", parts.release_group),
    ]
    for label, value in rows:
        table.add_row(label, _value(value))
    console.print(table)


@name_app.command("check")
def check_names(
    names: Annotated[list[str], typer.Argument(help="Noms de release a valider")],
) -> None:
    """Valide un ou plusieurs noms ; code de sortie 1 si l'un est invalide."""
    naming = Container().naming_service()
    all_valid = True
    for name in names:
        result = naming.validate(name)
        if result.valid:
            console.print(f"[green]OK[/green]      {name}")
            continue
        all_valid = False
        issues = ", ".join(issue.value for issue in result.issues)
        console.print(f"[red]INVALIDE[/red] {name or '<vide>'} [dim]({issues})[/dim]")

    if not all_valid:
        raise typer.Exit(1)


@name_app.command("propose")
def propose_name(
    title: Annotated[str, typer.Option("--title", "-t", help="Titre du film")],
    year: Annotated[Optional[int], typer.Option("--year", "-y", help="Annee")] = None,
    quality: Annotated[
        Optional[str], typer.Option("--quality", "-q", help="Qualite (ex: WEBDL-1080p)")
    ] = None,
    group: Annotated[
        Optional[str], typer.Option("--group", "-g", help="Groupe de release")
    ] = None,
    original: Annotated[
        Optional[str], typer.Option("--original", "-o", help="Nom existant (tags recuperes)")
    ] = None,
    file: Annotated[
        Optional[Path], typer.Option("--file", "-f", help="Fichier video a sonder")
    ] = None,
) -> None:
    """Construit le nom de release d'un film depuis des indices et une sonde."""
    container = Container()
    naming = container.naming_service()

    technical = TechnicalInfo()
    if file is not None:
        with suppress_loguru():
            technical = container.technical_probe().probe(file)
    technical = naming.resolve_technical(technical, quality)

    validation = naming.validate(original) if original else None
    decision = naming.propose_movie(
        original,
        MovieHints(title=title, year=year, quality=quality, release_group=group),
        technical,
        validation,
    )
    if not decision.chosen:
        console.print("[red]Nom vide : indices insuffisants[/red]")
        raise typer.Exit(1)

    console.print(decision.chosen)
    if decision.issues:
        issues = ", ".join(issue.value for issue in decision.issues)
        console.print(f"[dim]Problemes du nom existant : {issues}[/dim]")
