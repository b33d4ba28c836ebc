"""
Point d'entrée CLI de GhostSeed.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from . import __version__
from .adapters.cli.commands import name_app, run
from .config import Settings
from .container import Container
from .logging_config import configure_logging

app = typer.Typer(
    name="ghostseed",
    help="Normalisation des noms de release et publication de torrents",
)
container = Container()

# Etat global pour les options de verbosite
state = {"verbose": 0, "quiet": False}


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Augmenter la verbosite (-v, -vv)"
        ),
    ] = 0,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (erreurs uniquement)"),
    ] = False,
) -> None:
    """GhostSeed - Noms de release, seed et torrents depuis Radarr/Sonarr."""
    if quiet:
        state["quiet"] = True
    else:
        state["verbose"] = verbose

    if quiet or verbose:
        settings = get_config()
        configure_logging(
            log_level=_console_level(settings),
            log_file=settings.log_file,
            rotation_size=settings.log_rotation_size,
            retention_count=settings.log_retention_count,
        )


# Monter les commandes
app.command()(run)

# Monter name_app comme sous-commande
app.add_typer(name_app, name="name")


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


def _console_level(settings: Settings) -> str:
    if state["quiet"]:
        return "ERROR"
    if state["verbose"] >= 1:
        return "DEBUG"
    return settings.log_level


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    logger.info("Configuration GhostSeed")
    typer.echo(f"Radarr : {config.radarr.base_url if config.radarr_enabled else 'désactivé'}")
    typer.echo(f"Sonarr : {config.sonarr.base_url if config.sonarr_enabled else 'désactivé'}")
    typer.echo(f"Seed : {config.media.seed_path or 'non configuré'}")
    typer.echo(f"Cache mediainfo : {'activé' if config.media.enable_mediainfo_cache else 'désactivé'}")
    typer.echo(f"Torrents : {config.torrent.output_dir or 'dans le répertoire de seed'}")
    typer.echo(f"Torrent privé : {'oui' if config.torrent.private else 'non'}")
    typer.echo(f"Dry-run torrent : {'oui' if config.torrent.dry_run else 'non'}")
    typer.echo(f"Torrust : {'activé' if config.upload.torrust.enable else 'désactivé'}")
    typer.echo(
        "Packs : "
        f"saisons complètes seulement={config.sonarr.only_complete_seasons}, "
        f"intégrale={config.sonarr.create_integrale_pack_if_complete}, "
        f"épisodes si incomplet={config.sonarr.per_episode_for_incomplete_seasons}"
    )
    typer.echo(f"Mode test : {'oui' if config.test_mode else 'non'}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"GhostSeed v{__version__}")


def main() -> None:
    """Point d'entrée de l'application."""
    # Charge la configuration et configure le logging
    settings = container.config()
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )

    logger.info("Démarrage de GhostSeed", version=__version__)

    # Lance la CLI
    app()


if __name__ == "__main__":
    main()
