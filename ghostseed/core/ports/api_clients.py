"""
Interfaces ports pour les clients des gestionnaires de bibliotheque.

Interfaces abstraites (ports) definissant les contrats pour Radarr (films)
et Sonarr (series). Les implementations (adaptateurs) fournissent les
clients HTTP concrets (API v3).
"""

from abc import ABC, abstractmethod

from ghostseed.core.entities.library import (
    EpisodeFileRecord,
    EpisodeRecord,
    MovieRecord,
    SeriesRecord,
)


class IRadarrClient(ABC):
    """
    Interface pour le client Radarr.

    Fournit la liste des films connus du gestionnaire, avec leur fichier.
    """

    @abstractmethod
    async def list_movies(self) -> list[MovieRecord]:
        """
        Liste tous les films de la bibliotheque Radarr.

        Retourne :
            Liste de MovieRecord (avec ou sans fichier)

        Leve :
            LibraryApiError : Reponse HTTP non-2xx
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Ferme le client HTTP sous-jacent."""
        ...


class ISonarrClient(ABC):
    """
    Interface pour le client Sonarr.

    Fournit les series, leurs episodes et les fichiers d'episodes.
    """

    @abstractmethod
    async def list_series(self) -> list[SeriesRecord]:
        """Liste toutes les series de la bibliotheque Sonarr."""
        ...

    @abstractmethod
    async def list_episodes(self, series_id: int) -> list[EpisodeRecord]:
        """Liste les episodes d'une serie (y compris les speciaux, saison 0)."""
        ...

    @abstractmethod
    async def list_episode_files(self, series_id: int) -> list[EpisodeFileRecord]:
        """Liste les fichiers d'episodes d'une serie."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Ferme le client HTTP sous-jacent."""
        ...
