"""
Exceptions du domaine GhostSeed.

Aucune de ces erreurs n'est fatale au processus : le pipeline les
intercepte unite par unite, les journalise et passe a la suivante.
"""

from typing import Optional


class GhostSeedError(Exception):
    """Exception de base de l'application."""


class ConfigurationError(GhostSeedError):
    """Configuration incoherente (ex: tracker inconnu)."""


class LibraryApiError(GhostSeedError):
    """
    Echec d'un appel Radarr/Sonarr (non-2xx, reseau, corps illisible).

    Attributes:
        status_code: Code HTTP retourne, ou None si erreur de transport
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class ExportError(GhostSeedError):
    """Echec de la creation de l'arborescence de seed."""


class TorrentCreationError(GhostSeedError):
    """Echec de la creation du fichier .torrent."""


class UploadError(GhostSeedError):
    """Echec de l'envoi vers un tracker."""
