"""
Interfaces ports pour la creation de torrents et l'envoi vers les trackers.

Le moteur de nommage ne depend jamais directement de ces ports : ils sont
consommes par le pipeline, une fois par unite emise.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class UploadRequest:
    """
    Demande d'envoi vers un tracker.

    Attributs :
        title : Nom de release (titre du torrent)
        description_markdown : Description rendue en markdown
        torrent_path : Chemin du fichier .torrent
        category : Categorie du tracker (ex: "movies", "series", "anime")
    """

    title: str
    description_markdown: str
    torrent_path: Path
    category: str = "movies"


class ITorrentCreator(ABC):
    """Interface pour la creation d'un .torrent depuis un repertoire de seed."""

    @abstractmethod
    async def create(self, seed_dir: Path, scene_name: str) -> Path:
        """
        Cree le fichier .torrent du repertoire de seed.

        Retourne :
            Chemin du .torrent (existant si deja cree)

        Leve :
            TorrentCreationError : L'outil externe a echoue
        """
        ...


class ITrackerUploader(ABC):
    """
    Capacite "accepte une demande d'envoi, retourne succes/echec".

    Les implementations concretes sont selectionnees par la configuration.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Identifiant du tracker (pour les logs)."""
        ...

    @abstractmethod
    async def upload(self, request: UploadRequest) -> bool:
        """
        Envoie un torrent vers le tracker.

        Retourne :
            True si le tracker a accepte (ou possede deja) le torrent

        Leve :
            UploadError : Le tracker a refuse la demande
        """
        ...

    async def close(self) -> None:
        """Libere les ressources de l'uploader (aucune par defaut)."""
        return None
