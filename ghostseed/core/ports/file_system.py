"""
Interface port pour l'export de l'arborescence de seed.

L'export construit, a partir d'un nom de release, un repertoire de liens
symboliques pret a etre passe a l'outil de creation de torrent.
"""

from abc import ABC, abstractmethod
from pathlib import Path


class ISeedExporter(ABC):
    """
    Interface pour la construction de l'arborescence de seed.

    Disposition produite :
        <seed_root>/<scene>/<scene>.<ext>   (fichier unique)
        <seed_root>/<scene>/<nom original>  (pack, un lien par fichier)
        <seed_root>/<scene>/<scene>.nfo
    """

    @abstractmethod
    def export_single(self, seed_root: Path, scene_name: str, video: Path) -> Path:
        """
        Exporte un fichier unique sous le nom de release.

        Retourne :
            Le repertoire de seed cree (ou deja existant)

        Leve :
            ExportError : Nom de repertoire invalide ou erreur d'ecriture
        """
        ...

    @abstractmethod
    def export_pack(self, seed_root: Path, scene_name: str, videos: list[Path]) -> Path:
        """
        Exporte un pack de fichiers sous un repertoire unique.

        Retourne :
            Le repertoire de seed cree (ou deja existant)

        Leve :
            ExportError : Nom de repertoire invalide ou erreur d'ecriture
        """
        ...
