"""
Adaptateur pour l'export de l'arborescence de seed.

Implementation concrete de ISeedExporter : un repertoire par nom de release,
contenant des liens symboliques vers les fichiers de la bibliotheque et un
fichier .nfo (rapport mediainfo).

Disposition :
    <seed_root>/<scene>/<scene>.<ext>       fichier unique
    <seed_root>/<scene>/<nom d'origine>     pack (un lien par fichier)
    <seed_root>/<scene>/<scene>.nfo
"""

import os
from pathlib import Path
from typing import Optional

from loguru import logger
from pathvalidate import ValidationError, validate_filename

from ghostseed.core.errors import ExportError
from ghostseed.core.ports.file_system import ISeedExporter
from ghostseed.core.ports.parser import ITechnicalProbe

# Rapport mediainfo pre-genere a cote des fichiers de la bibliotheque
SOURCE_NFO_NAME = "mediainfo.nfo"


def relative_target(from_dir: Path, to_path: Path) -> Optional[Path]:
    """
    Chemin relatif de from_dir vers to_path, s'ils partagent un ancetre.

    Returns:
        Le chemin relatif, ou None si l'un des chemins n'est pas absolu
    """
    if not from_dir.is_absolute() or not to_path.is_absolute():
        return None
    try:
        return Path(os.path.relpath(to_path, from_dir))
    except ValueError:
        # Lecteurs differents (Windows)
        return None


class SeedExporter(ISeedExporter):
    """
    Export idempotent des repertoires de seed.

    Un lien deja present n'est jamais recree ; un .nfo deja present est
    conserve. Les liens sont relatifs quand c'est possible pour survivre
    a un changement de point de montage commun.
    """

    def __init__(self, probe: Optional[ITechnicalProbe] = None) -> None:
        """
        Args:
            probe: Sonde fournissant le rapport texte du .nfo (optionnelle)
        """
        self._probe = probe

    def export_single(self, seed_root: Path, scene_name: str, video: Path) -> Path:
        """
        Exporte un fichier unique sous <scene>/<scene>.<ext>.

        Args:
            seed_root: Racine des repertoires de seed
            scene_name: Nom de release (nom du repertoire)
            video: Fichier video local

        Returns:
            Le repertoire de seed

        Raises:
            ExportError: Nom invalide ou erreur d'ecriture
        """
        seed_dir = self._prepare_dir(seed_root, scene_name)
        extension = video.suffix or ".mkv"
        self._link(video, seed_dir / f"{scene_name}{extension}")
        self._write_nfo(seed_dir, scene_name, video)
        return seed_dir

    def export_pack(self, seed_root: Path, scene_name: str, videos: list[Path]) -> Path:
        """
        Exporte un pack : un lien par fichier, sous son nom d'origine.

        Le .nfo est produit depuis le premier fichier du pack.

        Raises:
            ExportError: Pack vide, noms en collision, nom invalide ou
                erreur d'ecriture
        """
        if not videos:
            raise ExportError(f"Pack vide : {scene_name}")

        names = [video.name for video in videos]
        if len(set(names)) != len(names):
            raise ExportError(f"Noms de fichiers en collision dans le pack {scene_name}")

        seed_dir = self._prepare_dir(seed_root, scene_name)
        for video in videos:
            self._link(video, seed_dir / video.name)
        self._write_nfo(seed_dir, scene_name, videos[0])
        return seed_dir

    def _prepare_dir(self, seed_root: Path, scene_name: str) -> Path:
        try:
            validate_filename(scene_name)
        except ValidationError as e:
            raise ExportError(f"Nom de repertoire invalide '{scene_name}': {e}") from e

        seed_dir = seed_root / scene_name
        try:
            seed_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ExportError(f"Impossible de creer {seed_dir}: {e}") from e
        return seed_dir

    def _link(self, target: Path, link: Path) -> None:
        """Cree le lien symbolique link -> target, sauf s'il existe deja."""
        if link.is_symlink() or link.exists():
            logger.debug(f"Lien deja present : {link}")
            return
        relative = relative_target(link.parent, target)
        try:
            link.symlink_to(relative if relative is not None else target)
        except OSError as e:
            raise ExportError(f"Echec du lien {link} -> {target}: {e}") from e
        logger.debug(f"Lien cree : {link} -> {target}")

    def _write_nfo(self, seed_dir: Path, scene_name: str, video: Path) -> None:
        """
        Produit <scene>.nfo : lien vers un mediainfo.nfo voisin du fichier,
        sinon rapport texte de la sonde.
        """
        nfo = seed_dir / f"{scene_name}.nfo"
        if nfo.is_symlink() or nfo.exists():
            return

        source_nfo = video.parent / SOURCE_NFO_NAME
        if source_nfo.exists():
            try:
                self._link(source_nfo, nfo)
                return
            except ExportError as e:
                logger.warning(f"{e}, generation d'un nouveau .nfo")

        if self._probe is None:
            return
        report = self._probe.text_report(video)
        if report is None:
            logger.warning(f"Pas de rapport mediainfo pour {video}, .nfo omis")
            return
        try:
            nfo.write_text(report, encoding="utf-8")
        except OSError as e:
            raise ExportError(f"Echec d'ecriture de {nfo}: {e}") from e
