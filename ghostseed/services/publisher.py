"""
Service de publication des torrents vers les trackers.

Distribue une demande d'envoi a tous les uploaders configures et rend
la description markdown (affiche, resume, nom de release, fiche technique).
"""

from pathlib import Path
from typing import Optional, Sequence

from loguru import logger

from ghostseed.core.errors import UploadError
from ghostseed.core.ports.publishing import ITrackerUploader, UploadRequest
from ghostseed.core.value_objects.release import PlannedRelease, ReleaseKind
from ghostseed.core.value_objects.technical_info import TechnicalInfo


def _languages(codes: frozenset[str]) -> str:
    return ", ".join(code.upper() for code in sorted(codes)) or "-"


def build_description(
    title: str,
    scene_name: str,
    technical: TechnicalInfo,
    heading: Optional[str] = None,
    year: Optional[int] = None,
    cover_url: Optional[str] = None,
    overview: Optional[str] = None,
) -> str:
    """
    Rend la description markdown d'un torrent.

    Args:
        title: Titre du film ou de la serie
        scene_name: Nom de release
        technical: Fiche technique de l'unite
        heading: Intitule (ex: "S01 Complete", "S01E02 - Pilot")
        year: Annee de l'oeuvre
        cover_url: Affiche
        overview: Resume

    Returns:
        Description markdown
    """
    lines: list[str] = []
    if cover_url:
        lines.extend([f"![{title}]({cover_url})", ""])

    header = f"# {title}"
    if year:
        header += f" ({year})"
    lines.append(header)
    if heading:
        lines.append(f"## {heading}")
    lines.append("")

    if overview and overview.strip():
        lines.extend([overview.strip(), ""])

    lines.extend([f"**Release :** `{scene_name}`", ""])

    hdr = "DV/HDR" if technical.dv else ("HDR" if technical.hdr else "SDR")
    rows = [
        ("Resolution", technical.resolution or "-"),
        ("Video", technical.video_codec or "-"),
        ("Profondeur", technical.bit_depth or "8bit"),
        ("Dynamique", hdr),
        ("Audio", " ".join(
            part for part in (technical.audio_codec, technical.audio_channels) if part
        ) or "-"),
        ("Langues audio", _languages(technical.audio_languages)),
        ("Sous-titres", _languages(technical.subtitle_languages)),
    ]
    lines.extend(["| | |", "|---|---|"])
    lines.extend(f"| {label} | {value} |" for label, value in rows)
    return "\n".join(lines) + "\n"


def category_for(release: PlannedRelease) -> str:
    """Type de contenu transmis aux uploaders ("movies", "series", "anime")."""
    if release.kind == ReleaseKind.MOVIE:
        return "movies"
    return "anime" if release.is_anime else "series"


class PublisherService:
    """
    Publication vers l'ensemble des trackers configures.

    Le service est inactif sans uploader, ou en mode dry-run : les demandes
    sont alors journalisees et ignorees.
    """

    def __init__(
        self,
        uploaders: Sequence[ITrackerUploader] = (),
        enabled: bool = True,
        dry_run: bool = False,
    ) -> None:
        self._uploaders = list(uploaders)
        self._enabled = enabled
        self._dry_run = dry_run

    def is_enabled(self) -> bool:
        return self._enabled and bool(self._uploaders) and not self._dry_run

    async def publish(self, request: UploadRequest) -> bool:
        """
        Envoie la demande a chaque uploader.

        Un echec n'interrompt pas les envois suivants.

        Returns:
            True si tous les uploaders ont reussi, False sinon (ou si inactif)
        """
        if not self.is_enabled():
            if self._dry_run:
                logger.info(f"Upload dry-run : envoi ignore pour '{request.title}'")
            else:
                logger.debug(f"Upload desactive : envoi ignore pour '{request.title}'")
            return False

        all_ok = True
        for uploader in self._uploaders:
            try:
                accepted = await uploader.upload(request)
            except UploadError as e:
                logger.error(f"Echec de l'uploader {uploader.name} pour '{request.title}': {e}")
                all_ok = False
                continue
            if not accepted:
                logger.error(f"L'uploader {uploader.name} a refuse '{request.title}'")
                all_ok = False

        if all_ok:
            logger.info(f"Torrent envoye : '{request.title}'")
        return all_ok

    async def publish_release(self, release: PlannedRelease, torrent_path: Path) -> bool:
        """Construit la demande d'envoi d'une unite planifiee et la publie."""
        description = build_description(
            title=release.title,
            scene_name=release.scene_name,
            technical=release.technical,
            heading=release.heading or None,
            year=release.year,
            cover_url=release.cover_url,
            overview=release.overview,
        )
        request = UploadRequest(
            title=release.scene_name,
            description_markdown=description,
            torrent_path=torrent_path,
            category=category_for(release),
        )
        return await self.publish(request)

    async def close(self) -> None:
        for uploader in self._uploaders:
            await uploader.close()
