"""
Implementation de la sonde technique avec pymediainfo.

Ce module fournit MediaInfoProbe qui implemente ITechnicalProbe pour
extraire resolution, codecs, HDR, canaux et langues d'un fichier video,
avec un cache disque optionnel (diskcache) invalide sur la date de
modification du fichier.
"""

import re
from pathlib import Path
from typing import Any, Optional

from diskcache import Cache
from loguru import logger
from pymediainfo import MediaInfo as PyMediaInfo

from ghostseed.core.ports.parser import ITechnicalProbe
from ghostseed.core.value_objects.technical_info import TEN_BIT, TechnicalInfo


class ProbeCache:
    """
    Cache persistant des TechnicalInfo, indexe par chemin de fichier.

    Chaque entree memorise la date de modification (ns) du fichier sonde :
    une entree plus ancienne que le fichier est ignoree.

    Example:
        cache = ProbeCache(cache_dir=".cache/mediainfo")
        cache.set(path, mtime_ns, info)
        info = cache.get(path, mtime_ns)
    """

    def __init__(self, cache_dir: str | Path = ".cache/mediainfo") -> None:
        """
        Initialise le cache avec un repertoire de stockage.

        Args:
            cache_dir: Chemin vers le repertoire du cache (cree si inexistant)
        """
        self._cache = Cache(str(cache_dir))

    def get(self, file_path: Path, mtime_ns: int) -> Optional[TechnicalInfo]:
        """
        Recupere l'info d'un fichier si elle est a jour.

        Returns:
            Le TechnicalInfo stocke, ou None si absent ou perime
        """
        entry = self._cache.get(str(file_path))
        if entry is None:
            return None
        cached_mtime, info = entry
        if cached_mtime < mtime_ns:
            return None
        return info

    def set(self, file_path: Path, mtime_ns: int, info: TechnicalInfo) -> None:
        self._cache.set(str(file_path), (mtime_ns, info))

    def clear(self) -> None:
        """Supprime toutes les entrees du cache."""
        self._cache.clear()

    def close(self) -> None:
        """Ferme la connexion au cache (a appeler a la fin)."""
        self._cache.close()


def _to_int(value: Any) -> Optional[int]:
    """Premier entier d'une valeur mediainfo ("8 / 6" -> 8), ou None."""
    if value is None:
        return None
    if isinstance(value, int):
        return value
    match = re.search(r"\d+", str(value))
    return int(match.group()) if match else None


def _language_code(value: Optional[str]) -> Optional[str]:
    """Ramene "fr", "fre", "French"... a "fr" (idem "en") ; autres inchanges."""
    if not value:
        return None
    lowered = value.lower()
    if lowered.startswith("fr"):
        return "fr"
    if lowered.startswith("en"):
        return "en"
    return lowered


class MediaInfoProbe(ITechnicalProbe):
    """
    Sonde technique utilisant pymediainfo.

    La piste video principale fournit resolution, codec, profondeur et HDR ;
    la premiere piste audio fournit codec et canaux ; toutes les pistes
    audio et texte contribuent aux langues.
    """

    # Seuils de largeur (pixels) vers la classe de resolution
    WIDTH_CLASSES: tuple[tuple[int, str], ...] = (
        (3800, "2160p"),
        (2500, "1440p"),
        (1900, "1080p"),
        (1200, "720p"),
    )

    # Seuils de hauteur, utilises si la largeur est absente
    HEIGHT_CLASSES: tuple[tuple[int, str], ...] = (
        (2160, "2160p"),
        (1440, "1440p"),
        (1080, "1080p"),
        (720, "720p"),
    )

    # Premier motif contenu dans le format -> codec video canonique
    VIDEO_CODEC_MAPPING: tuple[tuple[tuple[str, ...], str], ...] = (
        (("x265", "hevc", "h265", "h.265"), "x265"),
        (("x264", "avc", "h264", "h.264"), "x264"),
    )

    # Ordre significatif : E-AC-3 avant AC-3
    AUDIO_CODEC_MAPPING: tuple[tuple[tuple[str, ...], str], ...] = (
        (("e-ac-3", "eac3", "ddp", "dolby digital plus"), "EAC3"),
        (("ac-3", "ac3", "dolby digital"), "AC3"),
        (("dts",), "DTS"),
        (("aac",), "AAC"),
        (("mpeg",), "MPEG"),
    )

    CHANNEL_LAYOUTS: dict[int, str] = {
        8: "7.1",
        7: "6.1",
        6: "5.1",
        2: "2.0",
    }

    def __init__(self, cache: Optional[ProbeCache] = None) -> None:
        """
        Args:
            cache: Cache disque optionnel (desactive si None)
        """
        self._cache = cache

    def probe(self, file_path: Path) -> TechnicalInfo:
        """
        Sonde un fichier video.

        Args:
            file_path: Chemin complet vers le fichier video

        Returns:
            TechnicalInfo extrait, vide si le fichier est absent ou illisible
        """
        try:
            mtime_ns = file_path.stat().st_mtime_ns
        except OSError:
            logger.warning(f"Fichier introuvable pour la sonde : {file_path}")
            return TechnicalInfo()

        if self._cache is not None:
            cached = self._cache.get(file_path, mtime_ns)
            if cached is not None:
                logger.debug(f"Sonde en cache : {file_path}")
                return cached

        try:
            media_info = PyMediaInfo.parse(str(file_path))
        except (OSError, RuntimeError, ValueError) as e:
            logger.warning(f"Echec mediainfo pour {file_path}: {e}")
            return TechnicalInfo()

        info = self.from_tracks(media_info.tracks)
        logger.info(
            f"Sonde {file_path.name}",
            res=info.resolution,
            vcodec=info.video_codec,
            acodec=info.audio_codec,
            ach=info.audio_channels,
            alangs=sorted(info.audio_languages),
            hdr=info.hdr,
            dv=info.dv,
        )

        if self._cache is not None:
            self._cache.set(file_path, mtime_ns, info)
        return info

    def text_report(self, file_path: Path) -> Optional[str]:
        """
        Produit le rapport textuel mediainfo du fichier.

        Returns:
            Le rapport, ou None si le fichier est absent ou illisible
        """
        if not file_path.exists():
            return None
        try:
            report = PyMediaInfo.parse(str(file_path), output="text")
        except (OSError, RuntimeError, ValueError) as e:
            logger.warning(f"Echec du rapport mediainfo pour {file_path}: {e}")
            return None
        return report or None

    def from_tracks(self, tracks: list) -> TechnicalInfo:
        """
        Convertit les pistes pymediainfo en TechnicalInfo.

        Args:
            tracks: Pistes pymediainfo (attributs track_type, width, format...)

        Returns:
            TechnicalInfo agrege
        """
        video_tracks = [track for track in tracks if track.track_type == "Video"]
        audio_tracks = [track for track in tracks if track.track_type == "Audio"]
        text_tracks = [track for track in tracks if track.track_type == "Text"]

        fields: dict[str, Any] = {}

        if video_tracks:
            video = video_tracks[0]
            fields["resolution"] = self._resolution(video)
            if video.format:
                fields["video_codec"] = self._map(self.VIDEO_CODEC_MAPPING, video.format)
            bit_depth = _to_int(getattr(video, "bit_depth", None))
            if bit_depth is not None and bit_depth >= 10:
                fields["bit_depth"] = TEN_BIT
            hdr, dv = self._hdr_flags(video)
            fields["hdr"] = hdr
            fields["dv"] = dv

        if audio_tracks:
            main = audio_tracks[0]
            if main.format:
                fields["audio_codec"] = self._map(self.AUDIO_CODEC_MAPPING, main.format)
            fields["audio_channels"] = self._channels(main)

        fields["audio_languages"] = frozenset(
            code
            for code in (_language_code(track.language) for track in audio_tracks)
            if code
        )
        fields["subtitle_languages"] = frozenset(
            code
            for code in (_language_code(track.language) for track in text_tracks)
            if code
        )
        fields["has_vfi"] = any(
            "VFI" in (getattr(track, "title", None) or "").upper()
            for track in audio_tracks
        )

        general = next((track for track in tracks if track.track_type == "General"), None)
        if general is not None and general.format:
            fields["container"] = general.format

        return TechnicalInfo(**fields)

    def _resolution(self, video: Any) -> Optional[str]:
        width = _to_int(video.width)
        if width is not None:
            for threshold, label in self.WIDTH_CLASSES:
                if width >= threshold:
                    return label
            return "480p"

        height = _to_int(video.height)
        if height is not None:
            for threshold, label in self.HEIGHT_CLASSES:
                if height >= threshold:
                    return label
            return "480p"
        return None

    @staticmethod
    def _map(mapping: tuple[tuple[tuple[str, ...], str], ...], raw: str) -> str:
        lowered = raw.lower()
        for needles, canonical in mapping:
            if any(needle in lowered for needle in needles):
                return canonical
        return raw

    @staticmethod
    def _hdr_flags(video: Any) -> tuple[bool, bool]:
        hdr = dv = False
        hdr_format = (getattr(video, "hdr_format", None) or "").lower()
        if "hdr" in hdr_format:
            hdr = True
        if "dolby vision" in hdr_format:
            hdr = dv = True
        transfer = (getattr(video, "transfer_characteristics", None) or "").lower()
        if "pq" in transfer or "hlg" in transfer:
            hdr = True
        return hdr, dv

    def _channels(self, audio: Any) -> Optional[str]:
        raw = getattr(audio, "channel_s", None)
        if raw is None:
            raw = getattr(audio, "channel_s__original", None)
        count = _to_int(raw)
        if count is not None and count in self.CHANNEL_LAYOUTS:
            return self.CHANNEL_LAYOUTS[count]
        if raw is not None and "5.1" in str(raw):
            return "5.1"
        return None
