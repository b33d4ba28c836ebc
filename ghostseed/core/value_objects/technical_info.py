"""
Objet valeur pour les informations techniques d'un fichier video.

TechnicalInfo est produit une fois par fichier par la sonde mediainfo et
reste immutable pendant toute la synthese d'un nom de release.
Il fait autorite sur toute deduction tiree de la chaine de qualite
fournie par Radarr/Sonarr.
"""

from dataclasses import dataclass, replace
from typing import Optional

# Classes de resolution reconnues, de la plus basse a la plus haute
RESOLUTIONS: tuple[str, ...] = ("480p", "576p", "720p", "1080p", "1440p", "2160p")

# Dispositions de canaux audio reconnues
AUDIO_CHANNEL_LAYOUTS: tuple[str, ...] = ("2.0", "5.1", "6.1", "7.1")

# Seule profondeur de couleur enregistree (8 bits = absence)
TEN_BIT = "10bit"


@dataclass(frozen=True)
class TechnicalInfo:
    """
    Caracteristiques techniques sondees d'un fichier media.

    Attributs :
        resolution : Classe de resolution (480p ... 2160p)
        video_codec : Jeton du codec video (ex: "x265")
        bit_depth : "10bit" ou None (8 bits n'est jamais enregistre)
        hdr : Presence de HDR (HDR10, HLG, PQ...)
        dv : Presence de Dolby Vision
        audio_codec : Jeton du codec audio (ex: "EAC3")
        audio_channels : Disposition des canaux (2.0, 5.1, 6.1, 7.1)
        audio_languages : Codes de langue des pistes audio
        subtitle_languages : Codes de langue des sous-titres
        has_vfi : Presence d'une piste de doublage alternative (VFI)
        container : Conteneur optionnel (ex: "Matroska")
    """

    resolution: Optional[str] = None
    video_codec: Optional[str] = None
    bit_depth: Optional[str] = None
    hdr: bool = False
    dv: bool = False
    audio_codec: Optional[str] = None
    audio_channels: Optional[str] = None
    audio_languages: frozenset[str] = frozenset()
    subtitle_languages: frozenset[str] = frozenset()
    has_vfi: bool = False
    container: Optional[str] = None

    def with_resolution(self, resolution: Optional[str]) -> "TechnicalInfo":
        """Retourne une copie avec la resolution donnee."""
        return replace(self, resolution=resolution)

    @property
    def is_empty(self) -> bool:
        """Vrai si la sonde n'a rien retourne d'exploitable."""
        return self == TechnicalInfo()
