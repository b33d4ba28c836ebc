"""
Objets valeur du nommage de release (scene name).

Contient la representation intermediaire assemblee par le constructeur
(SceneNameParts), le resultat de validation et la decision finale.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Issue(Enum):
    """Problemes de grammaire detectes par le validateur.

    Valeurs:
        EMPTY: Chaine vide apres trim
        IS_UNKNOWN: Chaine egale a "unknown"
        MISSING_DOTS: Moins de deux separateurs "."
        MISSING_YEAR: Pas d'annee 19xx/20xx
        MISSING_RESOLUTION: Pas de resolution reconnue
        MISSING_SOURCE: Pas de source reconnue
        MISSING_VIDEO_CODEC: Pas de codec video reconnu
    """

    EMPTY = "empty"
    IS_UNKNOWN = "is_unknown"
    MISSING_DOTS = "missing_dots"
    MISSING_YEAR = "missing_year"
    MISSING_RESOLUTION = "missing_resolution"
    MISSING_SOURCE = "missing_source"
    MISSING_VIDEO_CODEC = "missing_video_codec"


@dataclass(frozen=True)
class ValidationResult:
    """Resultat d'une validation syntaxique : validite + problemes ordonnes."""

    valid: bool
    issues: tuple[Issue, ...] = ()


class DecisionReason(Enum):
    """Raison du choix du nom de release."""

    ACCEPTED_EXISTING = "accepted_existing"
    REBUILT = "rebuilt"


@dataclass(frozen=True)
class SceneDecision:
    """
    Sortie d'un appel de synthese.

    Attributs :
        chosen : Nom de release retenu
        reason : ACCEPTED_EXISTING ou REBUILT
        issues : Problemes ayant motive la reconstruction (informatif)
    """

    chosen: str
    reason: DecisionReason = DecisionReason.REBUILT
    issues: tuple[Issue, ...] = ()


@dataclass
class SceneNameParts:
    """
    Representation structuree d'un nom de release avant serialisation.

    Le constructeur remplit soit la forme film (annee), soit la forme
    serialisee (tag d'episode), jamais les deux pour un episode.
    Les packs peuvent porter l'annee de la serie en plus du tag de pack.
    """

    title_tokens: list[str] = field(default_factory=list)
    year: Optional[int] = None
    episode_tag: Optional[str] = None
    language_tag: Optional[str] = None
    resolution: Optional[str] = None
    source: Optional[str] = None
    video_codec: Optional[str] = None
    audio_codec: Optional[str] = None
    audio_channels: Optional[str] = None
    bit_depth: Optional[str] = None
    hdr: bool = False
    dv: bool = False
    languages: set[str] = field(default_factory=set)
    extra_tags: set[str] = field(default_factory=set)
    release_group: Optional[str] = None
