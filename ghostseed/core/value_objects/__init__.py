"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- TechnicalInfo : Caracteristiques techniques sondees d'un fichier
- MovieHints, EpisodeHints, PackHints : Indices de nommage
- SceneNameParts : Nom de release structure avant serialisation
- Issue, ValidationResult : Resultat du validateur
- DecisionReason, SceneDecision : Resultat d'un appel de synthese
- ReleaseKind, PlannedRelease : Unite de release emise par le pipeline
"""

from ghostseed.core.value_objects.hints import EpisodeHints, MovieHints, PackHints
from ghostseed.core.value_objects.release import PlannedRelease, ReleaseKind
from ghostseed.core.value_objects.scene import (
    DecisionReason,
    Issue,
    SceneDecision,
    SceneNameParts,
    ValidationResult,
)
from ghostseed.core.value_objects.technical_info import (
    AUDIO_CHANNEL_LAYOUTS,
    RESOLUTIONS,
    TEN_BIT,
    TechnicalInfo,
)

__all__ = [
    "AUDIO_CHANNEL_LAYOUTS",
    "RESOLUTIONS",
    "TEN_BIT",
    "TechnicalInfo",
    "MovieHints",
    "EpisodeHints",
    "PackHints",
    "SceneNameParts",
    "Issue",
    "ValidationResult",
    "DecisionReason",
    "SceneDecision",
    "PlannedRelease",
    "ReleaseKind",
]
