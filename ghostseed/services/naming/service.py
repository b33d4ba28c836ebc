"""
Service de nommage des releases.

Facade sans etat autour du parser, du validateur et du constructeur,
liee a un vocabulaire construit une fois au demarrage.
"""

from typing import Optional

from ghostseed.core.value_objects.hints import EpisodeHints, MovieHints, PackHints
from ghostseed.core.value_objects.scene import (
    SceneDecision,
    SceneNameParts,
    ValidationResult,
)
from ghostseed.core.value_objects.technical_info import TechnicalInfo
from ghostseed.services.naming import builder
from ghostseed.services.naming.parser import parse_scene_name
from ghostseed.services.naming.validator import validate_scene_name
from ghostseed.services.naming.vocabulary import DEFAULT_VOCABULARY, NamingVocabulary


class SceneNamingService:
    """
    Service de nommage des releases.

    Ce service est sans etat et peut etre utilise comme singleton.
    Voir les modules parser, validator et builder pour les details.
    """

    def __init__(self, vocabulary: NamingVocabulary = DEFAULT_VOCABULARY) -> None:
        self._vocabulary = vocabulary

    @property
    def vocabulary(self) -> NamingVocabulary:
        return self._vocabulary

    def parse(self, name: str) -> SceneNameParts:
        return parse_scene_name(name, self._vocabulary)

    def validate(self, name: str) -> ValidationResult:
        return validate_scene_name(name, self._vocabulary)

    def resolve_technical(
        self, tech: TechnicalInfo, quality: Optional[str]
    ) -> TechnicalInfo:
        """Complete la resolution sondee depuis la qualite si necessaire."""
        return builder.apply_resolution_fallback(tech, quality, self._vocabulary)

    def propose_movie(
        self,
        original: Optional[str],
        hints: MovieHints,
        tech: TechnicalInfo,
        validation: Optional[ValidationResult] = None,
    ) -> SceneDecision:
        return builder.propose_movie_scene_name(
            original, hints, tech, validation, self._vocabulary
        )

    def propose_episode(
        self,
        original: Optional[str],
        hints: EpisodeHints,
        tech: TechnicalInfo,
        validation: Optional[ValidationResult] = None,
    ) -> SceneDecision:
        return builder.propose_episode_scene_name(
            original, hints, tech, validation, self._vocabulary
        )

    def propose_pack(
        self,
        original: Optional[str],
        hints: PackHints,
        tech: TechnicalInfo,
    ) -> SceneDecision:
        return builder.propose_pack_scene_name(
            original, hints, tech, vocabulary=self._vocabulary
        )
