"""
Validation syntaxique d'un nom de release.

Controle purement syntaxique : aucune donnee technique ni metadonnee
n'est consultee, l'entree n'est jamais modifiee.
"""

from ghostseed.core.value_objects.scene import Issue, ValidationResult
from ghostseed.services.naming.vocabulary import DEFAULT_VOCABULARY, NamingVocabulary

# Nombre minimal de "." pour considerer un nom formate selon la grammaire
MIN_DOT_COUNT = 2


def validate_scene_name(
    name: str, vocabulary: NamingVocabulary = DEFAULT_VOCABULARY
) -> ValidationResult:
    """
    Valide un nom contre les champs requis de la grammaire.

    Problemes accumules dans l'ordre : IS_UNKNOWN, MISSING_DOTS,
    MISSING_YEAR, MISSING_RESOLUTION, MISSING_SOURCE, MISSING_VIDEO_CODEC.
    Une chaine vide (apres trim) ne produit que EMPTY.

    Args:
        name: Nom a valider.
        vocabulary: Grammaire a utiliser.

    Returns:
        ValidationResult, valide si et seulement si aucun probleme.
    """
    trimmed = name.strip()
    if not trimmed:
        return ValidationResult(valid=False, issues=(Issue.EMPTY,))

    issues: list[Issue] = []
    if trimmed.lower() == "unknown":
        issues.append(Issue.IS_UNKNOWN)
    if trimmed.count(".") < MIN_DOT_COUNT:
        issues.append(Issue.MISSING_DOTS)
    if not vocabulary.year.matches(trimmed):
        issues.append(Issue.MISSING_YEAR)
    if not vocabulary.resolution.matches(trimmed):
        issues.append(Issue.MISSING_RESOLUTION)
    if not vocabulary.source.matches(trimmed):
        issues.append(Issue.MISSING_SOURCE)
    if not vocabulary.video_codec.matches(trimmed):
        issues.append(Issue.MISSING_VIDEO_CODEC)

    return ValidationResult(valid=not issues, issues=tuple(issues))


def is_scene_name_valid(
    name: str, vocabulary: NamingVocabulary = DEFAULT_VOCABULARY
) -> bool:
    """Raccourci : True si le nom ne presente aucun probleme."""
    return validate_scene_name(name, vocabulary).valid
