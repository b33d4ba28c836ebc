"""
Construction deterministe des noms de release.

Le nom est toujours reconstruit depuis les indices du gestionnaire
(Radarr/Sonarr) et la sonde technique, consideres comme la verite terrain.
Un nom existant n'est jamais cru pour les champs types : il n'est exploite
que pour recuperer des tags descriptifs (IMAX, Extended, Repack...).

Ordre fixe des segments, chacun present seulement s'il est renseigne :
    titre . annee . tag d'episode . tag de langue . resolution . source .
    extras (tries) . codec audio . canaux . codec video [-GROUPE]

Le constructeur est total : l'absence d'un champ omet le segment, et des
entrees entierement vides peuvent legitimement donner une chaine vide.
"""

import unicodedata
from typing import Optional

from ghostseed.core.value_objects.hints import EpisodeHints, MovieHints, PackHints
from ghostseed.core.value_objects.scene import (
    DecisionReason,
    SceneDecision,
    SceneNameParts,
    ValidationResult,
)
from ghostseed.core.value_objects.technical_info import TechnicalInfo
from ghostseed.services.naming.tokenizer import split_tokens, to_scene_tokens
from ghostseed.services.naming.vocabulary import (
    DEFAULT_VOCABULARY,
    SANITIZE_BLACKLIST,
    NamingVocabulary,
    first_match,
)


def canonicalize_video_codec(
    codec: str, vocabulary: NamingVocabulary = DEFAULT_VOCABULARY
) -> str:
    """Contenant "265" -> x265, contenant "264" -> x264, sinon inchange."""
    return first_match(vocabulary.video_codec_rules, codec) or codec


def language_tag(
    tech: TechnicalInfo, vocabulary: NamingVocabulary = DEFAULT_VOCABULARY
) -> Optional[str]:
    """
    Tag de langue deduit des langues audio.

    Regles (politique par defaut) :
    - plusieurs langues -> MULTi.VF
    - seulement "fr" -> VF
    - seulement "en" -> VOSTFR (anglais sous-titre francais suppose)
    - autre langue unique, ou aucune -> pas de tag
    """
    languages = tech.audio_languages
    if not languages:
        return None
    if len(languages) > 1:
        return vocabulary.multi_language_tag
    (only,) = languages
    return vocabulary.language_tags.get(only)


def infer_resolution(
    quality: Optional[str], vocabulary: NamingVocabulary = DEFAULT_VOCABULARY
) -> Optional[str]:
    """Resolution candidate deduite de la chaine de qualite."""
    return first_match(vocabulary.resolution_rules, quality)


def infer_source(
    quality: Optional[str], vocabulary: NamingVocabulary = DEFAULT_VOCABULARY
) -> Optional[str]:
    """Source candidate (WEB, BluRay) deduite de la chaine de qualite."""
    return first_match(vocabulary.source_rules, quality)


def apply_resolution_fallback(
    tech: TechnicalInfo,
    quality: Optional[str],
    vocabulary: NamingVocabulary = DEFAULT_VOCABULARY,
) -> TechnicalInfo:
    """
    Complete la resolution depuis la qualite quand la sonde n'en a pas.

    Utilise une cascade stricte (jetons "1080p", "4k"...) plutot que la
    deduction large du constructeur.
    """
    if tech.resolution is not None:
        return tech
    fallback = first_match(vocabulary.fallback_resolution_rules, quality)
    if fallback is None:
        return tech
    return tech.with_resolution(fallback)


def sanitize_release_group(group: Optional[str]) -> Optional[str]:
    """Ne garde que les caracteres alphanumeriques ASCII ; None si vide."""
    if not group:
        return None
    cleaned = "".join(char for char in group if char.isascii() and char.isalnum())
    return cleaned or None


def unanimous_release_group(groups: list[Optional[str]]) -> Optional[str]:
    """Groupe commun a tous les fichiers d'un pack, sinon None."""
    distinct = {group for group in groups if group}
    if len(distinct) == 1:
        return distinct.pop()
    return None


def salvage_special_tags(
    original: Optional[str], vocabulary: NamingVocabulary = DEFAULT_VOCABULARY
) -> set[str]:
    """Tags descriptifs recuperes d'un nom existant (insensible a la casse)."""
    if not original:
        return set()
    lowered = original.lower()
    return {rule.result for rule in vocabulary.salvage_rules if rule.matches(lowered)}


def episode_tag(hints: EpisodeHints) -> Optional[str]:
    """
    Tag d'episode : E### absolus (anime) sinon S##E##[E##...].

    La numerotation absolue est prioritaire. Les numeros sont tries
    et dedupliques.
    """
    if hints.absolute_episode_numbers:
        numbers = sorted(set(hints.absolute_episode_numbers))
        return "".join(f"E{number:03d}" for number in numbers)

    if hints.season_number is None or not hints.episode_numbers:
        return None

    episodes = sorted(set(hints.episode_numbers))
    return f"S{hints.season_number:02d}" + "".join(f"E{number:02d}" for number in episodes)


def _fill_common(
    parts: SceneNameParts,
    quality: Optional[str],
    release_group: Optional[str],
    tech: TechnicalInfo,
    vocabulary: NamingVocabulary,
) -> None:
    """Champs communs aux trois formes : langue, qualite, technique, groupe."""
    parts.language_tag = language_tag(tech, vocabulary)

    inferred_resolution = infer_resolution(quality, vocabulary)
    parts.resolution = tech.resolution or inferred_resolution
    parts.source = infer_source(quality, vocabulary)
    if (
        tech.resolution is not None
        and inferred_resolution is not None
        and tech.resolution != inferred_resolution
    ):
        # Qualite incoherente avec la sonde : on ne revendique pas de source
        parts.source = None

    parts.hdr = tech.hdr
    parts.dv = tech.dv
    parts.bit_depth = tech.bit_depth
    parts.audio_codec = tech.audio_codec
    parts.audio_channels = tech.audio_channels
    if tech.video_codec:
        parts.video_codec = canonicalize_video_codec(tech.video_codec, vocabulary)

    if tech.has_vfi:
        parts.extra_tags.add("VFI")

    parts.release_group = sanitize_release_group(release_group)


def build_movie_parts(
    hints: MovieHints,
    tech: TechnicalInfo,
    vocabulary: NamingVocabulary = DEFAULT_VOCABULARY,
) -> SceneNameParts:
    parts = SceneNameParts(title_tokens=split_tokens(hints.title), year=hints.year)
    _fill_common(parts, hints.quality, hints.release_group, tech, vocabulary)
    return parts


def build_episode_parts(
    hints: EpisodeHints,
    tech: TechnicalInfo,
    vocabulary: NamingVocabulary = DEFAULT_VOCABULARY,
) -> SceneNameParts:
    parts = SceneNameParts(
        title_tokens=split_tokens(hints.series_title),
        episode_tag=episode_tag(hints),
    )
    _fill_common(parts, hints.quality, hints.release_group, tech, vocabulary)
    return parts


def build_pack_parts(
    hints: PackHints,
    tech: TechnicalInfo,
    vocabulary: NamingVocabulary = DEFAULT_VOCABULARY,
) -> SceneNameParts:
    parts = SceneNameParts(
        title_tokens=split_tokens(hints.title),
        year=hints.year,
        episode_tag=to_scene_tokens(hints.pack_tag) or None,
    )
    _fill_common(parts, hints.quality, hints.release_group, tech, vocabulary)
    return parts


def _extras(parts: SceneNameParts) -> list[str]:
    """HDR, DV, profondeur, langues puis tags libres, dedupliques et tries."""
    extras: set[str] = set()
    if parts.hdr:
        extras.add("HDR")
    if parts.dv:
        extras.add("DV")
    if parts.bit_depth:
        extras.add(parts.bit_depth)
    extras.update(parts.languages)

    for tag in parts.extra_tags:
        upper = tag.upper()
        if (upper == "HDR" and parts.hdr) or (upper == "DV" and parts.dv):
            continue
        if parts.bit_depth and "BIT" in upper:
            continue
        extras.add(tag)

    return sorted(extras)


def assemble(parts: SceneNameParts) -> str:
    """Serialise les parties dans l'ordre fixe de la grammaire."""
    segments: list[str] = []

    if parts.title_tokens:
        segments.append(".".join(parts.title_tokens))
    if parts.year is not None:
        segments.append(str(parts.year))
    if parts.episode_tag:
        segments.append(parts.episode_tag)
    if parts.language_tag:
        segments.append(parts.language_tag)
    if parts.resolution:
        segments.append(parts.resolution)
    if parts.source:
        segments.append(parts.source)

    segments.extend(_extras(parts))

    if parts.audio_codec:
        segments.append(parts.audio_codec)
    if parts.audio_channels:
        segments.append(parts.audio_channels)
    # Le codec video est toujours le dernier segment
    if parts.video_codec:
        segments.append(parts.video_codec)

    name = ".".join(segments)
    if parts.release_group:
        name = f"{name}-{parts.release_group}"
    return name


def sanitize_scene_name(name: str) -> str:
    """Retire les caracteres de controle et les symboles decoratifs."""
    return "".join(
        char
        for char in name
        if char not in SANITIZE_BLACKLIST and unicodedata.category(char) != "Cc"
    )


def _decide(
    parts: SceneNameParts,
    original: Optional[str],
    validation: Optional[ValidationResult],
    vocabulary: NamingVocabulary,
) -> SceneDecision:
    parts.extra_tags.update(salvage_special_tags(original, vocabulary))
    chosen = sanitize_scene_name(assemble(parts))
    issues = validation.issues if validation is not None else ()
    return SceneDecision(chosen=chosen, reason=DecisionReason.REBUILT, issues=issues)


def propose_movie_scene_name(
    original: Optional[str],
    hints: MovieHints,
    tech: TechnicalInfo,
    validation: Optional[ValidationResult] = None,
    vocabulary: NamingVocabulary = DEFAULT_VOCABULARY,
) -> SceneDecision:
    """
    Propose le nom de release d'un film.

    Args:
        original: Nom existant (utilise seulement pour les tags recuperes).
        hints: Indices Radarr.
        tech: Informations techniques sondees.
        validation: Validation prealable du nom existant (informative).
        vocabulary: Grammaire a utiliser.

    Returns:
        SceneDecision REBUILT portant les problemes de la validation.
    """
    parts = build_movie_parts(hints, tech, vocabulary)
    return _decide(parts, original, validation, vocabulary)


def propose_episode_scene_name(
    original: Optional[str],
    hints: EpisodeHints,
    tech: TechnicalInfo,
    validation: Optional[ValidationResult] = None,
    vocabulary: NamingVocabulary = DEFAULT_VOCABULARY,
) -> SceneDecision:
    """Propose le nom de release d'un fichier d'episode (sans annee, avec tag)."""
    parts = build_episode_parts(hints, tech, vocabulary)
    return _decide(parts, original, validation, vocabulary)


def propose_pack_scene_name(
    original: Optional[str],
    hints: PackHints,
    tech: TechnicalInfo,
    validation: Optional[ValidationResult] = None,
    vocabulary: NamingVocabulary = DEFAULT_VOCABULARY,
) -> SceneDecision:
    """Propose le nom de release d'un pack (saison ou integrale)."""
    parts = build_pack_parts(hints, tech, vocabulary)
    return _decide(parts, original, validation, vocabulary)
