"""
Extraction au mieux des champs de grammaire depuis un nom existant.

Le parser ne sert qu'a la recuperation (salvage) : ses champs types ne sont
jamais preferes aux donnees fraiches de la sonde et du gestionnaire.
Chaque champ est extrait independamment, sans coherence mutuelle exigee.
Le parser n'echoue jamais : un motif absent laisse le champ vide.
"""

from typing import Optional

from ghostseed.core.value_objects.scene import SceneNameParts
from ghostseed.services.naming.vocabulary import (
    DEFAULT_VOCABULARY,
    EXTRA_TOKEN_SEPARATORS,
    NamingVocabulary,
)


def _is_all_upper(token: str) -> bool:
    """Vrai si le jeton n'a aucune minuscule ASCII et au moins une majuscule."""
    has_upper = False
    for char in token:
        if "a" <= char <= "z":
            return False
        if "A" <= char <= "Z":
            has_upper = True
    return has_upper


def _extract_extras(text: str, vocabulary: NamingVocabulary) -> set[str]:
    """
    Recupere les jetons descriptifs non classes.

    Un jeton est conserve s'il est un marqueur libre connu (IMAX, VFF...)
    ou ecrit tout en majuscules, sauf s'il est deja consomme par un champ
    type ou figure dans la stoplist.
    """
    extras: set[str] = set()
    for token in EXTRA_TOKEN_SEPARATORS.split(text):
        token = token.strip()
        if not token or token in vocabulary.extra_stoplist:
            continue
        if any(matcher.matches(token) for matcher in vocabulary.typed_matchers):
            continue

        is_known = (
            token.lower() in vocabulary.extra_markers
            or vocabulary.language_marker.matches(token)
        )
        if is_known or _is_all_upper(token):
            extras.add(token)
    return extras


def _extract_title_tokens(text: str, vocabulary: NamingVocabulary) -> list[str]:
    """Jetons de titre : ce qui precede la premiere annee, nettoye."""
    match = vocabulary.year.pattern.search(text)
    title_slice = text[: match.start()] if match else text

    tokens: list[str] = []
    for raw in title_slice.replace(" ", ".").split("."):
        cleaned = _strip_non_alnum(raw)
        if cleaned:
            tokens.append(cleaned)
    return tokens


def _strip_non_alnum(token: str) -> str:
    start, end = 0, len(token)
    while start < end and not token[start].isalnum():
        start += 1
    while end > start and not token[end - 1].isalnum():
        end -= 1
    return token[start:end]


def _parse_year(text: str, vocabulary: NamingVocabulary) -> Optional[int]:
    found = vocabulary.year.find(text)
    return int(found) if found else None


def parse_scene_name(
    text: str, vocabulary: NamingVocabulary = DEFAULT_VOCABULARY
) -> SceneNameParts:
    """
    Parse un nom (bien forme ou texte libre) en SceneNameParts.

    Args:
        text: Nom existant a analyser.
        vocabulary: Grammaire a utiliser.

    Returns:
        SceneNameParts avec les champs trouves ; les autres restent vides.
    """
    stripped = text.strip()
    parts = SceneNameParts()

    group = vocabulary.release_group.pattern.search(stripped)
    if group:
        parts.release_group = group.group(1)

    parts.year = _parse_year(stripped, vocabulary)
    parts.resolution = vocabulary.resolution.find(stripped)
    parts.source = vocabulary.source.find(stripped)
    parts.video_codec = vocabulary.video_codec.find(stripped)
    parts.audio_codec = vocabulary.audio_codec.find(stripped)
    parts.audio_channels = vocabulary.audio_channels.find(stripped)
    parts.bit_depth = vocabulary.bit_depth.find(stripped)
    parts.hdr = vocabulary.hdr.matches(stripped)
    parts.dv = vocabulary.dv.matches(stripped)

    parts.extra_tags = _extract_extras(stripped, vocabulary)
    parts.title_tokens = _extract_title_tokens(stripped, vocabulary)

    return parts
