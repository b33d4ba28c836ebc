"""
Moteur de synthese des noms de release.

- tokenizer : texte libre -> jetons separes par des points
- vocabulary : grammaire immutable (tables de jetons, cascades, langues)
- parser : recuperation au mieux des champs d'un nom existant
- validator : controle syntaxique d'un nom
- builder : reconstruction deterministe depuis indices + sonde
- service : facade liee a un vocabulaire
"""

from ghostseed.services.naming.builder import (
    episode_tag,
    language_tag,
    propose_episode_scene_name,
    propose_movie_scene_name,
    propose_pack_scene_name,
)
from ghostseed.services.naming.parser import parse_scene_name
from ghostseed.services.naming.service import SceneNamingService
from ghostseed.services.naming.tokenizer import split_tokens, to_scene_tokens
from ghostseed.services.naming.validator import is_scene_name_valid, validate_scene_name
from ghostseed.services.naming.vocabulary import DEFAULT_VOCABULARY, NamingVocabulary

__all__ = [
    "DEFAULT_VOCABULARY",
    "NamingVocabulary",
    "SceneNamingService",
    "episode_tag",
    "is_scene_name_valid",
    "language_tag",
    "parse_scene_name",
    "propose_episode_scene_name",
    "propose_movie_scene_name",
    "propose_pack_scene_name",
    "split_tokens",
    "to_scene_tokens",
    "validate_scene_name",
]
