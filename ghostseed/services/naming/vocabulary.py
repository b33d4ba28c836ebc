"""
Vocabulaire de la grammaire des noms de release.

Toutes les tables de reconnaissance (jeton -> categorie), les cascades
de deduction ordonnees et la politique de tags de langue sont regroupees
dans un objet immutable, NamingVocabulary, construit une fois au demarrage
et passe par reference au parser, au validateur et au constructeur.

Les cascades "premiere regle gagnante" sont des listes ordonnees de
KeywordRule : l'ordre fait partie de la grammaire.
"""

import re
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass(frozen=True)
class TokenMatcher:
    """
    Reconnaisseur nomme d'un champ type de la grammaire.

    Attributs :
        name : Nom du champ (ex: "resolution")
        pattern : Expression reguliere compilee
    """

    name: str
    pattern: re.Pattern

    def find(self, text: str) -> Optional[str]:
        """Retourne la premiere occurrence, ou None."""
        match = self.pattern.search(text)
        return match.group(0) if match else None

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


@dataclass(frozen=True)
class KeywordRule:
    """
    Regle (predicat, resultat) evaluee sur un texte en minuscules.

    Le predicat est vrai si au moins une sous-chaine de any_of est presente
    (ou any_of est vide) ET toutes les sous-chaines de all_of sont presentes.
    """

    result: str
    any_of: tuple[str, ...] = ()
    all_of: tuple[str, ...] = ()

    def matches(self, lowered: str) -> bool:
        if self.any_of and not any(part in lowered for part in self.any_of):
            return False
        return all(part in lowered for part in self.all_of)


def first_match(rules: tuple[KeywordRule, ...], text: Optional[str]) -> Optional[str]:
    """Evalue une cascade ordonnee et retourne le resultat de la premiere regle vraie."""
    if not text:
        return None
    lowered = text.lower()
    for rule in rules:
        if rule.matches(lowered):
            return rule.result
    return None


def _ci(pattern: str) -> re.Pattern:
    return re.compile(pattern, re.IGNORECASE)


# Jetons types reconnus dans un nom existant (parser et validateur)
YEAR = TokenMatcher("year", re.compile(r"(?<!\d)(?:19|20)\d{2}(?!\d)"))
RESOLUTION = TokenMatcher(
    "resolution", _ci(r"\b(?:480p|576p|720p|1080p|1440p|2160p|4k|8k)\b")
)
SOURCE = TokenMatcher(
    "source",
    _ci(
        r"\b(?:AMZN(?:\.WEB(?:-?DL)?)?|WEB(?:-?DL|Rip)?|Blu[- ]?Ray|BRRip|BDRip"
        r"|WEBRip|HDLight|HDLigh|mHD)\b"
    ),
)
VIDEO_CODEC = TokenMatcher("video_codec", _ci(r"\b(?:x265|x264|h\.?265|h\.?264|hevc|avc)\b"))
AUDIO_CODEC = TokenMatcher("audio_codec", _ci(r"\b(?:DDP|EAC3|AC3|DTS(?:-HD)?|TrueHD|AAC)\b"))
AUDIO_CHANNELS = TokenMatcher("audio_channels", _ci(r"\b(?:7\.1|5\.1|6CH|2\.0|2CH)\b"))
BIT_DEPTH = TokenMatcher("bit_depth", _ci(r"\b(?:10bit|8bit)\b"))
HDR = TokenMatcher("hdr", _ci(r"\b(?:HDR10\+?|HDR|HLG)\b"))
DOLBY_VISION = TokenMatcher("dv", _ci(r"\b(?:DV|Dolby[ .]?Vision)\b"))
LANGUAGE_MARKER = TokenMatcher(
    "language",
    _ci(r"\b(?:MULTI|FRENCH|TRUEFRENCH|VFF|VFQ|VFI|VOA|VF2|FR2|FR|EN)\b"),
)
RELEASE_GROUP = TokenMatcher("release_group", re.compile(r"-([A-Za-z0-9._⚡]+)$"))

# Separateurs utilises pour decouper un nom en jetons candidats aux extras
EXTRA_TOKEN_SEPARATORS = re.compile(r"[.\s_()\[\]-]+")

# Symboles decoratifs retires par le tokenizer et la passe finale
DROPPED_SYMBOLS: frozenset[str] = frozenset({"©", "®", "™", "℗"})
SANITIZE_BLACKLIST: frozenset[str] = DROPPED_SYMBOLS | frozenset(
    {"§", "¶", "•", "†", "‡", "°", "º", "ª"}
)


@dataclass(frozen=True)
class NamingVocabulary:
    """
    Configuration immutable de la grammaire.

    Attributs :
        typed_matchers : Reconnaisseurs des champs types, evalues independamment
        extra_markers : Marqueurs libres toujours conserves comme extras (minuscules)
        extra_stoplist : Jetons jamais conserves comme extras
        resolution_rules : Cascade qualite -> resolution du constructeur
        source_rules : Cascade qualite -> source du constructeur
        fallback_resolution_rules : Cascade stricte utilisee quand la sonde n'a
            pas de resolution
        video_codec_rules : Canonicalisation du codec video
        salvage_rules : Tags descriptifs recuperes depuis un nom existant
        multi_language_tag : Tag si plusieurs langues audio
        language_tags : Tag pour une langue audio unique, par code
    """

    year: TokenMatcher = YEAR
    resolution: TokenMatcher = RESOLUTION
    source: TokenMatcher = SOURCE
    video_codec: TokenMatcher = VIDEO_CODEC
    audio_codec: TokenMatcher = AUDIO_CODEC
    audio_channels: TokenMatcher = AUDIO_CHANNELS
    bit_depth: TokenMatcher = BIT_DEPTH
    hdr: TokenMatcher = HDR
    dv: TokenMatcher = DOLBY_VISION
    language_marker: TokenMatcher = LANGUAGE_MARKER
    release_group: TokenMatcher = RELEASE_GROUP

    extra_markers: frozenset[str] = frozenset(
        {"imax", "4klight", "hdlight", "vff", "vfq", "vfi", "multi", "french", "atmos"}
    )
    extra_stoplist: frozenset[str] = frozenset({"WEB", "Rip"})

    resolution_rules: tuple[KeywordRule, ...] = (
        KeywordRule("2160p", any_of=("2160", "uhd", "4k")),
        KeywordRule("1440p", any_of=("1440",)),
        KeywordRule("1080p", any_of=("1080", "fhd")),
        KeywordRule("720p", any_of=("720", "hd")),
    )
    source_rules: tuple[KeywordRule, ...] = (
        KeywordRule("WEB", any_of=("web-dl", "webrip", "web")),
        KeywordRule("BluRay", any_of=("blu",)),
    )
    fallback_resolution_rules: tuple[KeywordRule, ...] = (
        KeywordRule("2160p", any_of=("2160p", "4k")),
        KeywordRule("1440p", any_of=("1440p",)),
        KeywordRule("1080p", any_of=("1080p",)),
        KeywordRule("720p", any_of=("720p",)),
    )
    video_codec_rules: tuple[KeywordRule, ...] = (
        KeywordRule("x265", any_of=("265",)),
        KeywordRule("x264", any_of=("264",)),
    )
    salvage_rules: tuple[KeywordRule, ...] = (
        KeywordRule("IMAX", any_of=("imax",)),
        KeywordRule("HDLight", any_of=("hdlight",)),
        KeywordRule("4KLight", any_of=("4klight", "4k light")),
        KeywordRule("Unrated", any_of=("unrated",)),
        KeywordRule("Extended", any_of=("extended",)),
        KeywordRule("Remastered", any_of=("remastered",)),
        KeywordRule("Directors.Cut", all_of=("director", "cut")),
        KeywordRule("Theatrical.Cut", any_of=("theatrical cut",)),
        KeywordRule("Proper", any_of=("proper",)),
        KeywordRule("Repack", any_of=("repack",)),
    )

    multi_language_tag: str = "MULTi.VF"
    language_tags: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({"fr": "VF", "en": "VOSTFR"})
    )

    @property
    def typed_matchers(self) -> tuple[TokenMatcher, ...]:
        """Reconnaisseurs dont un jeton n'est jamais un extra."""
        return (
            self.year,
            self.resolution,
            self.source,
            self.video_codec,
            self.audio_codec,
            self.audio_channels,
            self.bit_depth,
            self.hdr,
            self.dv,
        )

    def with_language_policy(
        self, multi_language_tag: str, language_tags: Mapping[str, str]
    ) -> "NamingVocabulary":
        """Retourne une copie avec une autre politique de tags de langue."""
        return replace(
            self,
            multi_language_tag=multi_language_tag,
            language_tags=MappingProxyType(
                {code.lower(): tag for code, tag in language_tags.items()}
            ),
        )


DEFAULT_VOCABULARY = NamingVocabulary()
