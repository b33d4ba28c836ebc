"""
Normalisation d'un texte libre en sequence de jetons separes par des points.

Regles :
- Normalisation Unicode NFC (les lettres composees comme "À" sont stables)
- Lettres et chiffres de toute ecriture conserves, ainsi que les signes
  combinants qui les suivent (voyelles thai, matras indiennes)
- Symboles decoratifs (© ® ™ ℗) et caracteres de controle supprimes
- Tout autre caractere (espaces, ponctuation) devient un separateur,
  les separateurs consecutifs fusionnent en un seul "."
- Points de tete et de fin retires

La fonction est totale, deterministe et idempotente.
"""

import unicodedata

from ghostseed.services.naming.vocabulary import DROPPED_SYMBOLS

# Voyelles et signes combinants (thai, devanagari...) qui font partie du mot
COMBINING_MARK_CATEGORIES = frozenset({"Mn", "Mc"})


def _is_attached_mark(char: str, out: list[str]) -> bool:
    """Signe combinant rattache a un caractere deja conserve."""
    return (
        bool(out)
        and out[-1] != "."
        and unicodedata.category(char) in COMBINING_MARK_CATEGORIES
    )


def to_scene_tokens(text: str) -> str:
    """
    Convertit un texte en jetons separes par des points.

    Args:
        text: Texte arbitraire (titre, marqueur de pack...).

    Returns:
        Jetons joints par "." (chaine vide si aucun jeton).

    Example:
        >>> to_scene_tokens("À bout de souffle")
        'À.bout.de.souffle'
    """
    normalized = unicodedata.normalize("NFC", text)

    out: list[str] = []
    last_dot = False
    for char in normalized:
        if char.isalnum() or _is_attached_mark(char, out):
            out.append(char)
            last_dot = False
            continue

        if char in DROPPED_SYMBOLS or unicodedata.category(char) == "Cc":
            continue

        if not last_dot:
            out.append(".")
            last_dot = True

    return "".join(out).strip(".")


def split_tokens(text: str) -> list[str]:
    """Normalise puis decoupe en liste de jetons (vide si aucun)."""
    tokens = to_scene_tokens(text)
    if not tokens:
        return []
    return tokens.split(".")
