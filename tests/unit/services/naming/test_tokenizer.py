"""
Tests unitaires du tokenizer de noms de release.
"""

import pytest

from ghostseed.services.naming.tokenizer import split_tokens, to_scene_tokens


class TestToSceneTokens:
    """Tests pour to_scene_tokens."""

    def test_spaces_become_dots(self) -> None:
        assert to_scene_tokens("The Dark Knight") == "The.Dark.Knight"

    def test_punctuation_runs_collapse(self) -> None:
        assert to_scene_tokens("Mission: Impossible - Fallout") == "Mission.Impossible.Fallout"

    def test_leading_and_trailing_separators_removed(self) -> None:
        assert to_scene_tokens("  ...Alien!  ") == "Alien"

    def test_accented_letters_kept(self) -> None:
        assert to_scene_tokens("À bout de souffle") == "À.bout.de.souffle"

    def test_decomposed_accents_are_composed(self) -> None:
        """Un "e" + accent combinant devient un seul caractere NFC."""
        assert to_scene_tokens("Ame\u0301lie") == "Am\u00e9lie"

    def test_decorative_symbols_dropped_without_separator(self) -> None:
        assert to_scene_tokens("Marvel™ Studios©") == "Marvel.Studios"

    def test_non_latin_scripts_kept(self) -> None:
        assert to_scene_tokens("千と千尋の神隠し") == "千と千尋の神隠し"

    def test_thai_combining_vowels_kept(self) -> None:
        assert to_scene_tokens("\u0e2a\u0e27\u0e31\u0e2a\u0e14\u0e35") == (
            "\u0e2a\u0e27\u0e31\u0e2a\u0e14\u0e35"
        )

    def test_devanagari_matras_kept(self) -> None:
        """Matras et virama restent attaches a leur consonne."""
        assert to_scene_tokens("\u0939\u093f\u0928\u094d\u0926\u0940 Film") == (
            "\u0939\u093f\u0928\u094d\u0926\u0940.Film"
        )

    def test_leading_combining_mark_is_separator(self) -> None:
        assert to_scene_tokens("\u0e31Heat") == "Heat"

    def test_control_characters_removed(self) -> None:
        assert to_scene_tokens("Bad\x00Name") == "BadName"

    def test_empty_input(self) -> None:
        assert to_scene_tokens("") == ""
        assert to_scene_tokens(" - : ") == ""

    @pytest.mark.parametrize(
        "text",
        [
            "The Lord of the Rings: The Return of the King",
            "Amélie",
            "S01",
            "L'Été meurtrier",
            "Spider-Man: Across the Spider-Verse",
            "\u0e2a\u0e27\u0e31\u0e2a\u0e14\u0e35 2024",
        ],
    )
    def test_idempotent(self, text: str) -> None:
        """Normaliser un texte deja normalise ne le change pas."""
        once = to_scene_tokens(text)
        assert to_scene_tokens(once) == once


class TestSplitTokens:
    """Tests pour split_tokens."""

    def test_returns_token_list(self) -> None:
        assert split_tokens("L'Été meurtrier") == ["L", "Été", "meurtrier"]

    def test_empty_returns_empty_list(self) -> None:
        assert split_tokens("!!!") == []
