"""
Tests unitaires du parser de noms de release.
"""

from ghostseed.services.naming.parser import parse_scene_name


class TestParseSceneName:
    """Tests pour parse_scene_name."""

    def test_canonical_name_fields(self) -> None:
        parts = parse_scene_name(
            "Dune.Part.Two.2024.MULTi.2160p.WEB.DV.HDR.10bit.EAC3.5.1.x265-FW"
        )

        assert parts.title_tokens == ["Dune", "Part", "Two"]
        assert parts.year == 2024
        assert parts.resolution == "2160p"
        assert parts.source == "WEB"
        assert parts.video_codec == "x265"
        assert parts.audio_codec == "EAC3"
        assert parts.audio_channels == "5.1"
        assert parts.bit_depth == "10bit"
        assert parts.hdr is True
        assert parts.dv is True
        assert parts.release_group == "FW"

    def test_multi_kept_as_extra(self) -> None:
        parts = parse_scene_name("Dune.Part.Two.2024.MULTi.2160p.WEB.x265-FW")
        assert "MULTi" in parts.extra_tags

    def test_typed_tokens_never_extras(self) -> None:
        parts = parse_scene_name("Film.2020.IMAX.1080p.WEB.x264-GRP")
        assert "IMAX" in parts.extra_tags
        assert "WEB" not in parts.extra_tags
        assert "2020" not in parts.extra_tags

    def test_free_text_title_before_year(self) -> None:
        parts = parse_scene_name("Fight Club (1999) - VO-VF - 1080p - x265")
        assert parts.title_tokens == ["Fight", "Club"]
        assert parts.year == 1999
        assert parts.resolution == "1080p"
        assert parts.video_codec == "x265"
        assert parts.source is None

    def test_no_year_uses_whole_string_for_title(self) -> None:
        parts = parse_scene_name("Some Title")
        assert parts.year is None
        assert parts.title_tokens == ["Some", "Title"]

    def test_never_fails_on_empty(self) -> None:
        parts = parse_scene_name("")
        assert parts.title_tokens == []
        assert parts.year is None
        assert parts.release_group is None
        assert parts.extra_tags == set()
