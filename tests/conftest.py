"""
Fixtures pytest partagees pour les tests GhostSeed.

Ce module contient les fixtures communes utilisees dans les tests:
- Service de nommage sur le vocabulaire par defaut
- Mock de ITechnicalProbe
- Settings de test avec chemins temporaires
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from ghostseed.config import MediaSettings, Settings
from ghostseed.core.ports.parser import ITechnicalProbe
from ghostseed.core.value_objects import TechnicalInfo
from ghostseed.services.naming import SceneNamingService


@pytest.fixture
def naming_service() -> SceneNamingService:
    """Service de nommage sur le vocabulaire par defaut."""
    return SceneNamingService()


@pytest.fixture
def hd_technical() -> TechnicalInfo:
    """Fiche technique typique d'un WEB-DL 1080p x264 francais."""
    return TechnicalInfo(
        resolution="1080p",
        video_codec="x264",
        audio_codec="EAC3",
        audio_channels="5.1",
        audio_languages=frozenset({"fr"}),
    )


@pytest.fixture
def mock_probe(hd_technical: TechnicalInfo) -> MagicMock:
    """
    Mock de ITechnicalProbe pour les tests.

    Retourne la fiche 1080p par defaut pour tout chemin.
    """
    mock = MagicMock(spec=ITechnicalProbe)
    mock.probe.return_value = hd_technical
    mock.text_report.return_value = "General\nFormat : Matroska\n"
    return mock


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test isoles de l'environnement.

    seed_path pointe vers un repertoire temporaire.
    """
    return Settings(
        _env_file=None,
        media=MediaSettings(seed_path=tmp_path / "seed"),
        log_file=tmp_path / "logs" / "test.log",
    )
