"""
Tests des commandes CLI (run, name, version).

Utilise typer.testing.CliRunner sur l'application principale. Le container
de la commande run est remplace par un mock.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from ghostseed import __version__
from ghostseed.config import RadarrSettings, Settings
from ghostseed.main import app
from ghostseed.services.release_pipeline import PipelineReport

runner = CliRunner()

_CONTAINER = "ghostseed.adapters.cli.helpers.Container"
_CLOSE = "ghostseed.adapters.cli.commands.pipeline_commands.close_container"


def _mock_container(settings: Settings, report: PipelineReport | None = None) -> MagicMock:
    container = MagicMock()
    container.config.return_value = settings
    pipeline = container.release_pipeline.return_value
    pipeline.run = AsyncMock(return_value=report or PipelineReport())
    pipeline.run_movies = AsyncMock(return_value=report or PipelineReport())
    pipeline.run_series = AsyncMock(return_value=report or PipelineReport())
    return container


@pytest.fixture
def radarr_settings(test_settings: Settings) -> Settings:
    test_settings.radarr = RadarrSettings(base_url="http://radarr:7878", api_key="k")
    return test_settings


class TestVersionCommand:
    """Tests pour la commande version."""

    def test_prints_version(self) -> None:
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert f"GhostSeed v{__version__}" in result.output


class TestNameCommands:
    """Tests pour le groupe de commandes name."""

    def test_parse_shows_fields(self) -> None:
        result = runner.invoke(app, ["name", "parse", "Heat.1995.1080p.BluRay.x264-GRP"])
        assert result.exit_code == 0
        assert "1995" in result.output
        assert "BluRay" in result.output
        assert "GRP" in result.output

    def test_check_valid_names(self) -> None:
        result = runner.invoke(
            app, ["name", "check", "The.Godfather.1972.VF.1080p.BluRay.EAC3.5.1.x265-GRP"]
        )
        assert result.exit_code == 0
        assert "OK" in result.output

    def test_check_invalid_name_exits_1(self) -> None:
        result = runner.invoke(
            app,
            [
                "name",
                "check",
                "The.Godfather.1972.VF.1080p.BluRay.EAC3.5.1.x265-GRP",
                "Fight Club (1999) - VO-VF - 1080p - x265",
            ],
        )
        assert result.exit_code == 1
        assert "INVALIDE" in result.output
        assert "missing_dots" in result.output.lower()

    def test_propose_from_quality(self) -> None:
        result = runner.invoke(
            app,
            ["name", "propose", "--title", "Heat", "--year", "1995", "--quality", "WEBDL-720p"],
        )
        assert result.exit_code == 0
        assert "Heat.1995.720p.WEB" in result.output

    def test_propose_empty_title_exits_1(self) -> None:
        result = runner.invoke(app, ["name", "propose", "--title", ""])
        assert result.exit_code == 1


class TestRunCommand:
    """Tests pour la commande run."""

    def test_no_manager_configured(self, test_settings: Settings) -> None:
        container = _mock_container(test_settings)

        with patch(_CONTAINER, return_value=container):
            result = runner.invoke(app, ["run"])

        assert result.exit_code == 1
        assert "Ni Radarr ni Sonarr" in result.output
        container.release_pipeline.assert_not_called()

    def test_movies_filter_and_report(self, radarr_settings: Settings) -> None:
        report = PipelineReport(processed=1, uploaded=1, names=["Heat.1995.1080p.x264"])
        container = _mock_container(radarr_settings, report)

        with (
            patch(_CONTAINER, return_value=container),
            patch(_CLOSE, new=AsyncMock()) as mock_close,
        ):
            result = runner.invoke(app, ["run", "--filter", "movies", "--dry-run"])

        assert result.exit_code == 0
        assert "Heat.1995.1080p.x264" in result.output
        assert radarr_settings.torrent.dry_run is True
        pipeline = container.release_pipeline.return_value
        pipeline.ensure_seed_path.assert_called_once()
        pipeline.run_movies.assert_awaited_once()
        pipeline.run.assert_not_awaited()
        mock_close.assert_awaited_once_with(container)

    def test_listing_errors_exit_1(self, radarr_settings: Settings) -> None:
        report = PipelineReport(errors=["Radarr injoignable"])
        container = _mock_container(radarr_settings, report)

        with patch(_CONTAINER, return_value=container), patch(_CLOSE, new=AsyncMock()):
            result = runner.invoke(app, ["run"])

        assert result.exit_code == 1
        assert "Radarr injoignable" in result.output
