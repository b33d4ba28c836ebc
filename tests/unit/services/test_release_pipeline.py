"""
Tests unitaires du pipeline de release.

Tests couvrant:
- Pipeline films : nommage, export, torrent, publication
- Pipeline series : listing Sonarr, mapping de chemins, classification
- Modes degrades : dry-run, seed_path absent, erreurs par unite
- Mode test et choix du titre
"""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from ghostseed.config import PathMapping, Settings, TitleStrategy
from ghostseed.core.entities import MovieRecord, SeriesRecord
from ghostseed.core.entities.library import EpisodeFileRecord, EpisodeRecord
from ghostseed.core.errors import (
    ConfigurationError,
    ExportError,
    LibraryApiError,
    TorrentCreationError,
)
from ghostseed.core.ports.api_clients import IRadarrClient, ISonarrClient
from ghostseed.core.ports.file_system import ISeedExporter
from ghostseed.core.ports.publishing import ITorrentCreator
from ghostseed.core.value_objects import ReleaseKind
from ghostseed.services.naming import SceneNamingService
from ghostseed.services.packaging import PackagingClassifier, PackagingOptions
from ghostseed.services.publisher import PublisherService
from ghostseed.services.release_pipeline import (
    TEST_MODE_MOVIE_LIMIT,
    PipelineReport,
    ReleasePipeline,
    choose_title,
)
from tests.fixtures.radarr_responses import RADARR_MOVIES_RESPONSE
from tests.fixtures.sonarr_responses import (
    SONARR_EPISODE_FILES_RESPONSE,
    SONARR_EPISODES_RESPONSE,
    SONARR_SERIES_RESPONSE,
)

GODFATHER_NAME = "Le.Parrain.1972.VF.1080p.BluRay.Remastered.EAC3.5.1.x264-SPARKS"


@pytest.fixture
def movies() -> list[MovieRecord]:
    return [MovieRecord.from_api(item) for item in RADARR_MOVIES_RESPONSE]


@pytest.fixture
def radarr(movies: list[MovieRecord]) -> MagicMock:
    client = MagicMock(spec=IRadarrClient)
    client.list_movies = AsyncMock(return_value=movies)
    return client


@pytest.fixture
def sonarr() -> MagicMock:
    client = MagicMock(spec=ISonarrClient)
    client.list_series = AsyncMock(
        return_value=[SeriesRecord.from_api(SONARR_SERIES_RESPONSE[0])]
    )
    client.list_episodes = AsyncMock(
        return_value=[EpisodeRecord.from_api(item) for item in SONARR_EPISODES_RESPONSE]
    )
    client.list_episode_files = AsyncMock(
        return_value=[
            EpisodeFileRecord.from_api(item) for item in SONARR_EPISODE_FILES_RESPONSE
        ]
    )
    return client


@pytest.fixture
def exporter(tmp_path: Path) -> MagicMock:
    mock = MagicMock(spec=ISeedExporter)
    mock.export_single.side_effect = lambda root, name, video: root / name
    mock.export_pack.side_effect = lambda root, name, videos: root / name
    return mock


@pytest.fixture
def torrent_creator() -> MagicMock:
    mock = MagicMock(spec=ITorrentCreator)
    mock.create = AsyncMock(
        side_effect=lambda seed_dir, name: seed_dir / f"{name}.torrent"
    )
    return mock


@pytest.fixture
def publisher() -> MagicMock:
    mock = MagicMock(spec=PublisherService)
    mock.publish_release = AsyncMock(return_value=True)
    return mock


@pytest.fixture
def make_pipeline(
    test_settings: Settings,
    naming_service: SceneNamingService,
    mock_probe: MagicMock,
    exporter: MagicMock,
    torrent_creator: MagicMock,
    publisher: MagicMock,
):
    def _make(radarr=None, sonarr=None, settings: Settings = test_settings) -> ReleasePipeline:
        classifier = PackagingClassifier(naming_service, mock_probe, PackagingOptions())
        return ReleasePipeline(
            settings=settings,
            naming=naming_service,
            probe=mock_probe,
            classifier=classifier,
            exporter=exporter,
            torrent_creator=torrent_creator,
            publisher=publisher,
            radarr_client=radarr,
            sonarr_client=sonarr,
        )

    return _make


class TestChooseTitle:
    """Tests pour choose_title."""

    @pytest.fixture
    def movie(self) -> MovieRecord:
        return MovieRecord(
            id=1, title="Le Parrain", original_title="The Godfather", original_language="English"
        )

    def test_default_is_local_title(self, movie: MovieRecord) -> None:
        assert choose_title(movie, None) == "Le Parrain"

    def test_use_original_title(self, movie: MovieRecord) -> None:
        assert choose_title(movie, None, use_original_title=True) == "The Godfather"

    def test_original_if_english(self, movie: MovieRecord) -> None:
        assert choose_title(movie, TitleStrategy.ORIGINAL_IF_ENGLISH) == "The Godfather"

    def test_original_if_english_keeps_local_for_other_languages(self) -> None:
        movie = MovieRecord(
            id=1, title="Le Voyage de Chihiro", original_title="千と千尋の神隠し",
            original_language="Japanese",
        )
        assert choose_title(movie, TitleStrategy.ORIGINAL_IF_ENGLISH) == "Le Voyage de Chihiro"

    def test_always_local_overrides_flag(self, movie: MovieRecord) -> None:
        assert choose_title(movie, TitleStrategy.ALWAYS_LOCAL, True) == "Le Parrain"

    def test_missing_original_falls_back_to_unknown(self) -> None:
        movie = MovieRecord(id=1, title="Film")
        assert choose_title(movie, None, use_original_title=True) == "Unknown"


class TestPipelineReport:
    """Tests pour PipelineReport."""

    def test_merge(self) -> None:
        report = PipelineReport(processed=1, names=["a"])
        report.merge(PipelineReport(processed=2, failed=1, names=["b"], errors=["x"]))
        assert report.processed == 3
        assert report.failed == 1
        assert report.names == ["a", "b"]
        assert report.errors == ["x"]


class TestRunMovies:
    """Tests pour le pipeline films."""

    @pytest.mark.asyncio
    async def test_full_flow(
        self,
        make_pipeline,
        radarr: MagicMock,
        test_settings: Settings,
        exporter: MagicMock,
        torrent_creator: MagicMock,
        publisher: MagicMock,
    ) -> None:
        report = await make_pipeline(radarr=radarr).run_movies()

        assert report.names == [GODFATHER_NAME]
        assert report.processed == 1
        assert report.uploaded == 1
        assert report.failed == 0

        seed_root = test_settings.media.seed_path
        exporter.export_single.assert_called_once_with(
            seed_root,
            GODFATHER_NAME,
            Path("/data/movies/The Godfather (1972)/The.Godfather.1972.mkv"),
        )
        torrent_creator.create.assert_awaited_once_with(seed_root / GODFATHER_NAME, GODFATHER_NAME)
        release = publisher.publish_release.await_args.args[0]
        assert release.kind == ReleaseKind.MOVIE
        assert release.original_scene_name.startswith("The.Godfather.1972.REMASTERED")

    @pytest.mark.asyncio
    async def test_path_mapping_applied(
        self, make_pipeline, radarr: MagicMock, test_settings: Settings, exporter: MagicMock
    ) -> None:
        test_settings.radarr.path_mappings = [
            PathMapping(remote_root="/data/movies", local_root="/mnt/nas/movies")
        ]

        await make_pipeline(radarr=radarr).run_movies()

        video = exporter.export_single.call_args.args[2]
        assert video == Path("/mnt/nas/movies/The Godfather (1972)/The.Godfather.1972.mkv")

    @pytest.mark.asyncio
    async def test_unmapped_movie_skipped(
        self, make_pipeline, radarr: MagicMock, test_settings: Settings, exporter: MagicMock
    ) -> None:
        test_settings.radarr.path_mappings = [
            PathMapping(remote_root="/other", local_root="/mnt/other")
        ]

        report = await make_pipeline(radarr=radarr).run_movies()

        assert report.skipped == 1
        assert report.processed == 0
        exporter.export_single.assert_not_called()

    def test_unknown_scene_name_still_rebuilt(
        self, make_pipeline, naming_service: SceneNamingService
    ) -> None:
        movie = MovieRecord(
            id=1, title="Heat", year=1995, file_path="/m/Heat.mkv", quality_name="WEBDL-1080p"
        )
        release = make_pipeline().plan_movie(movie)

        assert release is not None
        assert release.scene_name == "Heat.1995.VF.1080p.WEB.EAC3.5.1.x264"
        assert release.original_scene_name is None

    def test_no_tag_appended_when_configured(
        self, make_pipeline, test_settings: Settings
    ) -> None:
        test_settings.media.append_no_tag_on_missing_group = True
        movie = MovieRecord(
            id=1, title="Heat", year=1995, file_path="/m/Heat.mkv", quality_name="WEBDL-1080p"
        )

        release = make_pipeline().plan_movie(movie)

        assert release.scene_name.endswith("-NoTag")

    @pytest.mark.asyncio
    async def test_dry_run_skips_torrent(
        self,
        make_pipeline,
        radarr: MagicMock,
        test_settings: Settings,
        exporter: MagicMock,
        torrent_creator: MagicMock,
        publisher: MagicMock,
    ) -> None:
        test_settings.torrent.dry_run = True

        report = await make_pipeline(radarr=radarr).run_movies()

        assert report.processed == 1
        exporter.export_single.assert_called_once()
        torrent_creator.create.assert_not_awaited()
        publisher.publish_release.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_without_seed_path_nothing_exported(
        self, make_pipeline, radarr: MagicMock, test_settings: Settings, exporter: MagicMock
    ) -> None:
        test_settings.media.seed_path = None

        report = await make_pipeline(radarr=radarr).run_movies()

        assert report.processed == 1
        assert report.names == [GODFATHER_NAME]
        exporter.export_single.assert_not_called()

    @pytest.mark.asyncio
    async def test_export_error_counted(
        self, make_pipeline, radarr: MagicMock, exporter: MagicMock
    ) -> None:
        exporter.export_single.side_effect = ExportError("disque plein")

        report = await make_pipeline(radarr=radarr).run_movies()

        assert report.failed == 1
        assert report.processed == 0

    @pytest.mark.asyncio
    async def test_torrent_error_counted(
        self, make_pipeline, radarr: MagicMock, torrent_creator: MagicMock, publisher: MagicMock
    ) -> None:
        torrent_creator.create.side_effect = TorrentCreationError("imdl absent")

        report = await make_pipeline(radarr=radarr).run_movies()

        assert report.failed == 1
        publisher.publish_release.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_upload_refused_still_processed(
        self, make_pipeline, radarr: MagicMock, publisher: MagicMock
    ) -> None:
        publisher.publish_release.return_value = False

        report = await make_pipeline(radarr=radarr).run_movies()

        assert report.processed == 1
        assert report.uploaded == 0

    @pytest.mark.asyncio
    async def test_listing_error_reported(self, make_pipeline, radarr: MagicMock) -> None:
        radarr.list_movies.side_effect = LibraryApiError("radarr: HTTP 401", status_code=401)

        report = await make_pipeline(radarr=radarr).run_movies()

        assert report.errors == ["radarr: HTTP 401"]
        assert report.processed == 0

    @pytest.mark.asyncio
    async def test_test_mode_caps_movies(
        self, make_pipeline, test_settings: Settings, exporter: MagicMock
    ) -> None:
        test_settings.test_mode = True
        many = [
            MovieRecord(id=i, title=f"Film {i}", year=2000, file_path=f"/m/{i}.mkv")
            for i in range(TEST_MODE_MOVIE_LIMIT + 10)
        ]
        radarr = MagicMock(spec=IRadarrClient)
        radarr.list_movies = AsyncMock(return_value=many)

        report = await make_pipeline(radarr=radarr).run_movies()

        assert report.processed == TEST_MODE_MOVIE_LIMIT
        assert exporter.export_single.call_count == TEST_MODE_MOVIE_LIMIT


class TestRunSeries:
    """Tests pour le pipeline series."""

    @pytest.mark.asyncio
    async def test_incomplete_season_delivered_per_episode(
        self,
        make_pipeline,
        sonarr: MagicMock,
        test_settings: Settings,
        exporter: MagicMock,
    ) -> None:
        test_settings.sonarr.path_mappings = [
            PathMapping(remote_root="/data/tv", local_root="/library/tv")
        ]

        report = await make_pipeline(sonarr=sonarr).run_series()

        assert report.names == ["The.Expanse.S01E01.VF.1080p.WEB.EAC3.5.1.x264-GRP"]
        assert report.processed == 1
        sonarr.list_episodes.assert_awaited_once_with(1)
        video = exporter.export_single.call_args.args[2]
        assert video == Path("/library/tv/The Expanse/Season 01/The.Expanse.S01E01.mkv")

    @pytest.mark.asyncio
    async def test_complete_season_delivered_as_pack(
        self, make_pipeline, sonarr: MagicMock, exporter: MagicMock
    ) -> None:
        sonarr.list_episodes.return_value = [
            EpisodeRecord(id=101, season_number=1, episode_number=1, has_file=True, monitored=True)
        ]

        report = await make_pipeline(sonarr=sonarr).run_series()

        assert report.names == ["The.Expanse.2015.S01.VF.1080p.WEB.EAC3.5.1.x264-GRP"]
        exporter.export_pack.assert_called_once()
        exporter.export_single.assert_not_called()

    @pytest.mark.asyncio
    async def test_unmapped_files_counted_as_skipped(
        self, make_pipeline, sonarr: MagicMock, test_settings: Settings
    ) -> None:
        test_settings.sonarr.path_mappings = [
            PathMapping(remote_root="/elsewhere", local_root="/library")
        ]

        report = await make_pipeline(sonarr=sonarr).run_series()

        assert report.skipped == 1
        assert report.names == []

    @pytest.mark.asyncio
    async def test_series_listing_error_skips_series(
        self, make_pipeline, sonarr: MagicMock
    ) -> None:
        sonarr.list_episodes.side_effect = LibraryApiError("sonarr: HTTP 500", status_code=500)

        report = await make_pipeline(sonarr=sonarr).run_series()

        assert report.skipped == 1
        assert report.errors == ["sonarr: HTTP 500"]


class TestRun:
    """Tests pour run et ensure_seed_path."""

    @pytest.mark.asyncio
    async def test_run_without_clients(self, make_pipeline) -> None:
        report = await make_pipeline().run()
        assert report == PipelineReport()

    @pytest.mark.asyncio
    async def test_run_merges_both_pipelines(
        self, make_pipeline, radarr: MagicMock, sonarr: MagicMock
    ) -> None:
        report = await make_pipeline(radarr=radarr, sonarr=sonarr).run()
        assert report.names == [
            GODFATHER_NAME,
            "The.Expanse.S01E01.VF.1080p.WEB.EAC3.5.1.x264-GRP",
        ]

    def test_ensure_seed_path_creates_directory(
        self, make_pipeline, test_settings: Settings
    ) -> None:
        seed = make_pipeline().ensure_seed_path()
        assert seed == test_settings.media.seed_path
        assert seed.is_dir()

    def test_ensure_seed_path_rejects_file(
        self, make_pipeline, test_settings: Settings
    ) -> None:
        test_settings.media.seed_path.parent.mkdir(parents=True, exist_ok=True)
        test_settings.media.seed_path.write_text("not a dir")

        with pytest.raises(ConfigurationError):
            make_pipeline().ensure_seed_path()
