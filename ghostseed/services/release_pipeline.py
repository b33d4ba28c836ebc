"""
Pipeline de release : Radarr/Sonarr -> nom de release -> seed -> torrent -> tracker.

Chaque unite (film, episode, pack) est traitee jusqu'au bout avant la
suivante : les effets de bord (liens, imdl, envoi) portent sur un
repertoire nomme d'apres l'unite et ne doivent pas se chevaucher.

Aucune erreur d'unite n'est fatale : elle est journalisee, comptee dans
le rapport, et le traitement continue.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from loguru import logger

from ghostseed.config import Settings, TitleStrategy
from ghostseed.core.entities.library import MovieRecord, SeriesRecord
from ghostseed.core.errors import (
    ConfigurationError,
    ExportError,
    GhostSeedError,
    LibraryApiError,
    TorrentCreationError,
)
from ghostseed.core.ports.api_clients import IRadarrClient, ISonarrClient
from ghostseed.core.ports.file_system import ISeedExporter
from ghostseed.core.ports.parser import ITechnicalProbe
from ghostseed.core.ports.publishing import ITorrentCreator
from ghostseed.core.value_objects.hints import MovieHints
from ghostseed.core.value_objects.release import PlannedRelease, ReleaseKind
from ghostseed.services.naming.service import SceneNamingService
from ghostseed.services.packaging import PackagingClassifier, final_scene_name
from ghostseed.services.publisher import PublisherService
from ghostseed.utils.pathmap import PathMapper

# Plafonds du mode test
TEST_MODE_MOVIE_LIMIT = 50
TEST_MODE_SERIES_LIMIT = 10

UNKNOWN_SCENE_NAME = "Unknown"


@dataclass
class PipelineReport:
    """
    Bilan d'une execution.

    Attributs :
        processed : Unites menees a terme (export, torrent, envoi selon config)
        skipped : Elements ignores (non mappes, sans fichier, nom vide)
        failed : Unites en echec (export, torrent)
        uploaded : Unites acceptees par tous les trackers
        names : Noms de release emis, dans l'ordre
        errors : Erreurs de listing (gestionnaire injoignable...)
    """

    processed: int = 0
    skipped: int = 0
    failed: int = 0
    uploaded: int = 0
    names: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def merge(self, other: "PipelineReport") -> "PipelineReport":
        self.processed += other.processed
        self.skipped += other.skipped
        self.failed += other.failed
        self.uploaded += other.uploaded
        self.names.extend(other.names)
        self.errors.extend(other.errors)
        return self


def choose_title(
    movie: MovieRecord,
    strategy: Optional[TitleStrategy],
    use_original_title: bool = False,
) -> str:
    """
    Titre de film retenu pour le nom de release.

    - original_if_english : titre original si la langue originale est l'anglais
    - always_local : titre localise
    - sans strategie : titre original si use_original_title, sinon localise
    """
    original = movie.original_title or UNKNOWN_SCENE_NAME
    local = movie.title or UNKNOWN_SCENE_NAME

    if strategy == TitleStrategy.ORIGINAL_IF_ENGLISH:
        language = (movie.original_language or "").lower()
        is_english = language.startswith("en") or "english" in language
        return original if is_english else local
    if strategy == TitleStrategy.ALWAYS_LOCAL:
        return local
    return original if use_original_title else local


class ReleasePipeline:
    """
    Orchestrateur des pipelines films et series.

    Utilisation :
        pipeline = container.release_pipeline()
        report = await pipeline.run()
    """

    def __init__(
        self,
        settings: Settings,
        naming: SceneNamingService,
        probe: ITechnicalProbe,
        classifier: PackagingClassifier,
        exporter: ISeedExporter,
        torrent_creator: ITorrentCreator,
        publisher: PublisherService,
        radarr_client: Optional[IRadarrClient] = None,
        sonarr_client: Optional[ISonarrClient] = None,
    ) -> None:
        self._settings = settings
        self._naming = naming
        self._probe = probe
        self._classifier = classifier
        self._exporter = exporter
        self._torrent_creator = torrent_creator
        self._publisher = publisher
        self._radarr = radarr_client
        self._sonarr = sonarr_client
        self._radarr_paths = PathMapper(settings.radarr.path_mappings)
        self._sonarr_paths = PathMapper(settings.sonarr.path_mappings)

    def ensure_seed_path(self) -> Optional[Path]:
        """
        Cree le repertoire de seed configure si necessaire.

        Raises:
            ConfigurationError: Le chemin existe mais n'est pas un repertoire
        """
        seed_path = self._settings.media.seed_path
        if seed_path is None:
            return None
        if seed_path.exists():
            if not seed_path.is_dir():
                raise ConfigurationError(
                    f"seed_path '{seed_path}' existe mais n'est pas un repertoire"
                )
            return seed_path
        seed_path.mkdir(parents=True, exist_ok=True)
        logger.info(f"Repertoire de seed cree : {seed_path}")
        return seed_path

    async def run(self) -> PipelineReport:
        """Execute le pipeline films puis le pipeline series."""
        self.ensure_seed_path()
        report = PipelineReport()
        if self._radarr is not None:
            report.merge(await self.run_movies())
        else:
            logger.info("Radarr non configure : pipeline films ignore")
        if self._sonarr is not None:
            report.merge(await self.run_series())
        else:
            logger.info("Sonarr non configure : pipeline series ignore")
        return report

    # Films

    async def run_movies(self) -> PipelineReport:
        """Traite les films Radarr ayant un fichier."""
        report = PipelineReport()
        if self._radarr is None:
            return report

        try:
            movies = [movie for movie in await self._radarr.list_movies() if movie.has_file]
        except LibraryApiError as e:
            logger.error(f"Liste des films Radarr impossible : {e}")
            report.errors.append(str(e))
            return report

        if self._settings.test_mode:
            movies = movies[:TEST_MODE_MOVIE_LIMIT]
        logger.info(f"Pipeline films : {len(movies)} film(s) avec fichier")

        for movie in movies:
            release = self.plan_movie(movie)
            if release is None:
                report.skipped += 1
                continue
            await self.deliver(release, report)

        logger.info("Pipeline films termine")
        return report

    def plan_movie(self, movie: MovieRecord) -> Optional[PlannedRelease]:
        """
        Construit l'unite de release d'un film.

        Returns:
            PlannedRelease, ou None si le chemin n'est pas mappe ou le nom vide
        """
        if not movie.file_path:
            logger.warning(f"Film sans chemin de fichier ignore : {movie.title}")
            return None
        local_path = self._radarr_paths.translate(movie.file_path)
        if local_path is None:
            logger.warning(
                f"Chemin non mappe ignore (aucun radarr.path_mappings) : {movie.file_path}"
            )
            return None

        media = self._settings.media
        title = choose_title(movie, media.title_strategy, media.use_original_title)
        technical = self._naming.resolve_technical(
            self._probe.probe(local_path), movie.quality_name
        )

        original = movie.scene_name or UNKNOWN_SCENE_NAME
        validation = self._naming.validate(original)
        hints = MovieHints(
            title=title,
            year=movie.year,
            quality=movie.quality_name,
            release_group=movie.release_group,
        )
        decision = self._naming.propose_movie(original, hints, technical, validation)
        if not decision.chosen:
            logger.warning(f"Nom vide pour le film '{title}' : ignore")
            return None

        scene_name = final_scene_name(
            decision.chosen, movie.release_group, media.append_no_tag_on_missing_group
        )
        logger.info(
            f"Film '{title}' ({movie.year}) : {original} -> {scene_name}",
            issues=[issue.value for issue in validation.issues],
        )
        return PlannedRelease(
            kind=ReleaseKind.MOVIE,
            title=title,
            decision=decision,
            scene_name=scene_name,
            local_paths=(local_path,),
            technical=technical,
            year=movie.year,
            overview=movie.overview,
            cover_url=movie.cover_url,
            original_scene_name=movie.scene_name,
        )

    # Series

    async def run_series(self) -> PipelineReport:
        """Traite les series Sonarr : packs puis repli par episode."""
        report = PipelineReport()
        if self._sonarr is None:
            return report

        options = self._classifier.options
        logger.info(
            "Pipeline series",
            test_mode=self._settings.test_mode,
            only_complete_seasons=options.only_complete_seasons,
            integrale_if_complete=options.create_integrale_pack_if_complete,
            per_episode_for_incomplete_seasons=options.per_episode_for_incomplete_seasons,
        )

        try:
            series_list = await self._sonarr.list_series()
        except LibraryApiError as e:
            logger.error(f"Liste des series Sonarr impossible : {e}")
            report.errors.append(str(e))
            return report

        if self._settings.test_mode:
            series_list = series_list[:TEST_MODE_SERIES_LIMIT]
        logger.info(f"{len(series_list)} serie(s) recuperee(s) depuis Sonarr")

        for series in series_list:
            releases = await self.plan_series(series, report)
            for release in releases:
                await self.deliver(release, report)

        logger.info("Pipeline series termine")
        return report

    async def plan_series(
        self, series: SeriesRecord, report: PipelineReport
    ) -> list[PlannedRelease]:
        """
        Planifie les unites d'une serie.

        Une erreur de listing ignore la serie ; les fichiers non mappes
        sont comptes comme ignores.
        """
        logger.info(f"Serie '{series.title}' (id={series.id})")
        try:
            episodes = await self._sonarr.list_episodes(series.id)
            files = await self._sonarr.list_episode_files(series.id)
        except LibraryApiError as e:
            logger.error(f"Serie '{series.title}' ignoree : {e}")
            report.skipped += 1
            report.errors.append(str(e))
            return []

        logger.info(
            f"Serie '{series.title}' : {len(episodes)} episode(s), {len(files)} fichier(s)"
        )
        state = self._classifier.build_state(episodes, files, self._sonarr_paths.translate)
        report.skipped += state.unmapped_files
        return self._classifier.plan(series, state)

    # Livraison

    async def deliver(self, release: PlannedRelease, report: PipelineReport) -> None:
        """
        Exporte, cree le torrent et publie une unite.

        Les echecs sont journalises et comptes, jamais propages.
        """
        report.names.append(release.scene_name)
        seed_root = self._settings.media.seed_path
        if seed_root is None:
            logger.info(f"seed_path non configure : '{release.scene_name}' non exporte")
            report.processed += 1
            return

        try:
            if release.kind.is_pack:
                seed_dir = self._exporter.export_pack(
                    seed_root, release.scene_name, list(release.local_paths)
                )
            else:
                seed_dir = self._exporter.export_single(
                    seed_root, release.scene_name, release.local_paths[0]
                )
        except ExportError as e:
            logger.error(f"Echec de l'export de '{release.scene_name}': {e}")
            report.failed += 1
            return

        if self._settings.torrent.dry_run:
            logger.info(f"Dry-run : pas de torrent pour '{release.scene_name}'")
            report.processed += 1
            return

        try:
            torrent_path = await self._torrent_creator.create(seed_dir, release.scene_name)
        except TorrentCreationError as e:
            logger.error(f"Echec de creation du torrent '{release.scene_name}': {e}")
            report.failed += 1
            return

        try:
            if await self._publisher.publish_release(release, torrent_path):
                report.uploaded += 1
        except GhostSeedError as e:
            logger.error(f"Echec de publication de '{release.scene_name}': {e}")
        report.processed += 1
