"""
Classification des fichiers d'une serie en unites de release.

Pour une serie, decide comment ses fichiers sont regroupes :
- packs de saison pour les saisons eligibles
- pack integrale optionnel si la serie est complete
- un fichier par unite pour les saisons incompletes non packees

L'etat calcule (SeasonState) est local a une serie et jete apres usage.
Aucune condition degradee n'est fatale : un fichier non mappe, une saison
sans fichier ou un nom vide omettent simplement l'unite concernee.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Optional

from loguru import logger

from ghostseed.core.entities.library import (
    EpisodeFileRecord,
    EpisodeRecord,
    SeriesRecord,
)
from ghostseed.core.ports.parser import ITechnicalProbe
from ghostseed.core.value_objects.hints import EpisodeHints, PackHints
from ghostseed.core.value_objects.release import PlannedRelease, ReleaseKind
from ghostseed.services.naming.builder import (
    episode_tag,
    sanitize_release_group,
    unanimous_release_group,
)
from ghostseed.services.naming.service import SceneNamingService


NO_TAG_SUFFIX = "-NoTag"
INTEGRALE_TAG = "INTEGRALE"
INTEGRALE_HEADING = "Integrale"


def final_scene_name(
    chosen: str, release_group: Optional[str], append_no_tag: bool
) -> str:
    """Ajoute le suffixe -NoTag si demande et si aucun groupe ne subsiste."""
    if append_no_tag and sanitize_release_group(release_group) is None:
        return f"{chosen}{NO_TAG_SUFFIX}"
    return chosen


def season_pack_tag(season: int) -> str:
    return f"S{season:02d}"


def episode_heading(hints: EpisodeHints, title: Optional[str]) -> str:
    """
    Intitule lisible d'un episode : "S01E02 - Titre".

    Sans tag, le titre seul ; sans titre, le tag seul.
    """
    tag = episode_tag(hints) or ""
    cleaned = (title or "").strip()
    if not cleaned:
        return tag
    if not tag:
        return cleaned
    return f"{tag} - {cleaned}"


@dataclass
class SeasonState:
    """
    Etat d'agregation d'une serie.

    Attributs :
        episode_by_id : Tous les episodes, saison 0 comprise
        episodes_by_season : IDs d'episodes par saison (> 0)
        files_by_season : Fichiers rattaches a exactement une saison
        mapped_files : Tous les fichiers resolus localement
        local_paths : Chemin local par ID de fichier
        complete_seasons : Saisons dont chaque episode est non suivi ou present
        incomplete_seasons : Autres saisons ayant au moins un episode
        unmapped_files : Nombre de fichiers sans correspondance locale
    """

    episode_by_id: dict[int, EpisodeRecord] = field(default_factory=dict)
    episodes_by_season: dict[int, list[int]] = field(default_factory=dict)
    files_by_season: dict[int, list[EpisodeFileRecord]] = field(default_factory=dict)
    mapped_files: list[EpisodeFileRecord] = field(default_factory=list)
    local_paths: dict[int, Path] = field(default_factory=dict)
    complete_seasons: set[int] = field(default_factory=set)
    incomplete_seasons: set[int] = field(default_factory=set)
    unmapped_files: int = 0

    @property
    def series_complete(self) -> bool:
        return bool(self.episodes_by_season) and not self.incomplete_seasons


@dataclass(frozen=True)
class PackagingOptions:
    """Options de regroupement (voir SonarrSettings et MediaSettings)."""

    only_complete_seasons: bool = True
    create_integrale_pack_if_complete: bool = False
    per_episode_for_incomplete_seasons: bool = True
    append_no_tag_on_missing_group: bool = False


class PackagingClassifier:
    """
    Classifieur pack / fichier par fichier pour une serie.

    Depend du service de nommage (synthese des noms) et de la sonde
    technique (base technique de chaque unite). Sans etat entre deux series.

    Example:
        classifier = PackagingClassifier(naming, probe, PackagingOptions())
        state = classifier.build_state(episodes, files, mapper.translate)
        releases = classifier.plan(series, state)
    """

    def __init__(
        self,
        naming: SceneNamingService,
        probe: ITechnicalProbe,
        options: PackagingOptions = PackagingOptions(),
    ) -> None:
        self._naming = naming
        self._probe = probe
        self._options = options

    @property
    def options(self) -> PackagingOptions:
        return self._options

    def build_state(
        self,
        episodes: Iterable[EpisodeRecord],
        files: Iterable[EpisodeFileRecord],
        resolve_path: Callable[[str], Optional[Path]],
    ) -> SeasonState:
        """
        Partitionne episodes et fichiers par saison et calcule la completude.

        Args:
            episodes: Episodes de la serie (saison 0 comprise)
            files: Fichiers d'episodes de la serie
            resolve_path: Traduit un chemin du gestionnaire en chemin local,
                ou None si aucune correspondance

        Returns:
            SeasonState de la serie
        """
        state = SeasonState()

        for episode in episodes:
            state.episode_by_id[episode.id] = episode
            # Speciaux : connus mais jamais eligibles a un pack
            if episode.season_number <= 0:
                continue
            state.episodes_by_season.setdefault(episode.season_number, []).append(
                episode.id
            )

        for episode_file in files:
            local_path = resolve_path(episode_file.path)
            if local_path is None:
                state.unmapped_files += 1
                logger.warning(f"Fichier ignore (chemin non mappe) : {episode_file.path}")
                continue

            state.local_paths[episode_file.id] = local_path
            seasons = self._seasons_of(episode_file, state.episode_by_id)
            if len(seasons) == 1:
                (season,) = seasons
                state.files_by_season.setdefault(season, []).append(episode_file)
            elif len(seasons) > 1:
                logger.debug(
                    f"Fichier multi-saisons exclu des packs de saison : {episode_file.path}"
                )
            state.mapped_files.append(episode_file)

        for season, episode_ids in state.episodes_by_season.items():
            if all(state.episode_by_id[eid].is_complete for eid in episode_ids):
                state.complete_seasons.add(season)
            else:
                state.incomplete_seasons.add(season)

        return state

    @staticmethod
    def _seasons_of(
        episode_file: EpisodeFileRecord, episode_by_id: dict[int, EpisodeRecord]
    ) -> set[int]:
        """
        Saisons d'un fichier.

        Le numero de saison du fichier (> 0) fait foi ; sinon les saisons
        de ses episodes.
        """
        if episode_file.season_number is not None and episode_file.season_number > 0:
            return {episode_file.season_number}
        seasons: set[int] = set()
        for episode_id in episode_file.episode_ids:
            episode = episode_by_id.get(episode_id)
            if episode is not None and episode.season_number > 0:
                seasons.add(episode.season_number)
        return seasons

    def eligible_pack_seasons(self, state: SeasonState) -> list[int]:
        """Saisons completes, ou toutes si only_complete_seasons est desactive."""
        if self._options.only_complete_seasons:
            return sorted(state.complete_seasons)
        return sorted(state.complete_seasons | state.incomplete_seasons)

    def plan(self, series: SeriesRecord, state: SeasonState) -> list[PlannedRelease]:
        """
        Planifie les unites de release d'une serie.

        Les packs sont toujours emis avant les fichiers individuels et une
        saison n'est jamais emise sous les deux formes.

        Args:
            series: Serie Sonarr
            state: Etat calcule par build_state

        Returns:
            Liste ordonnee des unites (packs de saison, integrale, episodes)
        """
        logger.info(
            f"Serie '{series.title}' : {len(state.complete_seasons)} saison(s) complete(s), "
            f"{len(state.incomplete_seasons)} incomplete(s), "
            f"serie complete={state.series_complete}"
        )
        if state.unmapped_files:
            logger.warning(
                f"Serie '{series.title}' : {state.unmapped_files} fichier(s) ignore(s), "
                "aucun path_mappings correspondant"
            )

        releases: list[PlannedRelease] = []
        pack_seasons = self.eligible_pack_seasons(state)

        for season in pack_seasons:
            files = state.files_by_season.get(season)
            if not files:
                logger.warning(
                    f"Pas de pack pour '{series.title}' {season_pack_tag(season)} : "
                    "aucun fichier eligible"
                )
                continue
            release = self._plan_pack(
                series,
                files,
                state,
                kind=ReleaseKind.SEASON_PACK,
                pack_tag=season_pack_tag(season),
                heading=f"{season_pack_tag(season)} Complete",
                season=season,
            )
            if release is not None:
                releases.append(release)

        if self._options.create_integrale_pack_if_complete:
            if state.series_complete and state.mapped_files:
                release = self._plan_pack(
                    series,
                    state.mapped_files,
                    state,
                    kind=ReleaseKind.INTEGRALE,
                    pack_tag=INTEGRALE_TAG,
                    heading=INTEGRALE_HEADING,
                )
                if release is not None:
                    releases.append(release)
            else:
                logger.info(f"Integrale demandee mais '{series.title}' incomplete : ignoree")

        if self._options.per_episode_for_incomplete_seasons:
            packed = set(pack_seasons)
            for season in sorted(state.incomplete_seasons - packed):
                seen: set[Path] = set()
                for episode_file in state.files_by_season.get(season, []):
                    local_path = state.local_paths[episode_file.id]
                    if local_path in seen:
                        continue
                    seen.add(local_path)
                    release = self._plan_episode(series, episode_file, local_path, state)
                    if release is not None:
                        releases.append(release)
        elif state.incomplete_seasons:
            logger.info(
                f"Serie '{series.title}' : saisons incompletes sans repli par episode"
            )

        return releases

    def _plan_pack(
        self,
        series: SeriesRecord,
        files: list[EpisodeFileRecord],
        state: SeasonState,
        kind: ReleaseKind,
        pack_tag: str,
        heading: str,
        season: Optional[int] = None,
    ) -> Optional[PlannedRelease]:
        """Agrege des fichiers en un pack (chemins, sonde, qualite, groupe)."""
        paths = sorted({state.local_paths[f.id] for f in files})
        if not paths:
            return None

        quality = next((f.quality_name for f in files if f.quality_name), None)
        release_group = unanimous_release_group([f.release_group for f in files])
        technical = self._naming.resolve_technical(self._probe.probe(paths[0]), quality)

        hints = PackHints(
            title=series.title,
            pack_tag=pack_tag,
            year=series.year,
            quality=quality,
            release_group=release_group,
        )
        decision = self._naming.propose_pack(None, hints, technical)
        if not decision.chosen:
            logger.warning(f"Nom vide pour le pack '{series.title}' {pack_tag} : ignore")
            return None

        scene_name = final_scene_name(
            decision.chosen, release_group, self._options.append_no_tag_on_missing_group
        )
        logger.info(
            f"Pack planifie pour '{series.title}' {pack_tag} ({len(paths)} fichier(s))",
            scene=scene_name,
        )
        return PlannedRelease(
            kind=kind,
            title=series.title,
            decision=decision,
            scene_name=scene_name,
            local_paths=tuple(paths),
            technical=technical,
            heading=heading,
            year=series.year,
            overview=series.overview,
            cover_url=series.cover_url,
            season=season,
            is_anime=series.is_anime,
        )

    def _plan_episode(
        self,
        series: SeriesRecord,
        episode_file: EpisodeFileRecord,
        local_path: Path,
        state: SeasonState,
    ) -> Optional[PlannedRelease]:
        """Planifie un fichier d'episode seul."""
        episodes = [
            state.episode_by_id[eid]
            for eid in episode_file.episode_ids
            if eid in state.episode_by_id
        ]
        if not episodes:
            logger.warning(f"Fichier sans episode identifiable ignore : {episode_file.path}")
            return None

        # Numerotation absolue reservee aux animes
        absolute_numbers: tuple[int, ...] = ()
        if series.is_anime:
            absolute_numbers = tuple(
                ep.absolute_episode_number
                for ep in episodes
                if ep.absolute_episode_number is not None
            )

        hints = EpisodeHints(
            series_title=series.title,
            series_year=series.year,
            season_number=episodes[0].season_number,
            episode_numbers=tuple(ep.episode_number for ep in episodes),
            absolute_episode_numbers=absolute_numbers,
            quality=episode_file.quality_name,
            release_group=episode_file.release_group,
        )
        technical = self._naming.resolve_technical(
            self._probe.probe(local_path), episode_file.quality_name
        )
        original = episode_file.scene_name
        validation = self._naming.validate(original) if original else None
        decision = self._naming.propose_episode(original, hints, technical, validation)
        if not decision.chosen:
            logger.warning(f"Nom vide pour {episode_file.path} : ignore")
            return None

        scene_name = final_scene_name(
            decision.chosen,
            episode_file.release_group,
            self._options.append_no_tag_on_missing_group,
        )
        title = next((ep.title for ep in episodes if ep.title), None)
        overview = next((ep.overview for ep in episodes if ep.overview), None)
        logger.debug(f"Episode planifie : {local_path}", scene=scene_name)
        return PlannedRelease(
            kind=ReleaseKind.EPISODE,
            title=series.title,
            decision=decision,
            scene_name=scene_name,
            local_paths=(local_path,),
            technical=technical,
            heading=episode_heading(hints, title),
            year=series.year,
            overview=overview,
            cover_url=series.cover_url,
            original_scene_name=original,
            season=hints.season_number,
            is_anime=series.is_anime,
        )
