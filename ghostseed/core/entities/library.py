"""
Library manager entities.

Records returned by Radarr (movies) and Sonarr (series, episodes,
episode files) API v3, reduced to the fields the naming and packaging
logic needs. Each record exposes a tolerant ``from_api`` constructor:
missing keys fall back to defaults instead of raising.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


def _quality_name(payload: dict[str, Any]) -> Optional[str]:
    """Extract ``quality.quality.name`` from an *arr file resource."""
    quality = payload.get("quality") or {}
    inner = quality.get("quality") or {}
    name = inner.get("name")
    return name or None


def _cover_url(images: list[dict[str, Any]]) -> Optional[str]:
    """Pick the first image URL, preferring remoteUrl over url."""
    for image in images:
        url = image.get("remoteUrl") or image.get("url")
        if url:
            return url
    return None


@dataclass
class SeriesRecord:
    """
    Sonarr series resource.

    Attributes:
        id: Sonarr series ID
        title: Series title
        year: First air year
        series_type: "standard", "daily" or "anime"
        overview: Series description
        cover_url: First usable poster/banner URL
    """

    id: int
    title: str
    year: Optional[int] = None
    series_type: Optional[str] = None
    overview: Optional[str] = None
    cover_url: Optional[str] = None

    @property
    def is_anime(self) -> bool:
        return bool(self.series_type) and "anime" in self.series_type.lower()

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "SeriesRecord":
        return cls(
            id=int(payload["id"]),
            title=payload.get("title") or "Unknown",
            year=payload.get("year") or None,
            series_type=payload.get("seriesType"),
            overview=payload.get("overview"),
            cover_url=_cover_url(payload.get("images") or []),
        )


@dataclass
class EpisodeRecord:
    """
    Sonarr episode resource.

    Attributes:
        id: Sonarr episode ID
        season_number: Season (0 = specials)
        episode_number: Episode within the season
        absolute_episode_number: Absolute numbering (anime)
        title: Episode title
        overview: Episode summary
        has_file: Sonarr already has a file for this episode
        monitored: Episode is monitored
    """

    id: int
    season_number: int
    episode_number: int
    absolute_episode_number: Optional[int] = None
    title: Optional[str] = None
    overview: Optional[str] = None
    has_file: bool = False
    monitored: bool = False

    @property
    def is_complete(self) -> bool:
        """An episode counts as done when unmonitored or already on disk."""
        return not self.monitored or self.has_file

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "EpisodeRecord":
        return cls(
            id=int(payload["id"]),
            season_number=int(payload.get("seasonNumber") or 0),
            episode_number=int(payload.get("episodeNumber") or 0),
            absolute_episode_number=payload.get("absoluteEpisodeNumber"),
            title=payload.get("title"),
            overview=payload.get("overview"),
            has_file=bool(payload.get("hasFile", False)),
            monitored=bool(payload.get("monitored", False)),
        )


@dataclass
class EpisodeFileRecord:
    """
    Sonarr episode file resource.

    Attributes:
        id: Sonarr episode file ID
        path: Path as seen by Sonarr
        season_number: Season reported by Sonarr for this file
        scene_name: Original release name, if known
        release_group: Release group reported by Sonarr
        episode_ids: IDs of the episodes contained in the file
        quality_name: Quality label (ex: "WEBDL-1080p")
    """

    id: int
    path: str
    season_number: Optional[int] = None
    scene_name: Optional[str] = None
    release_group: Optional[str] = None
    episode_ids: list[int] = field(default_factory=list)
    quality_name: Optional[str] = None

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "EpisodeFileRecord":
        return cls(
            id=int(payload["id"]),
            path=payload.get("path") or "",
            season_number=payload.get("seasonNumber"),
            scene_name=payload.get("sceneName") or None,
            release_group=payload.get("releaseGroup") or None,
            episode_ids=[int(eid) for eid in payload.get("episodeIds") or []],
            quality_name=_quality_name(payload),
        )


@dataclass
class MovieRecord:
    """
    Radarr movie resource with its (single) movie file.

    Attributes:
        id: Radarr movie ID
        title: Localized title
        original_title: Original language title
        original_language: Original language name (ex: "English")
        year: Release year
        overview: Plot summary
        cover_url: Poster URL
        file_path: Path of the movie file as seen by Radarr
        scene_name: Original release name of the file
        release_group: Release group of the file
        quality_name: Quality label of the file
    """

    id: int
    title: str
    original_title: Optional[str] = None
    original_language: Optional[str] = None
    year: Optional[int] = None
    overview: Optional[str] = None
    cover_url: Optional[str] = None
    file_path: Optional[str] = None
    scene_name: Optional[str] = None
    release_group: Optional[str] = None
    quality_name: Optional[str] = None

    @property
    def has_file(self) -> bool:
        return bool(self.file_path)

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "MovieRecord":
        movie_file = payload.get("movieFile") or {}
        language = payload.get("originalLanguage") or {}
        cover_url = _cover_url(payload.get("images") or []) or payload.get("remotePoster")
        return cls(
            id=int(payload["id"]),
            title=payload.get("title") or "Unknown",
            original_title=payload.get("originalTitle"),
            original_language=language.get("name"),
            year=payload.get("year") or None,
            overview=payload.get("overview"),
            cover_url=cover_url,
            file_path=movie_file.get("path"),
            scene_name=movie_file.get("sceneName") or None,
            release_group=movie_file.get("releaseGroup") or None,
            quality_name=_quality_name(movie_file),
        )
