"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe GHOSTSEED_,
et peut optionnellement être fournie via un fichier .env. Les sections imbriquées utilisent
le délimiteur "__" (ex: GHOSTSEED_SONARR__BASE_URL, GHOSTSEED_TORRENT__DRY_RUN).

Radarr, Sonarr et l'upload sont optionnels - les pipelines correspondants sont ignorés
si non configurés.
"""

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de ghostseed/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class TitleStrategy(str, Enum):
    """Choix du titre de film utilisé pour le nom de release."""

    ALWAYS_LOCAL = "always_local"
    ORIGINAL_IF_ENGLISH = "original_if_english"


class PathMapping(BaseModel):
    """Correspondance entre un préfixe vu par le gestionnaire et un préfixe local."""

    remote_root: str
    local_root: str


class RadarrSettings(BaseModel):
    """Connexion à Radarr (films)."""

    base_url: Optional[str] = None
    api_key: Optional[str] = None
    path_mappings: list[PathMapping] = Field(default_factory=list)

    @property
    def enabled(self) -> bool:
        return bool(self.base_url and self.api_key)


class SonarrSettings(BaseModel):
    """Connexion à Sonarr (séries) et politique de regroupement en packs."""

    base_url: Optional[str] = None
    api_key: Optional[str] = None
    path_mappings: list[PathMapping] = Field(default_factory=list)
    only_complete_seasons: bool = True
    create_integrale_pack_if_complete: bool = False
    per_episode_for_incomplete_seasons: bool = True

    @property
    def enabled(self) -> bool:
        return bool(self.base_url and self.api_key)


class MediaSettings(BaseModel):
    """Arborescence de seed et choix de nommage."""

    seed_path: Optional[Path] = None
    enable_mediainfo_cache: bool = False
    mediainfo_cache_dir: Path = Field(default=Path(".cache/mediainfo"))
    append_no_tag_on_missing_group: bool = False
    use_original_title: bool = False
    title_strategy: Optional[TitleStrategy] = None

    @field_validator("seed_path", "mediainfo_cache_dir", mode="before")
    @classmethod
    def expand_path(cls, v: Optional[str | Path]) -> Optional[Path]:
        """Étend ~ vers le répertoire home dans les chemins."""
        if v is None or v == "":
            return None
        return Path(v).expanduser()


class TorrentSettings(BaseModel):
    """Création des .torrent via intermodal (imdl)."""

    announce_url: Optional[str] = None
    private: bool = True
    output_dir: Optional[Path] = None
    dry_run: bool = False
    imdl_binary: str = "imdl"

    @field_validator("output_dir", mode="before")
    @classmethod
    def expand_path(cls, v: Optional[str | Path]) -> Optional[Path]:
        """Étend ~ vers le répertoire home dans les chemins."""
        if v is None or v == "":
            return None
        return Path(v).expanduser()


class TorrustSettings(BaseModel):
    """Tracker Torrust (API REST v1)."""

    enable: bool = False
    api_base: str = ""
    api_key: str = ""
    movies_category: str = "movies"
    series_category: str = "tv shows"
    anime_category: str = "anime"
    tags: list[int] = Field(default_factory=list)


class UploadSettings(BaseModel):
    """Envoi vers les trackers privés."""

    dry_run: bool = False
    # Ancienne forme : upload.tracker = "torrust" active le tracker nommé
    tracker: Optional[str] = None
    torrust: TorrustSettings = Field(default_factory=TorrustSettings)


class NamingSettings(BaseModel):
    """Politique de tag de langue (audio)."""

    multi_language_tag: str = "MULTi.VF"
    language_tags: dict[str, str] = Field(
        default_factory=lambda: {"fr": "VF", "en": "VOSTFR"}
    )


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe GHOSTSEED_.
    Exemple : GHOSTSEED_LOG_LEVEL=DEBUG, GHOSTSEED_MEDIA__SEED_PATH=/srv/seed

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="GHOSTSEED_",
        env_nested_delimiter="__",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Mode test : limite le nombre de films (50) et de séries (10) traités
    test_mode: bool = Field(default=False)

    radarr: RadarrSettings = Field(default_factory=RadarrSettings)
    sonarr: SonarrSettings = Field(default_factory=SonarrSettings)
    media: MediaSettings = Field(default_factory=MediaSettings)
    torrent: TorrentSettings = Field(default_factory=TorrentSettings)
    upload: UploadSettings = Field(default_factory=UploadSettings)
    naming: NamingSettings = Field(default_factory=NamingSettings)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/ghostseed.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @property
    def radarr_enabled(self) -> bool:
        """Vérifie si Radarr est configuré."""
        return self.radarr.enabled

    @property
    def sonarr_enabled(self) -> bool:
        """Vérifie si Sonarr est configuré."""
        return self.sonarr.enabled
