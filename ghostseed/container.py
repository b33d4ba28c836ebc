"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI : configuration,
vocabulaire de nommage, sonde mediainfo, clients Radarr/Sonarr, export,
creation de torrents et publication.
"""

from typing import Optional

from dependency_injector import containers, providers

from .adapters.api.radarr_client import RadarrClient
from .adapters.api.sonarr_client import SonarrClient
from .adapters.file_system import SeedExporter
from .adapters.parsing.mediainfo_probe import MediaInfoProbe, ProbeCache
from .adapters.torrent.intermodal import IntermodalTorrentCreator
from .adapters.upload.torrust import TorrustUploader
from .config import Settings
from .core.errors import ConfigurationError
from .core.ports.publishing import ITrackerUploader
from .services.naming.service import SceneNamingService
from .services.naming.vocabulary import DEFAULT_VOCABULARY, NamingVocabulary
from .services.packaging import PackagingClassifier, PackagingOptions
from .services.publisher import PublisherService
from .services.release_pipeline import ReleasePipeline


def build_vocabulary(settings: Settings) -> NamingVocabulary:
    """Vocabulaire par defaut avec la politique de langue configuree."""
    return DEFAULT_VOCABULARY.with_language_policy(
        settings.naming.multi_language_tag, settings.naming.language_tags
    )


def build_probe_cache(settings: Settings) -> Optional[ProbeCache]:
    if not settings.media.enable_mediainfo_cache:
        return None
    return ProbeCache(cache_dir=settings.media.mediainfo_cache_dir)


def build_uploaders(settings: Settings) -> list[ITrackerUploader]:
    """
    Uploaders actives par la configuration.

    upload.torrust.enable active Torrust ; a defaut, l'ancienne forme
    upload.tracker = "torrust" est acceptee.

    Raises:
        ConfigurationError: upload.tracker designe un tracker inconnu
    """
    upload = settings.upload
    uploaders: list[ITrackerUploader] = []
    if upload.torrust.enable:
        uploaders.append(TorrustUploader(upload.torrust))

    if not uploaders and upload.tracker:
        if upload.tracker.lower() != "torrust":
            raise ConfigurationError(f"upload.tracker non supporte : {upload.tracker}")
        if not upload.torrust.api_base:
            raise ConfigurationError(
                "upload.tracker vaut 'torrust' mais upload.torrust.api_base est absent"
            )
        uploaders.append(TorrustUploader(upload.torrust))
    return uploaders


def build_radarr_client(settings: Settings) -> Optional[RadarrClient]:
    if not settings.radarr.enabled:
        return None
    return RadarrClient(settings.radarr.base_url, settings.radarr.api_key)


def build_sonarr_client(settings: Settings) -> Optional[SonarrClient]:
    if not settings.sonarr.enabled:
        return None
    return SonarrClient(settings.sonarr.base_url, settings.sonarr.api_key)


def build_packaging_options(settings: Settings) -> PackagingOptions:
    return PackagingOptions(
        only_complete_seasons=settings.sonarr.only_complete_seasons,
        create_integrale_pack_if_complete=settings.sonarr.create_integrale_pack_if_complete,
        per_episode_for_incomplete_seasons=settings.sonarr.per_episode_for_incomplete_seasons,
        append_no_tag_on_missing_group=settings.media.append_no_tag_on_missing_group,
    )


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        pipeline = container.release_pipeline()
        report = await pipeline.run()
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Nommage (stateless - Singletons)
    vocabulary = providers.Singleton(build_vocabulary, settings=config)
    naming_service = providers.Singleton(SceneNamingService, vocabulary=vocabulary)

    # Sonde technique avec cache disque optionnel
    probe_cache = providers.Singleton(build_probe_cache, settings=config)
    technical_probe = providers.Singleton(MediaInfoProbe, cache=probe_cache)

    # Adapters - implementations concretes des ports
    seed_exporter = providers.Singleton(SeedExporter, probe=technical_probe)
    torrent_creator = providers.Singleton(
        IntermodalTorrentCreator,
        announce_url=config.provided.torrent.announce_url,
        private=config.provided.torrent.private,
        output_dir=config.provided.torrent.output_dir,
        binary=config.provided.torrent.imdl_binary,
    )

    # Clients API - None si le gestionnaire n'est pas configure
    radarr_client = providers.Singleton(build_radarr_client, settings=config)
    sonarr_client = providers.Singleton(build_sonarr_client, settings=config)

    # Publication
    uploaders = providers.Singleton(build_uploaders, settings=config)
    publisher = providers.Singleton(
        PublisherService,
        uploaders=uploaders,
        dry_run=config.provided.upload.dry_run,
    )

    # Regroupement des series
    packaging_options = providers.Singleton(build_packaging_options, settings=config)
    packaging_classifier = providers.Factory(
        PackagingClassifier,
        naming=naming_service,
        probe=technical_probe,
        options=packaging_options,
    )

    # Pipeline - Factory, un classifieur neuf par execution
    release_pipeline = providers.Factory(
        ReleasePipeline,
        settings=config,
        naming=naming_service,
        probe=technical_probe,
        classifier=packaging_classifier,
        exporter=seed_exporter,
        torrent_creator=torrent_creator,
        publisher=publisher,
        radarr_client=radarr_client,
        sonarr_client=sonarr_client,
    )
