"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Les ports sont les frontières de l'architecture hexagonale. Ils définissent
ce dont le domaine a besoin du monde extérieur sans spécifier
comment ces besoins sont satisfaits.

Ports client API : Contrats pour les gestionnaires de bibliothèque
- IRadarrClient : Films et fichiers de films
- ISonarrClient : Séries, épisodes et fichiers d'épisodes

Ports techniques :
- ITechnicalProbe : Sonde mediainfo d'un fichier vidéo
- ISeedExporter : Arborescence de liens symboliques pour le seed
- ITorrentCreator : Création du fichier .torrent
- ITrackerUploader : Envoi vers un tracker privé
"""

from ghostseed.core.ports.api_clients import IRadarrClient, ISonarrClient
from ghostseed.core.ports.file_system import ISeedExporter
from ghostseed.core.ports.parser import ITechnicalProbe
from ghostseed.core.ports.publishing import (
    ITorrentCreator,
    ITrackerUploader,
    UploadRequest,
)

__all__ = [
    # Clients API
    "IRadarrClient",
    "ISonarrClient",
    # Technique
    "ITechnicalProbe",
    "ISeedExporter",
    "ITorrentCreator",
    "ITrackerUploader",
    "UploadRequest",
]
