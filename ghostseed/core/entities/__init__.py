"""
Library manager entities.

Records with identity returned by Radarr and Sonarr.

Exports:
- MovieRecord: Radarr movie with its file
- SeriesRecord: Sonarr series
- EpisodeRecord: Sonarr episode
- EpisodeFileRecord: Sonarr episode file
"""

from ghostseed.core.entities.library import (
    EpisodeFileRecord,
    EpisodeRecord,
    MovieRecord,
    SeriesRecord,
)

__all__ = [
    "MovieRecord",
    "SeriesRecord",
    "EpisodeRecord",
    "EpisodeFileRecord",
]
