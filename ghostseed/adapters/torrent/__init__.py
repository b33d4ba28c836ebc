"""
Adaptateurs de creation de torrents.

- IntermodalTorrentCreator : Appelle la CLI imdl (intermodal)
"""

from ghostseed.adapters.torrent.intermodal import IntermodalTorrentCreator

__all__ = ["IntermodalTorrentCreator"]
