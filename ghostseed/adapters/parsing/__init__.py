"""
Adaptateurs de sonde technique pour GhostSeed.

Ce package contient l'implementation concrete de ITechnicalProbe :
- MediaInfoProbe : Extrait les caracteristiques techniques avec pymediainfo
- ProbeCache : Cache disque (diskcache) indexe par chemin et date de modification
"""

from ghostseed.adapters.parsing.mediainfo_probe import MediaInfoProbe, ProbeCache

__all__ = [
    "MediaInfoProbe",
    "ProbeCache",
]
