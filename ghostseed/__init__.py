"""
GhostSeed - Normalisation des noms de release et publication de torrents.

Ce package lit les bibliothèques Radarr (films) et Sonarr (séries), reconstruit
un nom de release canonique pour chaque fichier ou pack de saison, exporte une
arborescence de seed, crée le .torrent et l'envoie vers les trackers configurés.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités, ports, objets valeur)
- services/ : Couche application (nommage, regroupement, pipeline, publication)
- adapters/ : Couche infrastructure (CLI, clients HTTP, mediainfo, imdl, trackers)
"""

__version__ = "0.1.0"
