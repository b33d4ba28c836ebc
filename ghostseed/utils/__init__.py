"""
Utilitaires partages pour GhostSeed.

Ce module contient la traduction des chemins distants en chemins locaux.
"""

from ghostseed.utils.pathmap import PathMapper, translate_path

__all__ = [
    "PathMapper",
    "translate_path",
]
