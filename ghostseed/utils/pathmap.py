"""
Traduction des chemins vus par Radarr/Sonarr en chemins locaux.

Les gestionnaires tournent souvent dans un conteneur : un fichier declare
"/data/tv/Show/S01E01.mkv" peut etre monte localement sous
"/mnt/nas/tv/Show/S01E01.mkv". Le prefixe le plus long l'emporte.
"""

from pathlib import Path
from typing import Iterable, Optional

from ghostseed.config import PathMapping


def translate_path(remote_path: str, mappings: Iterable[PathMapping]) -> Optional[str]:
    """
    Traduit un chemin distant avec la correspondance de prefixe la plus longue.

    Un prefixe ne correspond qu'a une frontiere de composant : "/data/tv"
    couvre "/data/tv/x" mais pas "/data/tv2/x".

    Args:
        remote_path: Chemin tel que rapporte par le gestionnaire
        mappings: Correspondances configurees

    Returns:
        Le chemin local, ou None si aucun prefixe ne correspond
    """
    best: Optional[PathMapping] = None
    best_length = -1
    for mapping in mappings:
        root = mapping.remote_root.rstrip("/")
        if remote_path != root and not remote_path.startswith(root + "/"):
            continue
        if len(root) > best_length:
            best, best_length = mapping, len(root)

    if best is None:
        return None
    suffix = remote_path[best_length:]
    return best.local_root.rstrip("/") + suffix


class PathMapper:
    """
    Traducteur de chemins lie a une liste de correspondances.

    Sans correspondance configuree, les chemins sont utilises tels quels
    (gestionnaire et pipeline sur la meme machine).
    """

    def __init__(self, mappings: Iterable[PathMapping] = ()) -> None:
        self._mappings = list(mappings)

    @property
    def is_identity(self) -> bool:
        return not self._mappings

    def translate(self, remote_path: str) -> Optional[Path]:
        if not remote_path:
            return None
        if self.is_identity:
            return Path(remote_path)
        local = translate_path(remote_path, self._mappings)
        return Path(local) if local is not None else None
