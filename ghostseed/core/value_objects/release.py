"""
Objet valeur d'une unite de release planifiee.

Une unite est ce que le pipeline exporte, transforme en torrent et envoie :
un film, un fichier d'episode, un pack de saison ou une integrale.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from ghostseed.core.value_objects.scene import SceneDecision
from ghostseed.core.value_objects.technical_info import TechnicalInfo


class ReleaseKind(Enum):
    """Type d'unite emise."""

    MOVIE = "movie"
    EPISODE = "episode"
    SEASON_PACK = "season_pack"
    INTEGRALE = "integrale"

    @property
    def is_pack(self) -> bool:
        return self in (ReleaseKind.SEASON_PACK, ReleaseKind.INTEGRALE)


@dataclass(frozen=True)
class PlannedRelease:
    """
    Unite de release prete a etre exportee.

    Attributs :
        kind : Type d'unite
        title : Titre de l'oeuvre (film ou serie)
        decision : Decision du constructeur de noms
        scene_name : Nom final (eventuellement suffixe "-NoTag")
        local_paths : Fichiers locaux, tries et dedupliques
        technical : Informations techniques de reference de l'unite
        heading : Intitule lisible (ex: "S01 Complete", "S01E02 - Pilot")
        year : Annee de l'oeuvre
        overview : Resume a publier
        cover_url : Affiche a publier
        original_scene_name : Nom existant du fichier, si connu
        season : Saison concernee (packs de saison et episodes)
        is_anime : Serie de type anime (categorie du tracker)
    """

    kind: ReleaseKind
    title: str
    decision: SceneDecision
    scene_name: str
    local_paths: tuple[Path, ...]
    technical: TechnicalInfo
    heading: str = ""
    year: Optional[int] = None
    overview: Optional[str] = None
    cover_url: Optional[str] = None
    original_scene_name: Optional[str] = None
    season: Optional[int] = None
    is_anime: bool = False
