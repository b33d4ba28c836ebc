"""
Indices de nommage fournis par les gestionnaires de bibliotheque.

Les indices (hints) sont les champs structures issus de Radarr/Sonarr
utilises par le constructeur de noms de release. Trois formes existent
selon le type de media : film, episode, pack.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class MovieHints:
    """
    Indices pour un film.

    Attributs :
        title : Titre de l'oeuvre
        year : Annee de sortie
        quality : Chaine de qualite libre du gestionnaire (ex: "WEBDL-1080p")
        release_group : Groupe de release brut
    """

    title: str
    year: Optional[int] = None
    quality: Optional[str] = None
    release_group: Optional[str] = None


@dataclass(frozen=True)
class EpisodeHints:
    """
    Indices pour un fichier d'episode (eventuellement multi-episodes).

    Attributs :
        series_title : Titre de la serie
        series_year : Annee de la serie
        season_number : Numero de saison
        episode_numbers : Numeros d'episode (plusieurs pour un fichier combine)
        absolute_episode_numbers : Numerotation absolue (anime)
        quality : Chaine de qualite libre
        release_group : Groupe de release brut
    """

    series_title: str
    series_year: Optional[int] = None
    season_number: Optional[int] = None
    episode_numbers: tuple[int, ...] = ()
    absolute_episode_numbers: tuple[int, ...] = ()
    quality: Optional[str] = None
    release_group: Optional[str] = None


@dataclass(frozen=True)
class PackHints:
    """
    Indices pour un pack (saison complete ou integrale).

    Attributs :
        title : Titre de l'oeuvre
        year : Annee optionnelle
        pack_tag : Marqueur du pack (ex: "S01", "INTEGRALE")
        quality : Premiere chaine de qualite non vide du pack
        release_group : Groupe uniquement s'il est unanime sur le pack
    """

    title: str
    pack_tag: str
    year: Optional[int] = None
    quality: Optional[str] = None
    release_group: Optional[str] = None
