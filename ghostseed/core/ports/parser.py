"""
Interface port pour la sonde technique des fichiers video.

La sonde est un collaborateur externe du moteur de nommage : elle fournit
un TechnicalInfo par chemin local, que le moteur traite comme faisant
autorite sur toute deduction tiree de la chaine de qualite.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from ghostseed.core.value_objects.technical_info import TechnicalInfo


class ITechnicalProbe(ABC):
    """
    Interface pour l'extraction des caracteristiques techniques.

    L'implementation utilisera typiquement pymediainfo, avec un cache
    disque optionnel indexe par chemin.
    """

    @abstractmethod
    def probe(self, file_path: Path) -> TechnicalInfo:
        """
        Sonde un fichier video.

        Args:
            file_path: Chemin local complet vers le fichier video

        Retourne:
            TechnicalInfo extrait. Un TechnicalInfo vide si la sonde echoue :
            l'absence d'information omet simplement des segments du nom.
        """
        ...

    @abstractmethod
    def text_report(self, file_path: Path) -> Optional[str]:
        """
        Produit le rapport textuel mediainfo (contenu du fichier .nfo).

        Retourne:
            Le rapport, ou None si la sonde echoue
        """
        ...
