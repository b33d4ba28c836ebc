"""
Couche adaptateurs (infrastructure).

Les adaptateurs implémentent les ports définis dans core/ports/ et fournissent
des implémentations concrètes pour les systèmes externes.

Sous-packages :
- api/ : Clients HTTP Radarr et Sonarr (httpx + tenacity)
- parsing/ : Sonde mediainfo (pymediainfo + diskcache)
- torrent/ : Création des .torrent via intermodal
- upload/ : Envoi vers les trackers (Torrust)
- cli/ : Interface ligne de commande (Typer + Rich)
- file_system : Arborescence de seed (liens symboliques)

Chaque adaptateur dépend de core/ mais core/ ne dépend jamais des adaptateurs.
Cela permet de changer les implémentations sans affecter la logique métier.
"""
