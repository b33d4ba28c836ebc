"""
Couche domaine (core).

Contient les entités, ports (interfaces abstraites), objets valeur et
exceptions. Cette couche n'a AUCUNE dépendance vers l'infrastructure
(adapters, frameworks, HTTP).

Sous-packages :
- entities/ : Enregistrements Radarr/Sonarr (MovieRecord, SeriesRecord...)
- ports/ : Interfaces abstraites définissant les contrats pour les adaptateurs
- value_objects/ : Objets valeur immutables (TechnicalInfo, hints, SceneDecision)
"""
