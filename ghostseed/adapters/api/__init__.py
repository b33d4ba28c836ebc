"""
Clients HTTP des gestionnaires de bibliotheque.

Ce module fournit les adaptateurs pour communiquer avec :
- Radarr : films et fichiers de films (API v3)
- Sonarr : series, episodes et fichiers d'episodes (API v3)

Infrastructure partagee:
- RateLimitError: Exception pour les erreurs 429
- with_retry: Decorateur avec backoff exponentiel pour gerer le rate limiting

Les clients implementent IRadarrClient et ISonarrClient definis dans
core/ports/api_clients.py.
"""

from ghostseed.adapters.api.radarr_client import RadarrClient
from ghostseed.adapters.api.retry import RateLimitError, request_with_retry, with_retry
from ghostseed.adapters.api.sonarr_client import SonarrClient

__all__ = [
    "RadarrClient",
    "SonarrClient",
    "RateLimitError",
    "with_retry",
    "request_with_retry",
]
