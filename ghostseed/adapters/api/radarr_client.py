"""
Client Radarr API v3 pour les films.

Implemente IRadarrClient : liste des films avec leur fichier.
Reference API: https://radarr.video/docs/api/
"""

from ghostseed.adapters.api.arr_client import ArrApiClient
from ghostseed.core.entities.library import MovieRecord
from ghostseed.core.ports.api_clients import IRadarrClient


class RadarrClient(ArrApiClient, IRadarrClient):
    """
    Client Radarr.

    Example:
        client = RadarrClient("http://localhost:7878", api_key="...")
        movies = await client.list_movies()
        await client.close()
    """

    SERVICE = "radarr"

    async def list_movies(self) -> list[MovieRecord]:
        """Liste tous les films (le filtrage sur le fichier est fait par l'appelant)."""
        payload = await self._get_json("/movie")
        return [MovieRecord.from_api(item) for item in payload or []]
