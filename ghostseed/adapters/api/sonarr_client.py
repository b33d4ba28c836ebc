"""
Client Sonarr API v3 pour les series TV.

Implemente ISonarrClient : liste des series, de leurs episodes et de
leurs fichiers d'episodes.
Reference API: https://sonarr.tv/docs/api/
"""

from ghostseed.adapters.api.arr_client import ArrApiClient
from ghostseed.core.entities.library import (
    EpisodeFileRecord,
    EpisodeRecord,
    SeriesRecord,
)
from ghostseed.core.ports.api_clients import ISonarrClient


class SonarrClient(ArrApiClient, ISonarrClient):
    """
    Client Sonarr.

    Example:
        client = SonarrClient("http://localhost:8989", api_key="...")
        series = await client.list_series()
        episodes = await client.list_episodes(series[0].id)
        await client.close()
    """

    SERVICE = "sonarr"

    async def list_series(self) -> list[SeriesRecord]:
        payload = await self._get_json("/series")
        return [SeriesRecord.from_api(item) for item in payload or []]

    async def list_episodes(self, series_id: int) -> list[EpisodeRecord]:
        payload = await self._get_json("/episode", params={"seriesId": series_id})
        return [EpisodeRecord.from_api(item) for item in payload or []]

    async def list_episode_files(self, series_id: int) -> list[EpisodeFileRecord]:
        payload = await self._get_json("/episodefile", params={"seriesId": series_id})
        return [EpisodeFileRecord.from_api(item) for item in payload or []]
