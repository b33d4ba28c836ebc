"""
Envoi de torrents vers un tracker Torrust (API REST v1).

POST {api_base}/torrent/upload en multipart :
- title, description, category, tags (liste JSON)
- torrent (fichier application/x-bittorrent)
Authentification : header "Authorization: ApiKey <cle>".

Un 409 dont le corps signale un infohash deja existant est traite
comme un succes (envoi idempotent).
"""

import json
from typing import Optional

import httpx
from loguru import logger

from ghostseed.adapters.api.retry import RateLimitError, request_with_retry
from ghostseed.config import TorrustSettings
from ghostseed.core.errors import UploadError
from ghostseed.core.ports.publishing import ITrackerUploader, UploadRequest


def is_duplicate_response(status_code: int, body: str) -> bool:
    """Vrai si le tracker indique que le torrent existe deja."""
    if status_code != 409:
        return False
    lowered = body.lower()
    return "infohash" in lowered and "already exists" in lowered


class TorrustUploader(ITrackerUploader):
    """
    Uploader Torrust.

    Les categories du tracker sont choisies selon le type de contenu
    de la demande ("movies", "series", "anime").

    Example:
        uploader = TorrustUploader(settings.upload.torrust)
        ok = await uploader.upload(request)
        await uploader.close()
    """

    def __init__(
        self,
        settings: TorrustSettings,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """
        Args:
            settings: Configuration Torrust
            client: Client httpx a utiliser (tests), cree sinon
        """
        self._settings = settings
        self._client = client

    @property
    def name(self) -> str:
        return "torrust"

    @property
    def upload_url(self) -> str:
        return f"{self._settings.api_base.rstrip('/')}/torrent/upload"

    def category_for(self, kind: str) -> str:
        categories = {
            "movies": self._settings.movies_category,
            "series": self._settings.series_category,
            "anime": self._settings.anime_category,
        }
        return categories.get(kind, self._settings.movies_category)

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(120.0, connect=10.0))
        return self._client

    async def upload(self, request: UploadRequest) -> bool:
        """
        Envoie le .torrent vers Torrust.

        Returns:
            True si le tracker a accepte ou possede deja le torrent

        Raises:
            UploadError: Fichier illisible, erreur reseau ou reponse non-2xx
        """
        try:
            torrent_bytes = request.torrent_path.read_bytes()
        except OSError as e:
            raise UploadError(f"Lecture impossible de {request.torrent_path}: {e}") from e

        category = self.category_for(request.category)
        data = {
            "title": request.title,
            "description": request.description_markdown,
            "category": category,
            "tags": json.dumps(self._settings.tags),
        }
        files = {
            "torrent": (
                request.torrent_path.name or "upload.torrent",
                torrent_bytes,
                "application/x-bittorrent",
            )
        }
        headers = {
            "Accept": "application/json",
            "Authorization": f"ApiKey {self._settings.api_key}",
        }

        logger.info(
            "Envoi du torrent vers Torrust",
            url=self.upload_url,
            title=request.title,
            category=category,
        )
        client = await self._get_client()
        try:
            response = await request_with_retry(
                client, "POST", self.upload_url, data=data, files=files, headers=headers
            )
        except (RateLimitError, httpx.TransportError) as e:
            raise UploadError(f"Torrust injoignable : {e}") from e

        logger.debug(
            "Reponse Torrust", status=response.status_code, body=response.text[:500]
        )

        if is_duplicate_response(response.status_code, response.text):
            logger.info(f"Torrent deja present sur le tracker (409) : {request.title}")
            return True

        if response.is_error:
            raise UploadError(
                f"Echec de l'envoi Torrust : HTTP {response.status_code} {response.text[:200]}"
            )
        return True

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
