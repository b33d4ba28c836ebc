"""
Base commune des clients Radarr et Sonarr (API v3).

Les deux gestionnaires partagent le meme schema d'authentification
(header X-Api-Key) et le meme prefixe /api/v3. Les erreurs HTTP et
reseau sont converties en LibraryApiError.
"""

from typing import Any, Optional

import httpx
from loguru import logger

from ghostseed.adapters.api.retry import RateLimitError, request_with_retry
from ghostseed.core.errors import LibraryApiError


class ArrApiClient:
    """
    Client HTTP minimal pour une instance *arr.

    Utilise un client httpx unique (connection pooling), cree a la
    premiere requete.

    Attributes:
        API_PREFIX: Prefixe des routes de l'API v3
        SERVICE: Nom du gestionnaire (pour les logs et erreurs)
    """

    API_PREFIX = "/api/v3"
    SERVICE = "arr"

    def __init__(
        self,
        base_url: str,
        api_key: str,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """
        Args:
            base_url: URL de l'instance (ex: "http://localhost:8989")
            api_key: Cle API de l'instance
            client: Client httpx a utiliser (tests), cree sinon
        """
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, cree s'il n'existe pas."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=httpx.Timeout(30.0, connect=10.0),
                headers={"X-Api-Key": self._api_key, "Accept": "application/json"},
            )
        return self._client

    async def _get_json(self, route: str, params: Optional[dict[str, Any]] = None) -> Any:
        """
        GET sur une route de l'API v3.

        Args:
            route: Route relative (ex: "/series")
            params: Parametres de requete

        Returns:
            Liste JSON decodee (None si le corps vaut null)

        Raises:
            LibraryApiError: Reponse non-2xx, 429 persistant, erreur HTTP
                ou corps qui n'est pas une liste JSON
        """
        client = await self._get_client()
        url = f"{self.API_PREFIX}{route}"
        logger.debug(f"{self.SERVICE} GET {url}", params=params)
        try:
            response = await request_with_retry(client, "GET", url, params=params)
        except RateLimitError as e:
            raise LibraryApiError(f"{self.SERVICE}: {e}", status_code=429) from e
        except httpx.HTTPError as e:
            raise LibraryApiError(f"{self.SERVICE}: erreur HTTP sur {url}: {e}") from e

        if response.is_error:
            raise LibraryApiError(
                f"{self.SERVICE}: HTTP {response.status_code} sur {url}",
                status_code=response.status_code,
            )
        try:
            payload = response.json()
        except ValueError as e:
            # Page HTML d'un proxy d'authentification, corps tronque...
            raise LibraryApiError(
                f"{self.SERVICE}: reponse non JSON sur {url}",
                status_code=response.status_code,
            ) from e
        if payload is not None and not isinstance(payload, list):
            raise LibraryApiError(
                f"{self.SERVICE}: liste attendue sur {url}, recu {type(payload).__name__}",
                status_code=response.status_code,
            )
        return payload

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
