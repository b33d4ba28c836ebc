"""
Mecanisme de retry avec backoff exponentiel pour Radarr, Sonarr et les trackers.

Gere automatiquement les erreurs 429 (rate limiting) en relancant
les requetes avec un delai croissant et du jitter aleatoire.

Usage:
    # Avec le decorateur
    @with_retry(max_attempts=5, max_wait=60)
    async def list_series():
        ...

    # Avec la fonction helper
    response = await request_with_retry(client, "GET", "/api/v3/series")
"""

from typing import Callable, Optional

import httpx
from loguru import logger
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)


class RateLimitError(Exception):
    """
    Exception levee quand le serveur retourne 429 Too Many Requests.

    Attributes:
        retry_after: Nombre de secondes a attendre (depuis le header Retry-After),
                     ou None si non specifie ou illisible.
    """

    def __init__(self, retry_after: Optional[int] = None) -> None:
        self.retry_after = retry_after
        super().__init__(f"Rate limited. Retry after: {retry_after}s")


def _parse_retry_after(value: Optional[str]) -> Optional[int]:
    """Retry-After en secondes ; la forme date HTTP est ignoree."""
    if value and value.strip().isdigit():
        return int(value.strip())
    return None


def _log_retry(state: RetryCallState) -> None:
    logger.debug(f"429 recu, nouvelle tentative ({state.attempt_number})")


def wait_retry_after(max_wait: int = 60) -> Callable[[RetryCallState], float]:
    """
    Strategie d'attente tenacity : le Retry-After du serveur s'il est
    connu (plafonne a max_wait), sinon backoff exponentiel avec jitter.
    """
    fallback = wait_random_exponential(multiplier=1, min=1, max=max_wait)

    def _wait(state: RetryCallState) -> float:
        error = state.outcome.exception() if state.outcome is not None else None
        if isinstance(error, RateLimitError) and error.retry_after is not None:
            return float(min(error.retry_after, max_wait))
        return fallback(state)

    return _wait


def with_retry(max_attempts: int = 5, max_wait: int = 60):
    """
    Decorateur pour relancer sur RateLimitError.

    Attend la duree du header Retry-After quand le serveur la fournit,
    sinon utilise wait_random_exponential pour ajouter du jitter et eviter
    que plusieurs clients relancent en meme temps.

    Args:
        max_attempts: Nombre maximum de tentatives (defaut: 5)
        max_wait: Delai maximum entre les tentatives en secondes (defaut: 60)

    Returns:
        Decorateur a appliquer sur une fonction async
    """
    return retry(
        retry=retry_if_exception_type(RateLimitError),
        wait=wait_retry_after(max_wait),
        stop=stop_after_attempt(max_attempts),
        before_sleep=_log_retry,
        reraise=True,
    )


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 5,
    **kwargs,
) -> httpx.Response:
    """
    Execute une requete HTTP avec retry automatique sur 429.

    Convertit les reponses 429 en RateLimitError et relance avec
    backoff exponentiel. Les autres reponses sont retournees telles
    quelles : l'appelant decide de ce qu'est un succes (un 409 peut
    en etre un pour un tracker).

    Args:
        client: Client httpx async a utiliser
        method: Methode HTTP (GET, POST, etc.)
        url: URL a appeler (relative a base_url du client, ou absolue)
        max_attempts: Nombre maximum de tentatives (defaut: 5)
        **kwargs: Arguments supplementaires passes a client.request()

    Returns:
        httpx.Response (tout statut autre que 429)

    Raises:
        RateLimitError: Si 429 apres epuisement des tentatives
        httpx.TransportError: Erreur reseau (non relancee)
    """

    @with_retry(max_attempts=max_attempts)
    async def _do_request() -> httpx.Response:
        response = await client.request(method, url, **kwargs)
        if response.status_code == 429:
            raise RateLimitError(_parse_retry_after(response.headers.get("Retry-After")))
        return response

    return await _do_request()
