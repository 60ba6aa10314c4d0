"""
Relance avec backoff exponentiel des appels au stockage objet.

Les reponses 429 (rate limiting) sont converties en TransientStorageError
puis relancees avec un delai croissant et du jitter. Les autres statuts sont
propages immediatement.

Le telechargement des videos vers le cache n'utilise PAS ce mecanisme :
un echec y est rapporte tel quel et l'appelant decide de relancer.
"""

from typing import Optional

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)

# Statuts consideres comme transitoires
RETRYABLE_STATUSES = frozenset({429})


class TransientStorageError(Exception):
    """
    Reponse transitoire du stockage (429).

    Attributes:
        status_code: Statut HTTP recu
        retry_after: Secondes a attendre (header Retry-After), ou None
    """

    def __init__(self, status_code: int, retry_after: Optional[int] = None) -> None:
        self.status_code = status_code
        self.retry_after = retry_after
        super().__init__(f"HTTP {status_code}, retry after: {retry_after}s")


def _parse_retry_after(value: Optional[str]) -> Optional[int]:
    """Header Retry-After en secondes (la forme date HTTP est ignoree)."""
    if value and value.strip().isdigit():
        return int(value.strip())
    return None


def with_retry(max_attempts: int = 4, max_wait: int = 30):
    """
    Decorateur relancant une coroutine sur TransientStorageError.

    Args:
        max_attempts: Nombre maximum de tentatives
        max_wait: Delai maximum entre deux tentatives, en secondes
    """
    return retry(
        retry=retry_if_exception_type(TransientStorageError),
        wait=wait_random_exponential(multiplier=1, min=1, max=max_wait),
        stop=stop_after_attempt(max_attempts),
        reraise=True,
    )


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 4,
    max_wait: int = 30,
    **kwargs,
) -> httpx.Response:
    """
    Execute une requete HTTP en relancant les reponses transitoires.

    Contrairement a raise_for_status, la reponse est retournee telle quelle
    pour les autres statuts : c'est a l'appelant d'interpreter un 4xx/5xx
    (un 404 sur une suppression n'est pas forcement une erreur).

    Raises:
        TransientStorageError: Si le statut reste transitoire apres max_attempts
        httpx.HTTPError: Erreurs reseau (non relancees)
    """

    @with_retry(max_attempts=max_attempts, max_wait=max_wait)
    async def _do_request() -> httpx.Response:
        response = await client.request(method, url, **kwargs)
        if response.status_code in RETRYABLE_STATUSES:
            raise TransientStorageError(
                response.status_code,
                _parse_retry_after(response.headers.get("Retry-After")),
            )
        return response

    return await _do_request()
