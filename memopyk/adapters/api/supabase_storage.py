"""
Client Supabase Storage pour le depot et la suppression des medias.

Implemente l'interface IObjectStorage via l'API REST Storage v1 :
- GET    /storage/v1/bucket                       liste des buckets
- POST   /storage/v1/bucket                       creation d'un bucket
- POST   /storage/v1/object/{bucket}/{path}       depot d'un objet
- DELETE /storage/v1/object/{bucket}              suppression (prefixes)
- GET    /storage/v1/object/public/{bucket}/{path} lecture publique

Usage:
    client = SupabaseStorageClient(base_url="https://xyz.supabase.co", service_key="...")
    stored = await client.upload(data, "film.mp4", content_type="video/mp4")
    await client.delete(stored.path)
    await client.close()
"""

import time
from collections.abc import AsyncIterator
from typing import Optional
from urllib.parse import quote

import httpx
from loguru import logger

from memopyk.adapters.api.retry import TransientStorageError, request_with_retry
from memopyk.core.ports.storage import IObjectStorage, StorageError, StoredObject
from memopyk.utils.constants import ALLOWED_UPLOAD_MIME_PREFIXES, DEFAULT_BUCKET
from memopyk.utils.helpers import sanitize_object_name


class SupabaseStorageClient(IObjectStorage):
    """
    Client du stockage objet Supabase.

    - Creation a la demande d'un bucket public (images et videos, 50 Mo max)
    - Depot sous un nom horodate et assaini, sans ecrasement
    - Suppression silencieuse (False en cas d'echec)
    - Relance automatique sur 429

    Attributes:
        STORAGE_PATH: Prefixe de l'API Storage
        UPLOAD_CACHE_CONTROL: Duree de cache HTTP des objets deposes (secondes)
    """

    STORAGE_PATH = "/storage/v1"
    UPLOAD_CACHE_CONTROL = "3600"

    def __init__(
        self,
        base_url: str,
        service_key: str,
        default_bucket: str = DEFAULT_BUCKET,
        file_size_limit: int = 50 * 1024 * 1024,
    ) -> None:
        """
        Initialise le client.

        Args:
            base_url: URL du projet Supabase (sans / final)
            service_key: Cle de service (acces complet au stockage)
            default_bucket: Bucket utilise quand aucun n'est precise
            file_size_limit: Taille maximale d'un objet pour les buckets crees
        """
        self._base_url = base_url.rstrip("/")
        self._service_key = service_key
        self._default_bucket = default_bucket
        self._file_size_limit = file_size_limit
        self._known_buckets: set[str] = set()
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=f"{self._base_url}{self.STORAGE_PATH}",
                headers={
                    "apikey": self._service_key,
                    "Authorization": f"Bearer {self._service_key}",
                },
                timeout=60.0,
            )
        return self._client

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Requete avec relance ; les erreurs reseau deviennent StorageError."""
        try:
            return await request_with_retry(self._get_client(), method, path, **kwargs)
        except TransientStorageError as e:
            raise StorageError(f"Storage unavailable: {e}", e.status_code) from e
        except httpx.HTTPError as e:
            raise StorageError(f"Storage request failed: {e}") from e

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Message d'erreur extrait d'une reponse Storage."""
        try:
            payload = response.json()
        except ValueError:
            return response.text or response.reason_phrase
        if isinstance(payload, dict):
            return str(payload.get("message") or payload.get("error") or payload)
        return str(payload)

    def _bucket(self, bucket: Optional[str]) -> str:
        return bucket or self._default_bucket

    def public_url(self, path: str, bucket: Optional[str] = None) -> str:
        """URL publique d'un objet (chemin encode, / conserves)."""
        return (
            f"{self._base_url}{self.STORAGE_PATH}/object/public/"
            f"{quote(self._bucket(bucket))}/{quote(path)}"
        )

    async def ensure_bucket(self, bucket: Optional[str] = None) -> None:
        """
        Cree le bucket s'il n'existe pas.

        Le bucket cree est public et limite aux images et videos.

        Raises:
            StorageError: Si la liste ou la creation echoue
        """
        name = self._bucket(bucket)
        if name in self._known_buckets:
            return

        response = await self._request("GET", "/bucket")
        if response.status_code != 200:
            raise StorageError(
                f"Failed to list buckets: {self._error_message(response)}",
                response.status_code,
            )
        existing = {b.get("name") for b in response.json()}

        if name not in existing:
            logger.info(f"Creation du bucket de stockage {name}")
            response = await self._request(
                "POST",
                "/bucket",
                json={
                    "id": name,
                    "name": name,
                    "public": True,
                    "allowed_mime_types": [f"{p}*" for p in ALLOWED_UPLOAD_MIME_PREFIXES],
                    "file_size_limit": self._file_size_limit,
                },
            )
            if response.status_code not in (200, 201):
                raise StorageError(
                    f"Failed to create storage bucket: {self._error_message(response)}",
                    response.status_code,
                )

        self._known_buckets.add(name)

    async def upload(
        self,
        data: bytes,
        filename: str,
        bucket: Optional[str] = None,
        content_type: Optional[str] = None,
    ) -> StoredObject:
        """
        Depose un fichier sous "<timestamp ms>_<nom assaini>".

        Raises:
            StorageError: Si le bucket ou le depot echoue
        """
        name = self._bucket(bucket)
        await self.ensure_bucket(name)

        path = f"{int(time.time() * 1000)}_{sanitize_object_name(filename)}"
        headers = {
            "cache-control": f"max-age={self.UPLOAD_CACHE_CONTROL}",
            "x-upsert": "false",
            "content-type": content_type or "application/octet-stream",
        }
        response = await self._request(
            "POST", f"/object/{quote(name)}/{quote(path)}", content=data, headers=headers
        )
        if response.status_code not in (200, 201):
            raise StorageError(
                f"Upload failed: {self._error_message(response)}", response.status_code
            )

        logger.info(f"Objet depose: {name}/{path} ({len(data)} octets)")
        return StoredObject(url=self.public_url(path, name), path=path)

    async def delete(self, path: str, bucket: Optional[str] = None) -> bool:
        """Supprime un objet ; les erreurs sont journalisees, pas levees."""
        name = self._bucket(bucket)
        try:
            response = await self._request(
                "DELETE", f"/object/{quote(name)}", json={"prefixes": [path]}
            )
        except StorageError as e:
            logger.error(f"Suppression impossible de {name}/{path}: {e}")
            return False

        if response.status_code != 200:
            logger.error(
                f"Suppression refusee pour {name}/{path}: {self._error_message(response)}"
            )
            return False
        return True

    async def stream_public(
        self, path: str, bucket: Optional[str] = None
    ) -> tuple[httpx.Response, AsyncIterator[bytes]]:
        """
        Ouvre la lecture en flux d'un objet public.

        Retourne la reponse (statut, en-tetes) et un iterateur de blocs qui
        ferme la reponse une fois consomme.

        Raises:
            StorageError: Erreur reseau
        """
        client = self._get_client()
        request = client.build_request("GET", self.public_url(path, bucket))
        try:
            response = await client.send(request, stream=True)
        except httpx.HTTPError as e:
            raise StorageError(f"Storage request failed: {e}") from e

        async def _body() -> AsyncIterator[bytes]:
            try:
                async for chunk in response.aiter_bytes():
                    yield chunk
            finally:
                await response.aclose()

        return response, _body()

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
