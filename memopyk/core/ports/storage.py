"""
Interface port pour le stockage objet des médias.

L'implémentation concrète (Supabase Storage) se trouve dans
memopyk.adapters.api.supabase_storage.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


class StorageError(Exception):
    """
    Échec d'une opération sur le stockage objet.

    Attributs :
        status_code : Code HTTP renvoyé par le stockage (None si erreur réseau)
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


@dataclass(frozen=True)
class StoredObject:
    """
    Objet déposé dans un bucket.

    Attributs :
        url : URL publique de l'objet
        path : Chemin de l'objet dans le bucket
    """

    url: str
    path: str


class IObjectStorage(ABC):
    """Contrat du stockage objet : dépôt, suppression, URL publique."""

    @abstractmethod
    async def upload(
        self,
        data: bytes,
        filename: str,
        bucket: Optional[str] = None,
        content_type: Optional[str] = None,
    ) -> StoredObject:
        """Dépose un fichier et retourne son URL publique. Lève StorageError."""
        ...

    @abstractmethod
    async def delete(self, path: str, bucket: Optional[str] = None) -> bool:
        """Supprime un objet. Retourne False en cas d'échec, sans lever."""
        ...

    @abstractmethod
    def public_url(self, path: str, bucket: Optional[str] = None) -> str:
        """Construit l'URL publique d'un objet."""
        ...
