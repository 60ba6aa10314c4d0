"""
Dépendances partagées de l'application web.

Accès au Container DI porté par l'application, session de base de données
par requête, contrôle d'accès administrateur.
"""

from collections.abc import Callable
from typing import Optional, TypeVar

from fastapi import Depends, Header, HTTPException, Request
from sqlmodel import Session

from ..adapters.api.supabase_storage import SupabaseStorageClient
from ..config import Settings
from ..container import Container
from ..infrastructure.persistence.database import get_session
from ..infrastructure.persistence.repositories import SQLModelContentRepository
from ..services.auth import TokenStore
from ..services.video_cache import VideoCacheService

RepoT = TypeVar("RepoT", bound=SQLModelContentRepository)


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_settings(container: Container = Depends(get_container)) -> Settings:
    return container.config()


def get_token_store(container: Container = Depends(get_container)) -> TokenStore:
    return container.token_store()


def get_video_cache(container: Container = Depends(get_container)) -> VideoCacheService:
    return container.video_cache()


def get_storage(container: Container = Depends(get_container)) -> SupabaseStorageClient:
    """Client du stockage objet ; 503 s'il n'est pas configuré."""
    storage = container.storage_client()
    if storage is None:
        raise HTTPException(status_code=503, detail="Object storage is not configured")
    return storage


def bearer_token(authorization: Optional[str] = Header(default=None)) -> Optional[str]:
    """Jeton extrait de l'en-tête "Authorization: Bearer <jeton>"."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def require_admin(
    token: Optional[str] = Depends(bearer_token),
    tokens: TokenStore = Depends(get_token_store),
) -> str:
    """Refuse la requête (401) sans jeton administrateur valide."""
    if not tokens.verify(token):
        raise HTTPException(status_code=401, detail="Unauthorized")
    return token


def repository(repository_cls: type[RepoT]) -> Callable[..., RepoT]:
    """Dépendance fournissant un repository lié à la session de la requête."""

    def _provide(session: Session = Depends(get_session)) -> RepoT:
        return repository_cls(session)

    return _provide
