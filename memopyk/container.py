"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI et l'API web :
configuration, stockage objet, cache video, jetons d'administration et
repositories SQLModel.
"""

from typing import Optional

from dependency_injector import containers, providers

from .adapters.api.supabase_storage import SupabaseStorageClient
from .config import Settings
from .infrastructure.persistence.database import get_session, init_db
from .infrastructure.persistence.repositories import (
    SQLModelGalleryItemRepository,
    SQLModelHeroVideoRepository,
)
from .services.auth import TokenStore
from .services.cache_warmer import CacheWarmer
from .services.video_cache import VideoCacheService


def build_storage_client(settings: Settings) -> Optional[SupabaseStorageClient]:
    """Client de stockage, ou None si l'URL ou la cle de service manquent."""
    if not settings.storage_enabled:
        return None
    return SupabaseStorageClient(
        base_url=settings.supabase_url,
        service_key=settings.supabase_service_key,
        default_bucket=settings.storage_bucket,
        file_size_limit=settings.upload_max_bytes,
    )


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Initialise la DB une fois
        cache = container.video_cache()
        hero_repo = container.hero_video_repository()

    Pour l'API web, la configuration peut etre imposee :
        container.config.override(providers.Object(settings))
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Database - Resource pour initialisation unique
    database = providers.Resource(init_db)

    # Session factory - nouvelle session a chaque appel (CLI)
    session = providers.Factory(lambda: next(get_session()))

    # Stockage objet - None si non configure
    storage_client = providers.Singleton(build_storage_client, settings=config)

    # Cache video - Singleton : la map des telechargements en cours doit etre unique
    video_cache = providers.Singleton(
        VideoCacheService,
        cache_dir=config.provided.cache_dir,
        timeout=config.provided.cache_download_timeout,
    )

    # Jetons d'administration en memoire
    token_store = providers.Singleton(
        TokenStore,
        admin_password=config.provided.admin_password,
        ttl_seconds=config.provided.token_ttl_seconds,
    )

    # Repositories - Factory pour nouvelle instance avec session fraiche
    hero_video_repository = providers.Factory(
        SQLModelHeroVideoRepository,
        session=session,
    )
    gallery_item_repository = providers.Factory(
        SQLModelGalleryItemRepository,
        session=session,
    )

    # Prechargement du cache (CLI)
    cache_warmer = providers.Factory(
        CacheWarmer,
        video_cache=video_cache,
        hero_repository=hero_video_repository,
        gallery_repository=gallery_item_repository,
    )
