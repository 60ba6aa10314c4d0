"""
Prechargement du cache video.

Met en cache toutes les videos affichees publiquement : les deux versions
(EN/FR) des videos d'accueil actives et la video de chaque element actif
de la galerie. Les echecs sont collectes, pas leves : un fichier
inaccessible n'empeche pas de charger les autres.
"""

from dataclasses import dataclass, field
from typing import Optional

from loguru import logger

from memopyk.core.entities.video_cache import CacheInfo, VideoCacheResult
from memopyk.infrastructure.persistence.repositories import (
    SQLModelGalleryItemRepository,
    SQLModelHeroVideoRepository,
)
from memopyk.services.video_cache import VideoCacheService


@dataclass
class WarmupReport:
    """
    Bilan d'un prechargement.

    Attributs :
        hero_en / hero_fr : Noms des fichiers EN / FR mis en cache
        gallery : Noms des fichiers de galerie mis en cache
        errors : Messages d'erreur ("<source> <id>: <raison>")
        cache_info : Etat du cache apres l'operation
    """

    hero_en: list[str] = field(default_factory=list)
    hero_fr: list[str] = field(default_factory=list)
    gallery: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    cache_info: Optional[CacheInfo] = None

    @property
    def cached_count(self) -> int:
        return len(self.hero_en) + len(self.hero_fr) + len(self.gallery)

    def to_dict(self) -> dict:
        """Representation JSON renvoyee par l'API."""
        data: dict = {
            "heroVideos": {"en": self.hero_en, "fr": self.hero_fr},
            "galleryVideos": self.gallery,
            "errors": self.errors,
        }
        if self.cache_info is not None:
            data["cacheInfo"] = {
                "totalFiles": self.cache_info.total_files,
                "totalSizeMB": self.cache_info.total_size_mb,
            }
        return data


class CacheWarmer:
    """Charge dans le cache les videos de tous les contenus actifs."""

    def __init__(
        self,
        video_cache: VideoCacheService,
        hero_repository: SQLModelHeroVideoRepository,
        gallery_repository: SQLModelGalleryItemRepository,
    ) -> None:
        self._cache = video_cache
        self._hero_repo = hero_repository
        self._gallery_repo = gallery_repository

    async def warm_all(self) -> WarmupReport:
        """
        Precharge les videos d'accueil et de galerie actives.

        Les telechargements sont sequentiels : le site a peu de videos et
        l'origine n'a pas a encaisser de rafale.
        """
        report = WarmupReport()

        for hero in self._hero_repo.list(active_only=True):
            for language, url, target in (
                ("en", hero.url_en, report.hero_en),
                ("fr", hero.url_fr, report.hero_fr),
            ):
                result = await self._cache.cache_video(url)
                self._collect(result, target, report, f"Hero video {hero.id} ({language})")

        for item in self._gallery_repo.list_with_video(active_only=True):
            result = await self._cache.cache_video(item.video_url)
            self._collect(result, report.gallery, report, f"Gallery item {item.id}")

        report.cache_info = self._cache.get_cache_info()
        logger.info(
            f"Prechargement termine: {report.cached_count} video(s), "
            f"{len(report.errors)} erreur(s)"
        )
        return report

    @staticmethod
    def _collect(
        result: VideoCacheResult, target: list[str], report: WarmupReport, source: str
    ) -> None:
        if result.success and result.local_path:
            target.append(result.local_path)
        else:
            report.errors.append(f"{source}: {result.error}")
            logger.warning(f"Prechargement echoue pour {source}: {result.error}")
