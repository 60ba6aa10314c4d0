"""
Routes d'administration du cache vidéo.

Permettent au back-office de consulter le cache, de précharger une vidéo
ou toutes les vidéos actives, de forcer un retéléchargement et de
supprimer un fichier.
"""

from fastapi import APIRouter, Depends, HTTPException

from ...core.entities.video_cache import VideoCacheResult
from ...infrastructure.persistence.repositories import (
    SQLModelGalleryItemRepository,
    SQLModelHeroVideoRepository,
)
from ...services.cache_warmer import CacheWarmer
from ...services.video_cache import VideoCacheService
from ..deps import get_video_cache, repository, require_admin
from ..schemas import GalleryVideoCacheRequest, HeroVideoCacheRequest, RecacheRequest

router = APIRouter(prefix="/cache", dependencies=[Depends(require_admin)])

_hero_repository = repository(SQLModelHeroVideoRepository)
_gallery_repository = repository(SQLModelGalleryItemRepository)


def _cache_response(result: VideoCacheResult, url: str) -> dict:
    if not result.success:
        raise HTTPException(status_code=502, detail=f"Failed to cache video: {result.error}")
    return {**result.to_dict(), "url": url}


@router.get("/status")
def cache_status(cache: VideoCacheService = Depends(get_video_cache)) -> dict:
    info = cache.get_cache_info()
    return {
        "totalFiles": info.total_files,
        "totalSizeMB": info.total_size_mb,
        "files": info.files,
        "cacheDirectory": str(info.cache_dir),
        "status": "active",
    }


@router.post("/hero-video")
async def cache_hero_video(
    payload: HeroVideoCacheRequest,
    cache: VideoCacheService = Depends(get_video_cache),
    repo: SQLModelHeroVideoRepository = Depends(_hero_repository),
) -> dict:
    hero = repo.get(payload.id)
    if hero is None:
        raise HTTPException(status_code=404, detail="Hero video not found")
    url = hero.url_en if payload.language == "en" else hero.url_fr
    return _cache_response(await cache.cache_video(url), url)


@router.post("/gallery-video")
async def cache_gallery_video(
    payload: GalleryVideoCacheRequest,
    cache: VideoCacheService = Depends(get_video_cache),
    repo: SQLModelGalleryItemRepository = Depends(_gallery_repository),
) -> dict:
    item = repo.get(payload.id)
    if item is None:
        raise HTTPException(status_code=404, detail="Gallery item not found")
    if not item.video_url:
        raise HTTPException(status_code=400, detail="Gallery item has no video")
    return _cache_response(await cache.cache_video(item.video_url), item.video_url)


@router.post("/all-videos")
async def cache_all_videos(
    cache: VideoCacheService = Depends(get_video_cache),
    hero_repo: SQLModelHeroVideoRepository = Depends(_hero_repository),
    gallery_repo: SQLModelGalleryItemRepository = Depends(_gallery_repository),
) -> dict:
    report = await CacheWarmer(cache, hero_repo, gallery_repo).warm_all()
    return {"success": not report.errors, **report.to_dict()}


@router.post("/recache")
async def recache_video(
    payload: RecacheRequest, cache: VideoCacheService = Depends(get_video_cache)
) -> dict:
    return _cache_response(await cache.recache_video(payload.url), payload.url)


@router.delete("/{filename}")
def delete_cached_video(filename: str, cache: VideoCacheService = Depends(get_video_cache)) -> dict:
    if not cache.delete_cached_video(filename):
        raise HTTPException(status_code=404, detail="Cached video not found")
    return {"success": True, "message": f"{filename} removed from cache"}
