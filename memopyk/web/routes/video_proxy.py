"""
Proxy des médias du stockage objet.

Les vidéos passent par le cache disque : premier accès = téléchargement
complet, accès suivants servis localement avec prise en charge de Range.
Les images sont relayées telles quelles.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException
from fastapi.responses import Response, StreamingResponse

from ...adapters.api.supabase_storage import SupabaseStorageClient
from ...core.entities.video_cache import CachedVideo
from ...services.video_cache import VideoCacheService
from ..deps import get_storage, get_video_cache

router = APIRouter()


def cached_video_response(video: CachedVideo) -> Response:
    """Convertit un CachedVideo en réponse HTTP."""
    if video.status == 404:
        raise HTTPException(status_code=404, detail="Video not found in cache")
    if video.body is None:
        return Response(status_code=video.status, headers=video.headers)
    return StreamingResponse(video.body, status_code=video.status, headers=video.headers)


@router.get("/video-proxy/{bucket}/{filename}")
async def video_proxy(
    bucket: str,
    filename: str,
    range_header: Optional[str] = Header(default=None, alias="range"),
    authorization: Optional[str] = Header(default=None),
    storage: SupabaseStorageClient = Depends(get_storage),
    cache: VideoCacheService = Depends(get_video_cache),
):
    url = storage.public_url(filename, bucket)
    cached_name = cache.filename_for(url)

    if not cache.is_cached(cached_name):
        headers = {"Authorization": authorization} if authorization else None
        result = await cache.cache_video(url, cached_name, headers=headers)
        if not result.success:
            raise HTTPException(status_code=502, detail=f"Failed to fetch video: {result.error}")

    return cached_video_response(cache.serve_cached_video(cached_name, range_header))


@router.get("/image-proxy/{bucket}/{filename}")
async def image_proxy(
    bucket: str,
    filename: str,
    storage: SupabaseStorageClient = Depends(get_storage),
):
    response, body = await storage.stream_public(filename, bucket)
    if response.status_code != 200:
        await response.aclose()
        if response.status_code == 404:
            raise HTTPException(status_code=404, detail="Image not found")
        raise HTTPException(status_code=502, detail=f"Storage returned {response.status_code}")

    headers = {"Cache-Control": "public, max-age=3600"}
    if "content-length" in response.headers:
        headers["Content-Length"] = response.headers["content-length"]
    return StreamingResponse(
        body,
        media_type=response.headers.get("content-type", "application/octet-stream"),
        headers=headers,
    )
