"""
Routes de dépôt des médias dans le stockage objet.

Seules les images et les vidéos sont acceptées, dans la limite de taille
configurée (50 Mo par défaut).
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from ...adapters.api.supabase_storage import SupabaseStorageClient
from ...config import Settings
from ...utils.constants import ALLOWED_UPLOAD_MIME_PREFIXES
from ..deps import get_settings, get_storage, require_admin
from ..schemas import UploadResponse

router = APIRouter(dependencies=[Depends(require_admin)])


@router.post("/upload", response_model=UploadResponse)
async def upload_file(
    file: UploadFile = File(...),
    bucket: Optional[str] = None,
    settings: Settings = Depends(get_settings),
    storage: SupabaseStorageClient = Depends(get_storage),
):
    """Dépose le fichier et retourne son URL publique."""
    content_type = file.content_type or ""
    if not content_type.startswith(ALLOWED_UPLOAD_MIME_PREFIXES):
        raise HTTPException(
            status_code=400, detail="Only image and video files are allowed"
        )

    data = await file.read(settings.upload_max_bytes + 1)
    if len(data) > settings.upload_max_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail="File too large",
        )
    if not data:
        raise HTTPException(status_code=400, detail="No file uploaded")

    stored = await storage.upload(
        data, file.filename or "upload", bucket=bucket, content_type=content_type
    )
    return stored


@router.delete("/upload/{path:path}")
async def delete_file(
    path: str,
    bucket: Optional[str] = None,
    storage: SupabaseStorageClient = Depends(get_storage),
) -> dict:
    if not await storage.delete(path, bucket=bucket):
        raise HTTPException(status_code=502, detail="Failed to delete file")
    return {"success": True}
