"""Routes de la galerie."""

from ...infrastructure.persistence.repositories import SQLModelGalleryItemRepository
from ..schemas import GalleryItemCreate, GalleryItemRead, GalleryItemUpdate
from .crud import build_crud_router

router = build_crud_router(
    "/gallery-items",
    SQLModelGalleryItemRepository,
    GalleryItemCreate,
    GalleryItemUpdate,
    GalleryItemRead,
    entity_name="Gallery item",
)
