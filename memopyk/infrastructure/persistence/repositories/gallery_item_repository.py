"""
Implementation SQLModel du repository GalleryItem.
"""

from memopyk.infrastructure.persistence.models import GalleryItemModel
from memopyk.infrastructure.persistence.repositories.base import SQLModelContentRepository


class SQLModelGalleryItemRepository(SQLModelContentRepository[GalleryItemModel]):
    """Repository SQLModel pour les elements de la galerie."""

    model = GalleryItemModel
    order_by = ("order_index", "created_at")

    def list_with_video(self, active_only: bool = True) -> list[GalleryItemModel]:
        """Liste les elements qui ont une video (candidats au cache local)."""
        return [item for item in self.list(active_only=active_only) if item.video_url]
