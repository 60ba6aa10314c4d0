"""
Implementation SQLModel du repository SeoSetting.
"""

from typing import Optional

from sqlmodel import select

from memopyk.infrastructure.persistence.models import SeoSettingModel
from memopyk.infrastructure.persistence.repositories.base import SQLModelContentRepository


class SQLModelSeoSettingRepository(SQLModelContentRepository[SeoSettingModel]):
    """Repository SQLModel pour les metadonnees SEO, triees par page."""

    model = SeoSettingModel
    order_by = ("page",)

    def get_by_page(self, page: str) -> Optional[SeoSettingModel]:
        """Recupere les reglages SEO d'une page."""
        statement = select(SeoSettingModel).where(SeoSettingModel.page == page)
        return self._session.exec(statement).first()
