"""Routes des métadonnées SEO par page."""

from fastapi import APIRouter, Depends, HTTPException

from ...infrastructure.persistence.repositories import SQLModelSeoSettingRepository
from ..deps import repository
from ..schemas import SeoSettingCreate, SeoSettingRead, SeoSettingUpdate
from .crud import build_crud_router

router = APIRouter()


@router.get("/seo-settings/page/{page}", response_model=SeoSettingRead)
def get_page_settings(
    page: str,
    repo: SQLModelSeoSettingRepository = Depends(repository(SQLModelSeoSettingRepository)),
):
    """Métadonnées d'une page, lues par le site public."""
    setting = repo.get_by_page(page)
    if setting is None:
        raise HTTPException(status_code=404, detail="SEO settings not found")
    return setting


router.include_router(
    build_crud_router(
        "/seo-settings",
        SQLModelSeoSettingRepository,
        SeoSettingCreate,
        SeoSettingUpdate,
        SeoSettingRead,
        entity_name="SEO settings",
        public_list=False,
    )
)
