"""
Routes des questions fréquentes.

En plus du CRUD, la page publique récupère les questions actives déjà
regroupées par section.
"""

from fastapi import APIRouter, Depends

from ...infrastructure.persistence.repositories import SQLModelFaqRepository
from ..deps import repository
from ..schemas import FaqCreate, FaqRead, FaqSectionRead, FaqUpdate
from .crud import build_crud_router

router = APIRouter()


@router.get("/faqs/sections", response_model=list[FaqSectionRead])
def list_sections(repo: SQLModelFaqRepository = Depends(repository(SQLModelFaqRepository))):
    """Questions actives groupées par section, dans l'ordre d'affichage."""
    return repo.list_grouped(active_only=True)


router.include_router(
    build_crud_router(
        "/faqs",
        SQLModelFaqRepository,
        FaqCreate,
        FaqUpdate,
        FaqRead,
        entity_name="FAQ",
    )
)
