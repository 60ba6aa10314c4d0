"""
Routes des documents légaux.

Un visiteur ne voit que les documents actifs, par identifiant ou par type
(la page "mentions légales" demande /legal-documents/type/legal_notice).
"""

from fastapi import APIRouter, Depends, HTTPException

from ...infrastructure.persistence.repositories import SQLModelLegalDocumentRepository
from ..deps import repository
from ..schemas import LegalDocumentCreate, LegalDocumentRead, LegalDocumentUpdate
from .crud import build_crud_router

router = APIRouter()

_get_repository = repository(SQLModelLegalDocumentRepository)


@router.get("/legal-documents/type/{doc_type}", response_model=LegalDocumentRead)
def get_by_type(doc_type: str, repo: SQLModelLegalDocumentRepository = Depends(_get_repository)):
    document = repo.get_by_type(doc_type, active_only=True)
    if document is None:
        raise HTTPException(status_code=404, detail="Legal document not found")
    return document


@router.get("/legal-documents/{document_id}", response_model=LegalDocumentRead)
def get_document(
    document_id: str, repo: SQLModelLegalDocumentRepository = Depends(_get_repository)
):
    document = repo.get(document_id)
    if document is None or not document.is_active:
        raise HTTPException(status_code=404, detail="Legal document not found")
    return document


router.include_router(
    build_crud_router(
        "/legal-documents",
        SQLModelLegalDocumentRepository,
        LegalDocumentCreate,
        LegalDocumentUpdate,
        LegalDocumentRead,
        entity_name="Legal document",
    )
)
