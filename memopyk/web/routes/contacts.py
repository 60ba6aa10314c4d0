"""
Routes des demandes de contact.

Le formulaire du site est public ; la consultation et le suivi des
demandes sont réservés au back-office.
"""

from fastapi import APIRouter, Depends

from ...infrastructure.persistence.repositories import SQLModelContactRepository
from ..deps import repository, require_admin
from ..schemas import ContactCreate, ContactRead, ContactStatus, ContactUpdate
from .crud import build_crud_router

router = APIRouter()


@router.get(
    "/contacts/status/{status}",
    response_model=list[ContactRead],
    dependencies=[Depends(require_admin)],
)
def list_by_status(
    status: ContactStatus,
    repo: SQLModelContactRepository = Depends(repository(SQLModelContactRepository)),
):
    """Demandes dans un statut donné (new, contacted...), les plus récentes d'abord."""
    return repo.list_by_status(status)


router.include_router(
    build_crud_router(
        "/contacts",
        SQLModelContactRepository,
        ContactCreate,
        ContactUpdate,
        ContactRead,
        entity_name="Contact",
        public_list=False,
        public_create=True,
    )
)
