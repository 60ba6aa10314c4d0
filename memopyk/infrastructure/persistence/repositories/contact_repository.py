"""
Implementation SQLModel du repository Contact.

Les demandes de contact n'ont pas d'indicateur is_active : elles sont
listees de la plus recente a la plus ancienne.
"""

from sqlmodel import select

from memopyk.infrastructure.persistence.models import ContactModel
from memopyk.infrastructure.persistence.repositories.base import SQLModelContentRepository


class SQLModelContactRepository(SQLModelContentRepository[ContactModel]):
    """Repository SQLModel pour les demandes de contact."""

    model = ContactModel
    order_by = ("-created_at",)

    def list_by_status(self, status: str) -> list[ContactModel]:
        """Liste les demandes dans un statut donne (new, contacted...)."""
        statement = (
            select(ContactModel)
            .where(ContactModel.status == status)
            .order_by(*self._ordering())
        )
        return list(self._session.exec(statement).all())
