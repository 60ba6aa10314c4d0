"""
Implementation SQLModel du repository LegalDocument.

Un document legal est recherche par son type (legal_notice, privacy_policy...)
depuis les pages publiques.
"""

from typing import Optional

from sqlmodel import select

from memopyk.infrastructure.persistence.models import LegalDocumentModel
from memopyk.infrastructure.persistence.repositories.base import SQLModelContentRepository


class SQLModelLegalDocumentRepository(SQLModelContentRepository[LegalDocumentModel]):
    """Repository SQLModel pour les documents legaux, tries par type."""

    model = LegalDocumentModel
    order_by = ("type",)

    def get_by_type(
        self, document_type: str, active_only: bool = False
    ) -> Optional[LegalDocumentModel]:
        """Recupere le document d'un type donne (le plus recemment modifie)."""
        statement = select(LegalDocumentModel).where(
            LegalDocumentModel.type == document_type
        )
        if active_only:
            statement = statement.where(LegalDocumentModel.is_active == True)  # noqa: E712
        statement = statement.order_by(LegalDocumentModel.updated_at.desc())
        return self._session.exec(statement).first()
