"""
Repository SQLModel generique pour les entites de contenu.

Les entites MEMOPYK sont des enregistrements plats sans relation entre eux :
un seul repository parametre par la classe du modele et par l'ordre
d'affichage couvre le CRUD de toutes les tables.
"""

from typing import Any, ClassVar, Generic, Optional, TypeVar

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, select

from memopyk.core.ports.repositories import IContentRepository
from memopyk.infrastructure.persistence.models import utcnow

ModelT = TypeVar("ModelT", bound=SQLModel)


class SQLModelContentRepository(IContentRepository[ModelT], Generic[ModelT]):
    """
    Implementation SQLModel de IContentRepository.

    Les sous-classes declarent `model` et, si besoin, `order_by` (noms de
    colonnes, prefixe "-" pour un tri decroissant).
    """

    model: ClassVar[type[SQLModel]]
    order_by: ClassVar[tuple[str, ...]] = ("order_index",)

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
        """
        self._session = session

    def _ordering(self) -> list:
        """Traduit `order_by` en clauses SQLAlchemy."""
        clauses = []
        for name in self.order_by:
            column = getattr(self.model, name.lstrip("-"))
            clauses.append(column.desc() if name.startswith("-") else column.asc())
        return clauses

    def list(self, active_only: bool = False) -> list[ModelT]:
        """Liste les entites dans l'ordre d'affichage."""
        statement = select(self.model)
        if active_only and "is_active" in self.model.model_fields:
            statement = statement.where(self.model.is_active == True)  # noqa: E712
        statement = statement.order_by(*self._ordering())
        return list(self._session.exec(statement).all())

    def get(self, entity_id: str) -> Optional[ModelT]:
        """Recupere une entite par son ID."""
        return self._session.get(self.model, entity_id)

    def create(self, data: dict[str, Any]) -> ModelT:
        """Insere une entite ; rien n'est persiste si le commit echoue."""
        entity = self.model(**data)
        return self._commit(entity)

    def update(self, entity_id: str, data: dict[str, Any]) -> Optional[ModelT]:
        """Applique une mise a jour partielle et rafraichit updated_at."""
        entity = self.get(entity_id)
        if entity is None:
            return None
        for key, value in data.items():
            setattr(entity, key, value)
        if "updated_at" in self.model.model_fields:
            entity.updated_at = utcnow()
        return self._commit(entity)

    def delete(self, entity_id: str) -> bool:
        """Supprime une entite. Retourne False si elle n'existe pas."""
        entity = self.get(entity_id)
        if entity is None:
            return False
        self._session.delete(entity)
        try:
            self._session.commit()
        except SQLAlchemyError:
            self._session.rollback()
            raise
        return True

    def _commit(self, entity: ModelT) -> ModelT:
        """Ajoute, commit et rafraichit une entite (rollback en cas d'erreur)."""
        self._session.add(entity)
        try:
            self._session.commit()
        except SQLAlchemyError:
            self._session.rollback()
            logger.exception(f"Echec d'ecriture dans {self.model.__tablename__}")
            raise
        self._session.refresh(entity)
        return entity
