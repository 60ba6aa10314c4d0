"""
Interfaces ports pour les repositories de contenu.

Toutes les entités éditables du site (hero videos, galerie, FAQ, documents
légaux, contacts, SEO, historique de déploiement) partagent le même contrat
CRUD. Les données entrantes sont des dictionnaires déjà validés par la
couche web.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, TypeVar

EntityT = TypeVar("EntityT")


class IContentRepository(ABC, Generic[EntityT]):
    """
    Interface de stockage d'une entité de contenu.

    Les listes sont renvoyées dans l'ordre d'affichage propre à chaque entité.
    """

    @abstractmethod
    def list(self, active_only: bool = False) -> list[EntityT]:
        """Liste les entités ; active_only exclut celles masquées (is_active=False)."""
        ...

    @abstractmethod
    def get(self, entity_id: str) -> Optional[EntityT]:
        """Récupère une entité par son ID."""
        ...

    @abstractmethod
    def create(self, data: dict[str, Any]) -> EntityT:
        """Crée une entité à partir de données validées."""
        ...

    @abstractmethod
    def update(self, entity_id: str, data: dict[str, Any]) -> Optional[EntityT]:
        """Met à jour les champs fournis. Retourne None si l'entité n'existe pas."""
        ...

    @abstractmethod
    def delete(self, entity_id: str) -> bool:
        """Supprime une entité. Retourne True si supprimée."""
        ...
