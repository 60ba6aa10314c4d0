"""
Ports (interfaces abstraites) du domaine.

Exports :
- IContentRepository : Contrat CRUD des entités de contenu
- IObjectStorage : Contrat du stockage objet
- StoredObject : Objet déposé dans un bucket
- StorageError : Échec d'une opération de stockage
"""

from memopyk.core.ports.repositories import IContentRepository
from memopyk.core.ports.storage import IObjectStorage, StorageError, StoredObject

__all__ = [
    "IContentRepository",
    "IObjectStorage",
    "StorageError",
    "StoredObject",
]
