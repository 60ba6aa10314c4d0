"""
Implementations SQLModel des repositories.

Chaque repository :
- Herite de SQLModelContentRepository (CRUD generique de IContentRepository)
- Recoit une session SQLModel via injection de dependances
- Declare son modele et son ordre d'affichage
"""

from memopyk.infrastructure.persistence.repositories.base import (
    SQLModelContentRepository,
)
from memopyk.infrastructure.persistence.repositories.contact_repository import (
    SQLModelContactRepository,
)
from memopyk.infrastructure.persistence.repositories.deployment_history_repository import (
    SQLModelDeploymentHistoryRepository,
)
from memopyk.infrastructure.persistence.repositories.faq_repository import (
    SQLModelFaqRepository,
)
from memopyk.infrastructure.persistence.repositories.gallery_item_repository import (
    SQLModelGalleryItemRepository,
)
from memopyk.infrastructure.persistence.repositories.hero_video_repository import (
    SQLModelHeroVideoRepository,
)
from memopyk.infrastructure.persistence.repositories.legal_document_repository import (
    SQLModelLegalDocumentRepository,
)
from memopyk.infrastructure.persistence.repositories.seo_setting_repository import (
    SQLModelSeoSettingRepository,
)

__all__ = [
    "SQLModelContentRepository",
    "SQLModelContactRepository",
    "SQLModelDeploymentHistoryRepository",
    "SQLModelFaqRepository",
    "SQLModelGalleryItemRepository",
    "SQLModelHeroVideoRepository",
    "SQLModelLegalDocumentRepository",
    "SQLModelSeoSettingRepository",
]
