"""
Implementation SQLModel du repository HeroVideo.

Videos du carrousel d'accueil, affichees dans l'ordre de order_index.
"""

from memopyk.infrastructure.persistence.models import HeroVideoModel
from memopyk.infrastructure.persistence.repositories.base import SQLModelContentRepository


class SQLModelHeroVideoRepository(SQLModelContentRepository[HeroVideoModel]):
    """Repository SQLModel pour les videos du bandeau d'accueil."""

    model = HeroVideoModel
    order_by = ("order_index", "created_at")
