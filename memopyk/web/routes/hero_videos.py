"""Routes des vidéos d'accueil."""

from ...infrastructure.persistence.repositories import SQLModelHeroVideoRepository
from ..schemas import HeroVideoCreate, HeroVideoRead, HeroVideoUpdate
from .crud import build_crud_router

router = build_crud_router(
    "/hero-videos",
    SQLModelHeroVideoRepository,
    HeroVideoCreate,
    HeroVideoUpdate,
    HeroVideoRead,
    entity_name="Hero video",
)
