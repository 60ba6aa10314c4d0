"""
Modeles SQLModel pour la base de donnees MEMOPYK.

Tables:
- hero_videos: Videos du bandeau d'accueil (URL par langue)
- gallery_items: Realisations presentees dans la galerie
- faqs: Questions frequentes, regroupees par section
- legal_documents: Mentions legales, CGV, politique de confidentialite...
- contacts: Demandes recues via le formulaire de contact
- seo_settings: Metadonnees SEO par page
- deployment_history: Journal des deploiements

Les textes affiches sont bilingues (suffixes _en / _fr). Les entites
affichees publiquement portent un order_index et un indicateur is_active :
un element inactif reste en base et visible dans le back-office.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import JSON, Column, Text
from sqlmodel import Field, SQLModel


def _new_id() -> str:
    """Identifiant UUID4 sous forme de chaine."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Horodatage UTC courant."""
    return datetime.now(timezone.utc)


class HeroVideoModel(SQLModel, table=True):
    """Video du carrousel d'accueil, une URL par langue."""

    __tablename__ = "hero_videos"

    id: str = Field(default_factory=_new_id, primary_key=True)
    title_en: str
    title_fr: str
    url_en: str
    url_fr: str
    order_index: int = Field(default=0, index=True)
    is_active: bool = Field(default=True, index=True)
    created_at: datetime | None = Field(default_factory=utcnow)
    updated_at: datetime | None = Field(default_factory=utcnow)


class GalleryItemModel(SQLModel, table=True):
    """
    Element de la galerie (portfolio).

    Associe une video et des vignettes par langue a un titre, une description
    et un prix bilingues.
    """

    __tablename__ = "gallery_items"

    id: str = Field(default_factory=_new_id, primary_key=True)
    title_en: str
    title_fr: str
    description_en: str | None = Field(default=None, sa_column=Column(Text))
    description_fr: str | None = Field(default=None, sa_column=Column(Text))
    video_url: str | None = None
    image_url_en: str | None = None
    image_url_fr: str | None = None
    price_en: str | None = None
    price_fr: str | None = None
    alt_text_en: str | None = None
    alt_text_fr: str | None = None
    additional_info_en: str | None = Field(default=None, sa_column=Column(Text))
    additional_info_fr: str | None = Field(default=None, sa_column=Column(Text))
    order_index: int = Field(default=0, index=True)
    is_active: bool = Field(default=True, index=True)
    created_at: datetime | None = Field(default_factory=utcnow)
    updated_at: datetime | None = Field(default_factory=utcnow)


class FaqModel(SQLModel, table=True):
    """
    Question frequente.

    `section` est une cle de regroupement libre (pas de table de sections) ;
    les libelles de section sont recopies sur chaque question.
    """

    __tablename__ = "faqs"

    id: str = Field(default_factory=_new_id, primary_key=True)
    section: str = Field(index=True)
    section_name_en: str
    section_name_fr: str
    section_order: int = Field(default=0)
    order_index: int = Field(default=0)
    question_en: str = Field(sa_column=Column(Text, nullable=False))
    question_fr: str = Field(sa_column=Column(Text, nullable=False))
    answer_en: str = Field(sa_column=Column(Text, nullable=False))
    answer_fr: str = Field(sa_column=Column(Text, nullable=False))
    is_active: bool = Field(default=True, index=True)
    created_at: datetime | None = Field(default_factory=utcnow)
    updated_at: datetime | None = Field(default_factory=utcnow)


class LegalDocumentModel(SQLModel, table=True):
    """Document legal identifie par son type (legal_notice, privacy_policy...)."""

    __tablename__ = "legal_documents"

    id: str = Field(default_factory=_new_id, primary_key=True)
    type: str = Field(index=True)
    title_en: str
    title_fr: str
    content_en: str = Field(sa_column=Column(Text, nullable=False))
    content_fr: str = Field(sa_column=Column(Text, nullable=False))
    is_active: bool = Field(default=True, index=True)
    created_at: datetime | None = Field(default_factory=utcnow)
    updated_at: datetime | None = Field(default_factory=utcnow)


class ContactModel(SQLModel, table=True):
    """Demande de contact d'un prospect."""

    __tablename__ = "contacts"

    id: str = Field(default_factory=_new_id, primary_key=True)
    name: str
    email: str = Field(index=True)
    phone: str | None = None
    package: str | None = None
    message: str | None = Field(default=None, sa_column=Column(Text))
    preferred_contact: str | None = None
    status: str = Field(default="new", index=True)
    created_at: datetime | None = Field(default_factory=utcnow, index=True)
    updated_at: datetime | None = Field(default_factory=utcnow)


class SeoSettingModel(SQLModel, table=True):
    """Metadonnees SEO (balises meta, Open Graph, Twitter) d'une page."""

    __tablename__ = "seo_settings"

    id: str = Field(default_factory=_new_id, primary_key=True)
    page: str = Field(index=True)
    url_slug_en: str | None = None
    url_slug_fr: str | None = None
    meta_title_en: str | None = None
    meta_title_fr: str | None = None
    meta_description_en: str | None = None
    meta_description_fr: str | None = None
    og_title_en: str | None = None
    og_title_fr: str | None = None
    og_description_en: str | None = None
    og_description_fr: str | None = None
    og_image_url: str | None = None
    twitter_title_en: str | None = None
    twitter_title_fr: str | None = None
    twitter_description_en: str | None = None
    twitter_description_fr: str | None = None
    twitter_image_url: str | None = None
    canonical_url: str | None = None
    robots_index: bool = Field(default=True)
    robots_follow: bool = Field(default=True)
    json_ld: Optional[dict[str, Any]] = Field(default=None, sa_column=Column(JSON))
    created_at: datetime | None = Field(default_factory=utcnow)
    updated_at: datetime | None = Field(default_factory=utcnow)


class DeploymentHistoryModel(SQLModel, table=True):
    """
    Entree du journal de deploiement.

    Simple trace (type, statut, duree, logs) : aucun deploiement n'est
    execute par l'application.
    """

    __tablename__ = "deployment_history"

    id: str = Field(default_factory=_new_id, primary_key=True)
    type: str
    status: str = Field(index=True)
    start_time: datetime | None = Field(default_factory=utcnow, index=True)
    end_time: datetime | None = None
    duration: int | None = None  # secondes
    logs: str | None = Field(default=None, sa_column=Column(Text))
    host: str | None = None
    domain: str | None = None
    created_at: datetime | None = Field(default_factory=utcnow)
