"""
Schemas Pydantic de l'API.

Le front-end echange du JSON en camelCase (titleEn, orderIndex...) : les
schemas acceptent les deux formes en entree et repondent en camelCase.

Pour chaque entite :
- <Entite>Create : corps d'une creation (champs requis marques sans defaut)
- <Entite>Update : meme schema, tous les champs facultatifs (mise a jour partielle)
- <Entite>Read : reponse, avec id et horodatages
"""

from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Annotated, Any, ClassVar, Literal, Optional, get_args

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    StringConstraints,
    create_model,
    model_validator,
)
from pydantic.alias_generators import to_camel

from memopyk.utils.constants import (
    CONTACT_STATUSES,
    DEPLOYMENT_STATUSES,
    DEPLOYMENT_TYPES,
    LEGAL_DOCUMENT_TYPES,
)

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
Position = Annotated[int, Field(ge=0)]


def _one_of(allowed: Iterable[str]) -> Callable[[str], str]:
    choices = frozenset(allowed)

    def check(value: str) -> str:
        if value not in choices:
            raise ValueError(f"must be one of: {', '.join(sorted(choices))}")
        return value

    return check


LegalDocumentType = Annotated[str, AfterValidator(_one_of(LEGAL_DOCUMENT_TYPES))]
ContactStatus = Annotated[str, AfterValidator(_one_of(CONTACT_STATUSES))]
DeploymentType = Annotated[str, AfterValidator(_one_of(DEPLOYMENT_TYPES))]
DeploymentStatus = Annotated[str, AfterValidator(_one_of(DEPLOYMENT_STATUSES))]


class CamelModel(BaseModel):
    """Base des schemas : alias camelCase, lecture depuis les modeles SQLModel."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PartialModel(CamelModel):
    """
    Base des schemas de mise a jour.

    Un champ absent n'est pas modifie. Un champ non nullable en base ne peut
    pas etre remis a null explicitement.
    """

    non_nullable_fields: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def reject_null_values(self):
        nulled = [
            name
            for name in self.model_fields_set & self.non_nullable_fields
            if getattr(self, name) is None
        ]
        if nulled:
            raise ValueError(f"fields cannot be null: {', '.join(sorted(nulled))}")
        return self


def partial_model(model: type[CamelModel]) -> type[PartialModel]:
    """Construit la variante "tous champs facultatifs" d'un schema de creation."""
    fields: dict[str, Any] = {}
    non_nullable = set()
    for field_name, info in model.model_fields.items():
        annotation = info.annotation
        if info.metadata:
            annotation = Annotated[annotation, *info.metadata]
        fields[field_name] = (Optional[annotation], None)
        if type(None) not in get_args(info.annotation):
            non_nullable.add(field_name)

    partial = create_model(
        model.__name__.removesuffix("Create") + "Update", __base__=PartialModel, **fields
    )
    partial.non_nullable_fields = frozenset(non_nullable)
    return partial


class _Stamped(CamelModel):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ═══════════════════════════════════════
# Videos d'accueil
# ═══════════════════════════════════════


class HeroVideoCreate(CamelModel):
    title_en: NonEmptyStr
    title_fr: NonEmptyStr
    url_en: NonEmptyStr
    url_fr: NonEmptyStr
    order_index: Position = 0
    is_active: bool = True


HeroVideoUpdate = partial_model(HeroVideoCreate)


class HeroVideoRead(HeroVideoCreate, _Stamped):
    pass


# ═══════════════════════════════════════
# Galerie
# ═══════════════════════════════════════


class GalleryItemCreate(CamelModel):
    title_en: NonEmptyStr
    title_fr: NonEmptyStr
    description_en: Optional[str] = None
    description_fr: Optional[str] = None
    video_url: Optional[str] = None
    image_url_en: Optional[str] = None
    image_url_fr: Optional[str] = None
    price_en: Optional[str] = None
    price_fr: Optional[str] = None
    alt_text_en: Optional[str] = None
    alt_text_fr: Optional[str] = None
    additional_info_en: Optional[str] = None
    additional_info_fr: Optional[str] = None
    order_index: Position = 0
    is_active: bool = True


GalleryItemUpdate = partial_model(GalleryItemCreate)


class GalleryItemRead(GalleryItemCreate, _Stamped):
    pass


# ═══════════════════════════════════════
# FAQ
# ═══════════════════════════════════════


class FaqCreate(CamelModel):
    section: NonEmptyStr
    section_name_en: NonEmptyStr
    section_name_fr: NonEmptyStr
    section_order: Position = 0
    order_index: Position = 0
    question_en: NonEmptyStr
    question_fr: NonEmptyStr
    answer_en: NonEmptyStr
    answer_fr: NonEmptyStr
    is_active: bool = True


FaqUpdate = partial_model(FaqCreate)


class FaqRead(FaqCreate, _Stamped):
    pass


class FaqSectionRead(CamelModel):
    """Section de FAQ avec ses questions, pour la page publique."""

    section: str
    name_en: str
    name_fr: str
    order: int
    faqs: list[FaqRead]


# ═══════════════════════════════════════
# Documents legaux
# ═══════════════════════════════════════


class LegalDocumentCreate(CamelModel):
    type: LegalDocumentType
    title_en: NonEmptyStr
    title_fr: NonEmptyStr
    content_en: NonEmptyStr
    content_fr: NonEmptyStr
    is_active: bool = True


LegalDocumentUpdate = partial_model(LegalDocumentCreate)


class LegalDocumentRead(LegalDocumentCreate, _Stamped):
    pass


# ═══════════════════════════════════════
# Contacts
# ═══════════════════════════════════════


class ContactCreate(CamelModel):
    name: NonEmptyStr
    email: EmailStr
    phone: Optional[str] = None
    package: Optional[str] = None
    message: Optional[str] = None
    preferred_contact: Optional[str] = None


class ContactUpdate(PartialModel):
    """Le back-office peut corriger les coordonnees et faire avancer le statut."""

    non_nullable_fields: ClassVar[frozenset[str]] = frozenset({"name", "email", "status"})

    name: Optional[NonEmptyStr] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    package: Optional[str] = None
    message: Optional[str] = None
    preferred_contact: Optional[str] = None
    status: Optional[ContactStatus] = None


class ContactRead(_Stamped):
    name: str
    email: str
    phone: Optional[str] = None
    package: Optional[str] = None
    message: Optional[str] = None
    preferred_contact: Optional[str] = None
    status: str


# ═══════════════════════════════════════
# SEO
# ═══════════════════════════════════════


class SeoSettingCreate(CamelModel):
    page: NonEmptyStr
    url_slug_en: Optional[str] = None
    url_slug_fr: Optional[str] = None
    meta_title_en: Optional[str] = None
    meta_title_fr: Optional[str] = None
    meta_description_en: Optional[str] = None
    meta_description_fr: Optional[str] = None
    og_title_en: Optional[str] = None
    og_title_fr: Optional[str] = None
    og_description_en: Optional[str] = None
    og_description_fr: Optional[str] = None
    og_image_url: Optional[str] = None
    twitter_title_en: Optional[str] = None
    twitter_title_fr: Optional[str] = None
    twitter_description_en: Optional[str] = None
    twitter_description_fr: Optional[str] = None
    twitter_image_url: Optional[str] = None
    canonical_url: Optional[str] = None
    robots_index: bool = True
    robots_follow: bool = True
    json_ld: Optional[dict[str, Any]] = None


SeoSettingUpdate = partial_model(SeoSettingCreate)


class SeoSettingRead(SeoSettingCreate, _Stamped):
    pass


# ═══════════════════════════════════════
# Journal des deploiements
# ═══════════════════════════════════════


class DeploymentHistoryCreate(CamelModel):
    type: DeploymentType
    status: DeploymentStatus
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    duration: Optional[Position] = None
    logs: Optional[str] = None
    host: Optional[str] = None
    domain: Optional[str] = None


DeploymentHistoryUpdate = partial_model(DeploymentHistoryCreate)


class DeploymentHistoryRead(_Stamped):
    type: str
    status: str
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    duration: Optional[int] = None
    logs: Optional[str] = None
    host: Optional[str] = None
    domain: Optional[str] = None


# ═══════════════════════════════════════
# Authentification, upload, cache
# ═══════════════════════════════════════


class LoginRequest(CamelModel):
    password: str


class UploadResponse(CamelModel):
    url: str
    path: str


class HeroVideoCacheRequest(CamelModel):
    id: NonEmptyStr
    language: Literal["en", "fr"] = "en"


class GalleryVideoCacheRequest(CamelModel):
    id: NonEmptyStr


class RecacheRequest(CamelModel):
    url: NonEmptyStr
