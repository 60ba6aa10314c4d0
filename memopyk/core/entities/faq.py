"""
Regroupement des questions frequentes par section.

Il n'existe pas de table des sections : une section est la cle libre
`section` portee par chaque question, avec ses libelles bilingues.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class FaqSection:
    """
    Section de FAQ et ses questions, dans l'ordre d'affichage.

    Attributs :
        section : Cle de regroupement
        name_en : Libelle anglais de la section
        name_fr : Libelle francais de la section
        order : Rang de la section
        faqs : Questions de la section (modeles de persistance)
    """

    section: str
    name_en: str
    name_fr: str
    order: int = 0
    faqs: list[Any] = field(default_factory=list)
