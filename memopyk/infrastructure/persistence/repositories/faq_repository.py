"""
Implementation SQLModel du repository Faq.

Les questions sont triees par rang de section, cle de section puis rang
de question, ce qui permet de les regrouper en un seul passage.
"""

from memopyk.core.entities.faq import FaqSection
from memopyk.infrastructure.persistence.models import FaqModel
from memopyk.infrastructure.persistence.repositories.base import SQLModelContentRepository


class SQLModelFaqRepository(SQLModelContentRepository[FaqModel]):
    """Repository SQLModel pour les questions frequentes."""

    model = FaqModel
    order_by = ("section_order", "section", "order_index")

    def list_grouped(self, active_only: bool = True) -> list[FaqSection]:
        """
        Regroupe les questions par section.

        Les libelles et le rang d'une section sont ceux de sa premiere question.
        """
        sections: dict[str, FaqSection] = {}
        for faq in self.list(active_only=active_only):
            group = sections.get(faq.section)
            if group is None:
                group = FaqSection(
                    section=faq.section,
                    name_en=faq.section_name_en,
                    name_fr=faq.section_name_fr,
                    order=faq.section_order,
                )
                sections[faq.section] = group
            group.faqs.append(faq)
        return list(sections.values())
