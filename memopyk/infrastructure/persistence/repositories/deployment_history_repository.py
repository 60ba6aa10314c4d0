"""
Implementation SQLModel du repository DeploymentHistory.

Journal en ajout/mise a jour : la suppression n'est pas exposee par l'API.
"""

from memopyk.infrastructure.persistence.models import DeploymentHistoryModel
from memopyk.infrastructure.persistence.repositories.base import SQLModelContentRepository


class SQLModelDeploymentHistoryRepository(
    SQLModelContentRepository[DeploymentHistoryModel]
):
    """Repository SQLModel pour l'historique des deploiements (plus recent d'abord)."""

    model = DeploymentHistoryModel
    order_by = ("-start_time",)
