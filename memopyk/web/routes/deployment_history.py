"""
Routes du journal de déploiement.

Simple historique consulté et alimenté par le back-office : aucune
commande de déploiement n'est exécutée par le serveur.
"""

from ...infrastructure.persistence.repositories import SQLModelDeploymentHistoryRepository
from ..schemas import DeploymentHistoryCreate, DeploymentHistoryRead, DeploymentHistoryUpdate
from .crud import build_crud_router

router = build_crud_router(
    "/deployment-history",
    SQLModelDeploymentHistoryRepository,
    DeploymentHistoryCreate,
    DeploymentHistoryUpdate,
    DeploymentHistoryRead,
    entity_name="Deployment entry",
    public_list=False,
    update_method="PATCH",
)
