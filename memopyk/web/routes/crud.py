"""
Fabrique de routes CRUD pour les entités de contenu.

Pour un chemin "/hero-videos", génère :
- GET    /hero-videos            éléments actifs (public) ou tous (admin)
- GET    /admin/hero-videos      tous les éléments, actifs ou non (admin)
- POST   /hero-videos            création (201)
- PUT    /hero-videos/{id}       mise à jour partielle (404 si absent)
- DELETE /hero-videos/{id}       suppression (404 si absent)
"""

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from ...infrastructure.persistence.repositories import SQLModelContentRepository
from ..deps import repository, require_admin

ADMIN = [Depends(require_admin)]


def build_crud_router(
    path: str,
    repository_cls: type[SQLModelContentRepository],
    create_schema: type[BaseModel],
    update_schema: type[BaseModel],
    read_schema: type[BaseModel],
    *,
    entity_name: str,
    public_list: bool = True,
    public_create: bool = False,
    update_method: str = "PUT",
) -> APIRouter:
    """
    Construit le routeur CRUD d'une entité.

    Args:
        path: Chemin de la collection (ex: "/hero-videos")
        repository_cls: Repository SQLModel de l'entité
        create_schema / update_schema / read_schema: Schémas de l'entité
        entity_name: Libellé utilisé dans les messages d'erreur
        public_list: GET de la collection public (actifs seulement) ; sinon réservé à l'admin
        public_create: POST ouvert aux visiteurs (formulaire de contact)
        update_method: Méthode HTTP de la mise à jour (PUT ou PATCH)
    """
    router = APIRouter()
    get_repository = repository(repository_cls)

    def _not_found() -> HTTPException:
        return HTTPException(status_code=404, detail=f"{entity_name} not found")

    if public_list:

        @router.get(path, response_model=list[read_schema])
        def list_active(repo: SQLModelContentRepository = Depends(get_repository)):
            return repo.list(active_only=True)

        @router.get(f"/admin{path}", response_model=list[read_schema], dependencies=ADMIN)
        def list_all(repo: SQLModelContentRepository = Depends(get_repository)):
            return repo.list()

    else:

        @router.get(path, response_model=list[read_schema], dependencies=ADMIN)
        def list_all(repo: SQLModelContentRepository = Depends(get_repository)):
            return repo.list()

    @router.post(
        path,
        response_model=read_schema,
        status_code=status.HTTP_201_CREATED,
        dependencies=[] if public_create else ADMIN,
    )
    def create(
        payload: create_schema,  # type: ignore[valid-type]
        repo: SQLModelContentRepository = Depends(get_repository),
    ):
        return repo.create(payload.model_dump(exclude_none=True))

    @router.api_route(
        f"{path}/{{entity_id}}",
        methods=[update_method],
        response_model=read_schema,
        dependencies=ADMIN,
    )
    def update(
        entity_id: str,
        payload: update_schema,  # type: ignore[valid-type]
        repo: SQLModelContentRepository = Depends(get_repository),
    ):
        entity = repo.update(entity_id, payload.model_dump(exclude_unset=True))
        if entity is None:
            raise _not_found()
        return entity

    @router.delete(f"{path}/{{entity_id}}", dependencies=ADMIN)
    def delete(entity_id: str, repo: SQLModelContentRepository = Depends(get_repository)):
        if not repo.delete(entity_id):
            raise _not_found()
        return {"success": True}

    return router
