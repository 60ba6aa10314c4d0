"""
Application FastAPI de MEMOPYK.

Initialise l'application web avec le Container DI, configure le logging,
la base de données et les gestionnaires d'erreurs, puis monte les routes
de l'API sous /api.
"""

from contextlib import asynccontextmanager
from typing import Optional

from dependency_injector import providers
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import __version__
from ..config import Settings
from ..container import Container
from ..core.ports.storage import StorageError
from ..infrastructure.persistence.database import build_engine, set_engine
from ..logging_config import configure_logging
from .middleware import RequestLogMiddleware
from .routes.auth import router as auth_router
from .routes.cache import router as cache_router
from .routes.contacts import router as contacts_router
from .routes.deployment_history import router as deployment_history_router
from .routes.faqs import router as faqs_router
from .routes.gallery import router as gallery_router
from .routes.health import router as health_router
from .routes.hero_videos import router as hero_videos_router
from .routes.legal import router as legal_router
from .routes.seo import router as seo_router
from .routes.uploads import router as uploads_router
from .routes.video_proxy import router as video_proxy_router

_API_ROUTERS = (
    auth_router,
    hero_videos_router,
    gallery_router,
    faqs_router,
    legal_router,
    contacts_router,
    seo_router,
    deployment_history_router,
    uploads_router,
    video_proxy_router,
    cache_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialise logging et base au démarrage, ferme les clients HTTP à l'arrêt."""
    container: Container = app.state.container
    settings = container.config()

    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )
    set_engine(build_engine(settings.database_url))
    container.database.init()

    logger.info(
        f"Démarrage de MEMOPYK v{__version__} "
        f"(stockage {'activé' if settings.storage_enabled else 'désactivé'}, "
        f"cache {settings.cache_dir})"
    )
    yield

    await container.video_cache().close()
    storage = container.storage_client()
    if storage is not None:
        await storage.close()
    container.shutdown_resources()


def _validation_errors(exc: RequestValidationError) -> list[dict]:
    """Erreurs de validation sous une forme JSON stable."""
    return [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]


def register_exception_handlers(app: FastAPI) -> None:
    """Toutes les erreurs sont renvoyées sous la forme {"message": ...}."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"message": "Invalid data", "errors": _validation_errors(exc)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error(f"Erreur du stockage objet sur {request.url.path}: {exc}")
        return JSONResponse(status_code=502, content={"message": str(exc)})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.opt(exception=exc).error(
            f"Erreur inattendue sur {request.method} {request.url.path}"
        )
        return JSONResponse(status_code=500, content={"message": "Internal Server Error"})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Construit l'application.

    Args:
        settings: Configuration imposée (tests) ; par défaut lue depuis l'environnement
    """
    container = Container()
    if settings is not None:
        container.config.override(providers.Object(settings))
    settings = container.config()

    app = FastAPI(title="MEMOPYK", version=__version__, lifespan=lifespan)
    app.state.container = container

    register_exception_handlers(app)

    app.add_middleware(RequestLogMiddleware)
    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(health_router)
    for router in _API_ROUTERS:
        app.include_router(router, prefix="/api")

    return app


app = create_app()
