"""
Configuration de la base de donnees pour MEMOPYK.

Ce module fournit :
- Engine SQLAlchemy (SQLite en developpement, PostgreSQL en production)
- Generateur de session utilisable comme dependance FastAPI
- Fonction d'initialisation des tables

La base de donnees est configuree via MEMOPYK_DATABASE_URL (defaut: sqlite:///memopyk.db).
"""

from collections.abc import Generator
from pathlib import Path
from typing import Optional

from sqlalchemy import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

# Engine global - initialise lors du premier appel a get_engine()
_engine: Optional[Engine] = None


def build_engine(db_url: str) -> Engine:
    """
    Cree un engine pour l'URL donnee.

    Pour SQLite, autorise l'acces multi-thread (les routes FastAPI synchrones
    tournent dans un threadpool) ; une base en memoire partage une connexion
    unique pour que toutes les sessions voient les memes tables.
    """
    if not db_url.startswith("sqlite"):
        return create_engine(db_url, echo=False, pool_pre_ping=True)

    if db_url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(
            db_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    # Creer le repertoire parent du fichier SQLite
    if db_url.startswith("sqlite:///"):
        db_path = Path(db_url.replace("sqlite:///", "", 1))
        db_path.parent.mkdir(exist_ok=True, parents=True)

    return create_engine(
        db_url,
        echo=False,
        connect_args={"check_same_thread": False},
    )


def get_engine() -> Engine:
    """
    Retourne l'engine global, en le creant si necessaire.

    Utilise la configuration de l'application pour l'URL de la BDD.
    """
    global _engine
    if _engine is None:
        from memopyk.config import Settings

        _engine = build_engine(Settings().database_url)
    return _engine


def set_engine(engine: Optional[Engine]) -> None:
    """Remplace l'engine global (None force une recreation depuis la config)."""
    global _engine
    _engine = engine


def get_session() -> Generator[Session, None, None]:
    """
    Generateur de session SQLModel.

    Utilisation comme dependance FastAPI :
        def route(session: Session = Depends(get_session)): ...

    Ou avec next() :
        session = next(get_session())

    Yields:
        Session SQLModel connectee a l'engine global
    """
    with Session(get_engine()) as session:
        yield session


def init_db() -> None:
    """
    Initialise la base de donnees en creant toutes les tables manquantes.

    Les modeles sont importes ici pour enregistrer leurs metadonnees dans
    SQLModel.metadata sans import circulaire.
    """
    from memopyk.infrastructure.persistence import models  # noqa: F401

    SQLModel.metadata.create_all(get_engine())
