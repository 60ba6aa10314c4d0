"""
Fixtures pytest partagees pour les tests MEMOPYK.

Ce module contient les fixtures communes utilisees dans les tests:
- Settings de test (SQLite en memoire, cache et logs dans tmp_path)
- Session SQLModel sur une base en memoire
- Client FastAPI (TestClient) et en-tetes d'authentification admin
"""

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from memopyk.config import Settings
from memopyk.infrastructure.persistence import models  # noqa: F401
from memopyk.infrastructure.persistence.database import build_engine, get_engine
from memopyk.services.video_cache import VideoCacheService
from memopyk.web.app import create_app

ADMIN_PASSWORD = "test-password"
STORAGE_URL = "https://storage.test"


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings isoles : base en memoire, fichiers sous tmp_path, stockage factice."""
    return Settings(
        _env_file=None,
        database_url="sqlite://",
        supabase_url=STORAGE_URL,
        supabase_service_key="service-key",
        storage_bucket="memopyk-media",
        admin_password=ADMIN_PASSWORD,
        cache_dir=tmp_path / "cached-videos",
        log_file=tmp_path / "logs" / "memopyk.log",
        log_level="DEBUG",
    )


@pytest.fixture
def session() -> Iterator[Session]:
    """Session sur une base SQLite en memoire, tables creees."""
    engine = build_engine("sqlite://")
    SQLModel.metadata.create_all(engine)
    with Session(engine) as db_session:
        yield db_session
    engine.dispose()


@pytest.fixture
def video_cache(tmp_path: Path) -> VideoCacheService:
    """Service de cache sur un repertoire temporaire."""
    return VideoCacheService(cache_dir=tmp_path / "cache", timeout=5.0)


@pytest.fixture
def client(settings: Settings) -> Iterator[TestClient]:
    """Client HTTP de test ; le lifespan (logging, base, container) est execute."""
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db_session(client: TestClient) -> Iterator[Session]:
    """Session sur la base de l'application de test (pour preparer les donnees)."""
    with Session(get_engine()) as db:
        yield db


@pytest.fixture
def admin_headers(client: TestClient) -> dict[str, str]:
    """En-tetes d'une session admin valide."""
    response = client.post("/api/auth/login", json={"password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
