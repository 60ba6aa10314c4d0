"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe MEMOPYK_,
et peut optionnellement être fournie via un fichier .env.

Le stockage objet (Supabase) est optionnel : l'upload et le proxy vidéo
sont désactivés si l'URL ou la clé de service ne sont pas fournies.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de memopyk/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe MEMOPYK_.
    Exemple : MEMOPYK_LOG_LEVEL=DEBUG

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="MEMOPYK_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Base de données
    database_url: str = Field(default="sqlite:///memopyk.db")

    # Stockage objet (OPTIONNEL - upload et proxy désactivés si non définis)
    supabase_url: Optional[str] = Field(default=None)
    supabase_service_key: Optional[str] = Field(default=None)
    storage_bucket: str = Field(default="memopyk-media")
    upload_max_bytes: int = Field(default=50 * 1024 * 1024, ge=1)

    # Administration
    admin_password: str = Field(default="change-me")
    token_ttl_seconds: int = Field(default=24 * 60 * 60, ge=60)

    # Cache vidéo local
    cache_dir: Path = Field(default=Path("cached-videos"))
    cache_download_timeout: Optional[float] = Field(default=60.0, gt=0)

    # Web
    cors_origins: list[str] = Field(default_factory=list)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/memopyk.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("cache_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @field_validator("supabase_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        """Retire le / final de l'URL Supabase."""
        return v.rstrip("/") if v else v

    @property
    def storage_enabled(self) -> bool:
        """Vérifie si le stockage objet est configuré."""
        return bool(self.supabase_url and self.supabase_service_key)
