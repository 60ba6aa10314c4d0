"""
Entités du cache vidéo local.

Un fichier en cache est identifié par un nom dérivé de l'URL source
(voir memopyk.utils.helpers.cache_filename). Il n'existe que deux états :
absent ou présent sur disque.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass
class VideoCacheResult:
    """
    Résultat d'une demande de mise en cache.

    Les échecs ne lèvent pas d'exception : ils sont décrits ici.

    Attributs :
        success : True si le fichier est disponible sur disque
        local_path : Nom du fichier dans le répertoire de cache
        error : Message d'erreur en cas d'échec
        existing_file : True si le fichier était déjà en cache (aucun téléchargement)
    """

    success: bool
    local_path: Optional[str] = None
    error: Optional[str] = None
    existing_file: bool = False

    def to_dict(self) -> dict:
        """Représentation JSON (clés camelCase attendues par le back-office)."""
        data: dict = {"success": self.success}
        if self.local_path is not None:
            data["localPath"] = self.local_path
        if self.error is not None:
            data["error"] = self.error
        if self.existing_file:
            data["existingFile"] = True
        return data


@dataclass
class CacheInfo:
    """
    État du répertoire de cache.

    Attributs :
        total_files : Nombre de fichiers vidéo en cache
        total_size : Taille cumulée en octets
        files : Noms des fichiers, triés
        cache_dir : Répertoire de cache
    """

    total_files: int
    total_size: int
    files: list[str]
    cache_dir: Path

    @property
    def total_size_mb(self) -> float:
        """Taille cumulée en Mo (arrondie à 2 décimales)."""
        return round(self.total_size / (1024 * 1024), 2)


@dataclass
class CachedVideo:
    """
    Réponse prête à servir pour un fichier en cache.

    Attributs :
        status : Code HTTP (200, 206, 404 ou 416)
        headers : En-têtes HTTP de la réponse
        body : Itérateur de blocs d'octets (None si pas de corps)
    """

    status: int
    headers: dict[str, str] = field(default_factory=dict)
    body: Optional[Iterator[bytes]] = None
