"""
Service de cache local des videos.

Les videos du site (bandeau d'accueil, galerie) sont hebergees dans le
stockage objet. Ce service en garde une copie sur le disque du serveur et
les sert avec prise en charge des requetes partielles (Range), necessaires
a la navigation dans la video cote navigateur.

Cycle de vie d'un fichier, identifie par un nom derive de son URL :
absent -> (telechargement reussi) -> en cache -> (suppression manuelle) -> absent.
Pas d'expiration, pas d'eviction, pas de controle d'integrite.

Au plus un telechargement par fichier : les demandes concurrentes pour un
fichier en cours de telechargement attendent la meme tache. Le fichier est
ecrit sous un nom temporaire puis renomme, il n'apparait donc jamais
partiellement dans le cache.
"""

import asyncio
import os
from collections.abc import Iterator
from pathlib import Path
from typing import Optional

import httpx
from loguru import logger

from memopyk.core.entities.video_cache import CachedVideo, CacheInfo, VideoCacheResult
from memopyk.core.value_objects.byte_range import RangeNotSatisfiableError, parse_range_header
from memopyk.utils.constants import CACHE_CONTROL_IMMUTABLE, CHUNK_SIZE, VIDEO_EXTENSIONS
from memopyk.utils.helpers import cache_filename, guess_content_type, is_safe_filename

# Suffixe des fichiers en cours d'ecriture
PARTIAL_SUFFIX = ".part"

_MB = 1024 * 1024


class VideoCacheService:
    """
    Miroir disque des videos distantes.

    Example:
        cache = VideoCacheService(cache_dir=Path("cached-videos"))
        result = await cache.cache_video("https://.../memopyk-gallery/film.mp4")
        video = cache.serve_cached_video(result.local_path, "bytes=0-1023")
        await cache.close()
    """

    def __init__(self, cache_dir: Path, timeout: Optional[float] = 60.0) -> None:
        """
        Initialise le service et cree le repertoire de cache si besoin.

        Args:
            cache_dir: Repertoire de stockage des videos
            timeout: Delai max par operation reseau en secondes (None = illimite)
        """
        self._cache_dir = Path(cache_dir)
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None
        self._in_flight: dict[str, asyncio.Task[VideoCacheResult]] = {}
        self._ensure_cache_directory()

    @property
    def cache_dir(self) -> Path:
        """Repertoire de cache."""
        return self._cache_dir

    def _ensure_cache_directory(self) -> None:
        if not self._cache_dir.exists():
            self._cache_dir.mkdir(parents=True, exist_ok=True)
            logger.info(f"Repertoire de cache video cree: {self._cache_dir}")

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                follow_redirects=True,
            )
        return self._client

    @staticmethod
    def filename_for(url: str) -> str:
        """Nom de fichier en cache d'une URL."""
        return cache_filename(url)

    def get_local_path(self, filename: str) -> Optional[Path]:
        """Chemin du fichier s'il est en cache, sinon None."""
        if not is_safe_filename(filename) or filename.endswith(PARTIAL_SUFFIX):
            return None
        path = self._cache_dir / filename
        return path if path.is_file() else None

    def is_cached(self, filename: str) -> bool:
        """Vrai si le fichier est present dans le cache."""
        return self.get_local_path(filename) is not None

    def is_downloading(self, filename: str) -> bool:
        """Vrai si un telechargement est en cours pour ce fichier."""
        return filename in self._in_flight

    # ------------------------------------------------------------------
    # Mise en cache
    # ------------------------------------------------------------------

    async def cache_video(
        self,
        url: str,
        filename: Optional[str] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> VideoCacheResult:
        """
        Garantit la presence locale d'une video.

        Retourne immediatement si le fichier est deja en cache. Sinon lance
        (ou rejoint) le telechargement. L'annulation de l'appelant n'interrompt
        pas un telechargement en cours.

        Args:
            url: URL source de la video
            filename: Nom impose dans le cache (defaut: derive de l'URL)
            headers: En-tetes transmis a l'origine (ex: Authorization)

        Returns:
            VideoCacheResult ; un echec n'est jamais leve, il est decrit.
        """
        name = filename or self.filename_for(url)
        if not is_safe_filename(name) or name.endswith(PARTIAL_SUFFIX):
            return VideoCacheResult(success=False, error=f"Invalid cache filename: {name}")

        if self.is_cached(name):
            logger.debug(f"Video deja en cache: {name}")
            return VideoCacheResult(success=True, local_path=name, existing_file=True)

        task = self._in_flight.get(name)
        if task is None:
            task = asyncio.create_task(self._download(url, name, headers))
            self._in_flight[name] = task
            task.add_done_callback(lambda done, key=name: self._forget(key, done))
        else:
            logger.info(f"Telechargement deja en cours pour {name}, attente")

        return await asyncio.shield(task)

    def _forget(self, filename: str, task: asyncio.Task) -> None:
        if self._in_flight.get(filename) is task:
            del self._in_flight[filename]

    async def _download(
        self, url: str, filename: str, headers: Optional[dict[str, str]]
    ) -> VideoCacheResult:
        """Telecharge `url` vers le cache ; aucun fichier partiel ne subsiste en cas d'echec."""
        local_path = self._cache_dir / filename
        part_path = self._cache_dir / f"{filename}{PARTIAL_SUFFIX}"
        logger.info(f"Telechargement {url} -> {filename}")

        completed = False
        try:
            async with self._get_client().stream("GET", url, headers=headers) as response:
                if not response.is_success:
                    error = f"HTTP {response.status_code}: {response.reason_phrase}"
                    logger.error(f"Echec du telechargement de {url}: {error}")
                    return VideoCacheResult(success=False, error=error)

                total = _content_length(response.headers)
                logger.info(f"Taille a telecharger: {total / _MB:.1f} Mo")

                downloaded = 0
                next_step = 25
                # Ecritures disque hors de la boucle d'evenements
                fh = await asyncio.to_thread(open, part_path, "wb")
                try:
                    async for chunk in response.aiter_bytes(CHUNK_SIZE):
                        await asyncio.to_thread(fh.write, chunk)
                        downloaded += len(chunk)
                        if total and downloaded * 100 >= next_step * total:
                            progress = downloaded * 100 // total
                            logger.debug(
                                f"{filename}: {progress}% ({downloaded / _MB:.1f} Mo)"
                            )
                            next_step = (progress // 25 + 1) * 25
                finally:
                    await asyncio.to_thread(fh.close)

            await asyncio.to_thread(os.replace, part_path, local_path)
            completed = True
        except httpx.HTTPError as e:
            logger.error(f"Erreur de telechargement pour {url}: {e!r}")
            return VideoCacheResult(success=False, error=f"Download error: {e}")
        except OSError as e:
            logger.error(f"Erreur d'ecriture pour {filename}: {e}")
            return VideoCacheResult(success=False, error=f"File write error: {e}")
        finally:
            if not completed:
                self._discard(part_path)

        logger.info(f"Video mise en cache: {filename} ({downloaded / _MB:.1f} Mo)")
        return VideoCacheResult(success=True, local_path=filename)

    @staticmethod
    def _discard(path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Fichier partiel non supprime {path}: {e}")

    async def recache_video(
        self, url: str, headers: Optional[dict[str, str]] = None
    ) -> VideoCacheResult:
        """Supprime la copie locale d'une URL puis la retelecharge."""
        name = self.filename_for(url)
        if not self.is_downloading(name):
            self.delete_cached_video(name)
        return await self.cache_video(url, name, headers)

    # ------------------------------------------------------------------
    # Service des fichiers
    # ------------------------------------------------------------------

    def serve_cached_video(self, filename: str, range_header: Optional[str] = None) -> CachedVideo:
        """
        Construit la reponse HTTP pour un fichier en cache.

        - absent : 404
        - sans Range (ou Range mal forme) : 200 avec le fichier entier
        - Range valide : 206 avec Content-Range "bytes start-end/taille"
        - Range hors du fichier : 416 avec Content-Range "bytes */taille"
        """
        path = self.get_local_path(filename)
        if path is None:
            return CachedVideo(status=404)

        size = path.stat().st_size
        headers = {
            "Accept-Ranges": "bytes",
            "Content-Type": guess_content_type(filename),
            "Cache-Control": CACHE_CONTROL_IMMUTABLE,
        }

        try:
            byte_range = parse_range_header(range_header, size)
        except RangeNotSatisfiableError as e:
            headers["Content-Range"] = e.content_range
            return CachedVideo(status=416, headers=headers)

        if byte_range is None:
            headers["Content-Length"] = str(size)
            return CachedVideo(status=200, headers=headers, body=_iter_file(path, 0, size))

        headers["Content-Range"] = byte_range.content_range(size)
        headers["Content-Length"] = str(byte_range.length)
        return CachedVideo(
            status=206,
            headers=headers,
            body=_iter_file(path, byte_range.start, byte_range.length),
        )

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    def delete_cached_video(self, filename: str) -> bool:
        """Supprime un fichier du cache. Retourne False s'il n'existe pas."""
        path = self.get_local_path(filename)
        if path is None:
            return False
        try:
            path.unlink()
        except OSError as e:
            logger.error(f"Suppression impossible de {filename}: {e}")
            return False
        logger.info(f"Video supprimee du cache: {filename}")
        return True

    def get_cache_info(self) -> CacheInfo:
        """Inventaire des videos presentes dans le cache."""
        if not self._cache_dir.exists():
            return CacheInfo(total_files=0, total_size=0, files=[], cache_dir=self._cache_dir)

        files = []
        total_size = 0
        for entry in sorted(self._cache_dir.iterdir()):
            if entry.is_file() and entry.suffix.lower() in VIDEO_EXTENSIONS:
                files.append(entry.name)
                total_size += entry.stat().st_size

        return CacheInfo(
            total_files=len(files),
            total_size=total_size,
            files=files,
            cache_dir=self._cache_dir,
        )

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()


def _iter_file(path: Path, start: int, length: int) -> Iterator[bytes]:
    """Lit `length` octets a partir de `start`, par blocs."""
    with open(path, "rb") as fh:
        fh.seek(start)
        remaining = length
        while remaining > 0:
            chunk = fh.read(min(CHUNK_SIZE, remaining))
            if not chunk:
                break
            remaining -= len(chunk)
            yield chunk


def _content_length(headers: httpx.Headers) -> int:
    """Taille annoncee par l'origine ; 0 si absente ou invalide (progression non journalisee)."""
    try:
        return max(int(headers.get("content-length") or 0), 0)
    except ValueError:
        return 0
