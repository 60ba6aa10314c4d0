"""
Tests unitaires pour VideoCacheService.

Utilise respx pour simuler l'origine des videos et verifie:
- Un fichier deja en cache est retourne sans requete reseau
- Les demandes concurrentes pour la meme URL partagent un seul telechargement
- Les echecs ne laissent aucun fichier (ni final, ni partiel)
- Le service par plages (200, 206, 404, 416)
- La suppression et l'inventaire du cache
"""

import asyncio
from collections.abc import AsyncIterator
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest
import respx

from memopyk.services.video_cache import VideoCacheService

VIDEO_URL = "https://storage.test/storage/v1/object/public/memopyk-media/film.mp4"
VIDEO_BYTES = bytes(range(256)) * 40  # 10 240 octets


def _read_body(video) -> bytes:
    return b"".join(video.body)


class _InterruptedStream(httpx.AsyncByteStream):
    """Corps de reponse coupe apres quelques octets."""

    async def __aiter__(self) -> AsyncIterator[bytes]:
        yield b"x" * 100
        raise httpx.ReadError("connection reset by peer")


@pytest.fixture
def cached_file(video_cache: VideoCacheService) -> str:
    """Fichier deja present dans le cache."""
    name = video_cache.filename_for(VIDEO_URL)
    (video_cache.cache_dir / name).write_bytes(VIDEO_BYTES)
    return name


class TestInit:
    def test_creates_cache_directory(self, tmp_path: Path) -> None:
        """Le repertoire de cache est cree s'il n'existe pas."""
        cache_dir = tmp_path / "nested" / "cache"
        VideoCacheService(cache_dir=cache_dir)
        assert cache_dir.is_dir()


class TestCacheVideo:
    """Tests pour cache_video()."""

    @pytest.mark.asyncio
    async def test_downloads_missing_video(
        self, video_cache: VideoCacheService, respx_mock: respx.Router
    ) -> None:
        """Une video absente est telechargee puis presente sur disque."""
        route = respx_mock.get(VIDEO_URL).mock(
            return_value=httpx.Response(200, content=VIDEO_BYTES)
        )

        result = await video_cache.cache_video(VIDEO_URL)

        assert result.success
        assert not result.existing_file
        assert result.local_path == video_cache.filename_for(VIDEO_URL)
        assert (video_cache.cache_dir / result.local_path).read_bytes() == VIDEO_BYTES
        assert route.call_count == 1
        await video_cache.close()

    @pytest.mark.asyncio
    async def test_cache_hit_makes_no_request(
        self, video_cache: VideoCacheService, cached_file: str, respx_mock: respx.Router
    ) -> None:
        """Un fichier deja en cache est retourne sans requete reseau."""
        first = await video_cache.cache_video(VIDEO_URL)
        second = await video_cache.cache_video(VIDEO_URL)

        assert first == second
        assert first.success and first.existing_file
        assert first.local_path == cached_file
        assert respx_mock.calls.call_count == 0

    @pytest.mark.asyncio
    async def test_concurrent_requests_share_one_download(
        self, video_cache: VideoCacheService, respx_mock: respx.Router
    ) -> None:
        """Cinq demandes simultanees pour la meme URL = un seul telechargement."""
        route = respx_mock.get(VIDEO_URL).mock(
            return_value=httpx.Response(200, content=VIDEO_BYTES)
        )

        results = await asyncio.gather(*(video_cache.cache_video(VIDEO_URL) for _ in range(5)))

        assert route.call_count == 1
        assert all(result.success for result in results)
        assert len({result.local_path for result in results}) == 1
        assert not video_cache.is_downloading(results[0].local_path)
        await video_cache.close()

    @pytest.mark.asyncio
    async def test_forwards_headers_to_origin(
        self, video_cache: VideoCacheService, respx_mock: respx.Router
    ) -> None:
        """Les en-tetes fournis sont transmis a l'origine."""
        route = respx_mock.get(VIDEO_URL).mock(
            return_value=httpx.Response(200, content=VIDEO_BYTES)
        )

        await video_cache.cache_video(VIDEO_URL, headers={"Authorization": "Bearer abc"})

        assert route.calls.last.request.headers["Authorization"] == "Bearer abc"
        await video_cache.close()

    @pytest.mark.asyncio
    async def test_http_error_leaves_no_file(
        self, video_cache: VideoCacheService, respx_mock: respx.Router
    ) -> None:
        """Un statut d'erreur donne un echec et aucun fichier."""
        respx_mock.get(VIDEO_URL).mock(return_value=httpx.Response(404))

        result = await video_cache.cache_video(VIDEO_URL)

        assert not result.success
        assert "404" in result.error
        assert list(video_cache.cache_dir.iterdir()) == []
        await video_cache.close()

    @pytest.mark.asyncio
    async def test_network_error_leaves_no_file(
        self, video_cache: VideoCacheService, respx_mock: respx.Router
    ) -> None:
        """Une erreur reseau donne un echec et aucun fichier."""
        respx_mock.get(VIDEO_URL).mock(side_effect=httpx.ConnectError("connection refused"))

        result = await video_cache.cache_video(VIDEO_URL)

        assert not result.success
        assert result.error.startswith("Download error")
        assert list(video_cache.cache_dir.iterdir()) == []
        await video_cache.close()

    @pytest.mark.asyncio
    async def test_interrupted_download_removes_partial_file(
        self, video_cache: VideoCacheService, respx_mock: respx.Router
    ) -> None:
        """Une coupure apres l'ecriture de premiers octets ne laisse aucun fichier."""
        respx_mock.get(VIDEO_URL).mock(
            return_value=httpx.Response(200, stream=_InterruptedStream())
        )

        result = await video_cache.cache_video(VIDEO_URL)

        assert not result.success
        assert result.error.startswith("Download error")
        assert list(video_cache.cache_dir.iterdir()) == []
        await video_cache.close()

    @pytest.mark.asyncio
    async def test_write_error_removes_partial_file(
        self, video_cache: VideoCacheService, respx_mock: respx.Router
    ) -> None:
        """Un echec du renommage final est rapporte et le fichier partiel supprime."""
        respx_mock.get(VIDEO_URL).mock(return_value=httpx.Response(200, content=VIDEO_BYTES))

        with patch("memopyk.services.video_cache.os.replace", side_effect=OSError("disk full")):
            result = await video_cache.cache_video(VIDEO_URL)

        assert not result.success
        assert result.error.startswith("File write error")
        assert list(video_cache.cache_dir.iterdir()) == []
        await video_cache.close()

    @pytest.mark.asyncio
    async def test_invalid_content_length_is_ignored(
        self, video_cache: VideoCacheService, respx_mock: respx.Router
    ) -> None:
        """Un Content-Length non numerique n'empeche pas la mise en cache."""
        respx_mock.get(VIDEO_URL).mock(
            return_value=httpx.Response(
                200, content=VIDEO_BYTES, headers={"content-length": "abc"}
            )
        )

        result = await video_cache.cache_video(VIDEO_URL)

        assert result.success
        assert (video_cache.cache_dir / result.local_path).read_bytes() == VIDEO_BYTES
        await video_cache.close()

    @pytest.mark.asyncio
    async def test_failure_is_retried_on_next_call(
        self, video_cache: VideoCacheService, respx_mock: respx.Router
    ) -> None:
        """Apres un echec, un nouvel appel relance le telechargement."""
        route = respx_mock.get(VIDEO_URL).mock(
            side_effect=[httpx.Response(503), httpx.Response(200, content=VIDEO_BYTES)]
        )

        first = await video_cache.cache_video(VIDEO_URL)
        second = await video_cache.cache_video(VIDEO_URL)

        assert not first.success
        assert second.success
        assert route.call_count == 2
        await video_cache.close()

    @pytest.mark.asyncio
    async def test_rejects_unsafe_filename(self, video_cache: VideoCacheService) -> None:
        """Un nom impose contenant un chemin est refuse sans requete."""
        result = await video_cache.cache_video(VIDEO_URL, filename="../escape.mp4")
        assert not result.success
        assert "Invalid cache filename" in result.error

    @pytest.mark.asyncio
    async def test_recache_downloads_again(
        self, video_cache: VideoCacheService, cached_file: str, respx_mock: respx.Router
    ) -> None:
        """recache_video remplace la copie locale."""
        new_bytes = b"new-version" * 10
        route = respx_mock.get(VIDEO_URL).mock(return_value=httpx.Response(200, content=new_bytes))

        result = await video_cache.recache_video(VIDEO_URL)

        assert result.success and not result.existing_file
        assert (video_cache.cache_dir / cached_file).read_bytes() == new_bytes
        assert route.call_count == 1
        await video_cache.close()


class TestServeCachedVideo:
    """Tests pour serve_cached_video()."""

    def test_unknown_file_is_404(self, video_cache: VideoCacheService) -> None:
        assert video_cache.serve_cached_video("missing.mp4").status == 404

    def test_path_traversal_is_404(self, video_cache: VideoCacheService) -> None:
        assert video_cache.serve_cached_video("../secret.mp4").status == 404

    def test_full_file_without_range(self, video_cache: VideoCacheService, cached_file: str) -> None:
        """Sans Range, le fichier entier est servi avec un statut 200."""
        video = video_cache.serve_cached_video(cached_file)

        assert video.status == 200
        assert video.headers["Content-Length"] == str(len(VIDEO_BYTES))
        assert video.headers["Accept-Ranges"] == "bytes"
        assert video.headers["Content-Type"] == "video/mp4"
        assert video.headers["Cache-Control"] == "public, max-age=31536000"
        assert _read_body(video) == VIDEO_BYTES

    def test_partial_content(self, video_cache: VideoCacheService, cached_file: str) -> None:
        """bytes=100-199 sert exactement 100 octets avec un statut 206."""
        video = video_cache.serve_cached_video(cached_file, "bytes=100-199")

        assert video.status == 206
        assert video.headers["Content-Range"] == f"bytes 100-199/{len(VIDEO_BYTES)}"
        assert video.headers["Content-Length"] == "100"
        assert _read_body(video) == VIDEO_BYTES[100:200]

    def test_open_range_spanning_several_chunks(
        self, tmp_path: Path, video_cache: VideoCacheService
    ) -> None:
        """Une plage plus grande qu'un bloc de lecture est servie entierement."""
        big = bytes(range(256)) * 4096  # 1 Mo
        (video_cache.cache_dir / "big.mp4").write_bytes(big)

        video = video_cache.serve_cached_video("big.mp4", "bytes=1000-")

        assert video.status == 206
        assert _read_body(video) == big[1000:]

    def test_malformed_range_serves_full_file(
        self, video_cache: VideoCacheService, cached_file: str
    ) -> None:
        video = video_cache.serve_cached_video(cached_file, "bytes=garbage")
        assert video.status == 200

    def test_unsatisfiable_range(self, video_cache: VideoCacheService, cached_file: str) -> None:
        """Une plage hors du fichier donne 416 et Content-Range bytes */taille."""
        video = video_cache.serve_cached_video(cached_file, f"bytes={len(VIDEO_BYTES)}-")

        assert video.status == 416
        assert video.headers["Content-Range"] == f"bytes */{len(VIDEO_BYTES)}"
        assert video.body is None


class TestAdministration:
    """Tests pour delete_cached_video() et get_cache_info()."""

    def test_delete_existing_file(self, video_cache: VideoCacheService, cached_file: str) -> None:
        assert video_cache.delete_cached_video(cached_file)
        assert not video_cache.is_cached(cached_file)

    def test_delete_missing_file(self, video_cache: VideoCacheService) -> None:
        assert not video_cache.delete_cached_video("missing.mp4")

    def test_cache_info_counts_video_files_only(self, video_cache: VideoCacheService) -> None:
        (video_cache.cache_dir / "b.mp4").write_bytes(b"x" * 10)
        (video_cache.cache_dir / "a.MOV").write_bytes(b"x" * 5)
        (video_cache.cache_dir / "notes.txt").write_bytes(b"x" * 100)
        (video_cache.cache_dir / "c.mp4.part").write_bytes(b"x" * 100)

        info = video_cache.get_cache_info()

        assert info.files == ["a.MOV", "b.mp4"]
        assert info.total_files == 2
        assert info.total_size == 15
        assert info.cache_dir == video_cache.cache_dir
