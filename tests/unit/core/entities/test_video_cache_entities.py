"""Tests des entites du cache video."""

from pathlib import Path

from memopyk.core.entities import CacheInfo, VideoCacheResult


class TestVideoCacheResult:
    def test_success_to_dict(self) -> None:
        result = VideoCacheResult(success=True, local_path="film_1a2b3c4d.mp4")
        assert result.to_dict() == {"success": True, "localPath": "film_1a2b3c4d.mp4"}

    def test_existing_file_flag(self) -> None:
        result = VideoCacheResult(success=True, local_path="a.mp4", existing_file=True)
        assert result.to_dict()["existingFile"] is True

    def test_failure_to_dict(self) -> None:
        result = VideoCacheResult(success=False, error="HTTP 404: Not Found")
        assert result.to_dict() == {"success": False, "error": "HTTP 404: Not Found"}


class TestCacheInfo:
    def test_total_size_mb_is_rounded(self) -> None:
        info = CacheInfo(
            total_files=2, total_size=3 * 1024 * 1024 + 512 * 1024, files=["a.mp4", "b.mp4"],
            cache_dir=Path("/tmp/cache"),
        )
        assert info.total_size_mb == 3.5
