"""
Tests unitaires pour les fonctions utilitaires.

Ces tests verifient:
- Le nom de fichier en cache derive d'une URL (deterministe, unique par URL)
- Le refus des noms de fichiers qui sortiraient du repertoire de cache
- L'assainissement des noms d'objets et la deduction du type MIME
"""

import hashlib

import pytest

from memopyk.utils.helpers import (
    cache_filename,
    guess_content_type,
    is_safe_filename,
    sanitize_object_name,
    url_hash,
)

URL = "https://xyz.supabase.co/storage/v1/object/public/memopyk-gallery/VideoHero1.mp4"


class TestCacheFilename:
    """Tests pour cache_filename."""

    def test_keeps_original_name_and_extension(self) -> None:
        """Le dernier segment est conserve, suffixe du hash de l'URL."""
        digest = hashlib.md5(URL.encode()).hexdigest()[:8]
        assert cache_filename(URL) == f"VideoHero1_{digest}.mp4"

    def test_is_deterministic(self) -> None:
        """La meme URL donne toujours le meme nom."""
        assert cache_filename(URL) == cache_filename(URL)

    def test_distinct_urls_give_distinct_names(self) -> None:
        """Deux URLs avec le meme nom de fichier ne se confondent pas."""
        other = URL.replace("memopyk-gallery", "memopyk-hero")
        assert cache_filename(URL) != cache_filename(other)

    def test_percent_encoded_name_is_decoded(self) -> None:
        """Les caracteres encodes du segment sont decodes."""
        name = cache_filename("https://cdn.test/videos/Mon%20Film.mov")
        assert name.startswith("Mon Film_")
        assert name.endswith(".mov")

    def test_name_without_extension_falls_back(self) -> None:
        """Sans extension, le nom se replie sur video_<hash>.mp4."""
        url = "https://cdn.test/stream/12345"
        assert cache_filename(url) == f"video_{url_hash(url)}.mp4"

    def test_query_string_is_ignored_in_name_but_not_in_hash(self) -> None:
        """La query string ne fait pas partie du nom mais change le hash."""
        first = cache_filename("https://cdn.test/a/film.mp4?token=1")
        second = cache_filename("https://cdn.test/a/film.mp4?token=2")
        assert first.startswith("film_") and second.startswith("film_")
        assert first != second


class TestIsSafeFilename:
    """Tests pour is_safe_filename."""

    @pytest.mark.parametrize("name", ["film.mp4", "Mon Film_1a2b3c4d.mov", "video_abc.mp4"])
    def test_plain_names_are_safe(self, name: str) -> None:
        assert is_safe_filename(name)

    @pytest.mark.parametrize(
        "name", ["", ".", "..", "../etc/passwd", "a/b.mp4", "a\\b.mp4", ".hidden", "a\x00.mp4"]
    )
    def test_paths_and_hidden_names_are_rejected(self, name: str) -> None:
        assert not is_safe_filename(name)


class TestSanitizeObjectName:
    def test_replaces_unsafe_characters(self) -> None:
        assert sanitize_object_name("Mon film (final)é.mp4") == "Mon_film__final__.mp4"

    def test_keeps_safe_characters(self) -> None:
        assert sanitize_object_name("clip-01.v2.mp4") == "clip-01.v2.mp4"


class TestGuessContentType:
    def test_known_extensions(self) -> None:
        assert guess_content_type("a.mp4") == "video/mp4"
        assert guess_content_type("a.mov") == "video/quicktime"

    def test_unknown_extension_defaults_to_mp4(self) -> None:
        assert guess_content_type("a.unknownext") == "video/mp4"
