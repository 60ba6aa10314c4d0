"""
Fonctions utilitaires partagees dans le projet MEMOPYK.

- cache_filename : nom de fichier deterministe pour une URL video
- is_safe_filename : refuse les noms qui sortiraient du repertoire de cache
- sanitize_object_name : nom d'objet compatible avec le stockage
- guess_content_type : type MIME d'un fichier d'apres son extension
"""

import hashlib
import mimetypes
import re
from pathlib import PurePosixPath
from urllib.parse import unquote, urlsplit

from memopyk.utils.constants import DEFAULT_VIDEO_CONTENT_TYPE

_UNSAFE_OBJECT_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


def url_hash(url: str, length: int = 8) -> str:
    """Hash MD5 court d'une URL (identifiant, pas de securite)."""
    return hashlib.md5(url.encode("utf-8")).hexdigest()[:length]


def cache_filename(url: str) -> str:
    """
    Calcule le nom de fichier en cache d'une URL.

    Le dernier segment du chemin est conserve quand il porte une extension :
    "https://x/memopyk-gallery/Mon%20Film.mp4" -> "Mon Film_<hash>.mp4".
    Sinon le nom se replie sur "video_<hash>.mp4".

    Le hash porte sur l'URL complete : deux URLs differentes donnent
    toujours deux noms differents, la meme URL toujours le meme nom.
    """
    digest = url_hash(url)
    original = unquote(PurePosixPath(urlsplit(url).path).name)

    if original and "." in original and is_safe_filename(original):
        stem, _, extension = original.rpartition(".")
        if stem and extension:
            return f"{stem}_{digest}.{extension}"

    return f"video_{digest}.mp4"


def is_safe_filename(filename: str) -> bool:
    """Vrai si le nom designe un fichier direct du repertoire (pas de chemin)."""
    if not filename or filename in (".", ".."):
        return False
    if "/" in filename or "\\" in filename or "\x00" in filename:
        return False
    return not filename.startswith(".")


def sanitize_object_name(filename: str) -> str:
    """Remplace par "_" les caracteres hors [A-Za-z0-9.-]."""
    return _UNSAFE_OBJECT_CHARS.sub("_", filename)


def guess_content_type(filename: str, default: str = DEFAULT_VIDEO_CONTENT_TYPE) -> str:
    """Type MIME deduit de l'extension, ou `default` si inconnu."""
    content_type, _ = mimetypes.guess_type(filename)
    return content_type or default
