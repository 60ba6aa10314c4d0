"""
Utilitaires et constantes pour MEMOPYK.

Ce module contient les constantes et fonctions utilitaires partagees.
"""

from memopyk.utils.constants import (
    CACHE_CONTROL_IMMUTABLE,
    DEFAULT_BUCKET,
    VIDEO_EXTENSIONS,
)
from memopyk.utils.helpers import cache_filename, is_safe_filename, sanitize_object_name

__all__ = [
    "CACHE_CONTROL_IMMUTABLE",
    "DEFAULT_BUCKET",
    "VIDEO_EXTENSIONS",
    "cache_filename",
    "is_safe_filename",
    "sanitize_object_name",
]
