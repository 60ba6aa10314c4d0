"""
Services metier de MEMOPYK.

- VideoCacheService : miroir disque des videos et service par plages
- CacheWarmer : prechargement des videos des contenus actifs
- TokenStore : jetons d'acces du back-office
"""

from memopyk.services.auth import TokenStore
from memopyk.services.cache_warmer import CacheWarmer, WarmupReport
from memopyk.services.video_cache import VideoCacheService

__all__ = [
    "CacheWarmer",
    "TokenStore",
    "VideoCacheService",
    "WarmupReport",
]
