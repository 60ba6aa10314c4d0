"""
Entités du domaine.

Exports :
- VideoCacheResult : Résultat d'une mise en cache
- CacheInfo : État du répertoire de cache
- CachedVideo : Réponse HTTP construite depuis un fichier en cache
- FaqSection : Questions fréquentes regroupées par section
"""

from memopyk.core.entities.faq import FaqSection
from memopyk.core.entities.video_cache import CachedVideo, CacheInfo, VideoCacheResult

__all__ = [
    "CachedVideo",
    "CacheInfo",
    "FaqSection",
    "VideoCacheResult",
]
