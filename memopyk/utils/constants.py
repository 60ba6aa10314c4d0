"""
Constantes globales pour MEMOPYK.

Ce module contient les constantes utilisees dans l'application:
- Extensions video comptees dans le cache local
- Types MIME acceptes a l'upload
- Valeurs autorisees des champs enumeres (documents legaux, contacts, deploiements)
"""

# Bucket par defaut du stockage objet
DEFAULT_BUCKET = "memopyk-media"

# Extensions video reconnues dans le repertoire de cache
VIDEO_EXTENSIONS = frozenset({
    ".mp4",
    ".mov",
    ".avi",
    ".webm",
})

# Type de contenu par defaut d'une video en cache
DEFAULT_VIDEO_CONTENT_TYPE = "video/mp4"

# Les fichiers en cache ne changent jamais pour un nom donne (hash de l'URL)
CACHE_CONTROL_IMMUTABLE = "public, max-age=31536000"

# Taille des blocs lus/ecrits (256 Ko)
CHUNK_SIZE = 256 * 1024

# Prefixes MIME acceptes par l'upload et par la creation de bucket
ALLOWED_UPLOAD_MIME_PREFIXES = ("image/", "video/")

# Langues du site
LANGUAGES = ("en", "fr")

LEGAL_DOCUMENT_TYPES = frozenset({
    "legal_notice",
    "privacy_policy",
    "cookie_policy",
    "terms_of_sale",
    "terms_of_use",
    "faq",
})

CONTACT_STATUSES = frozenset({
    "new",
    "contacted",
    "qualified",
    "converted",
    "closed",
})

DEPLOYMENT_TYPES = frozenset({"deployment", "nginx_setup"})

DEPLOYMENT_STATUSES = frozenset({"success", "failed", "in_progress"})
