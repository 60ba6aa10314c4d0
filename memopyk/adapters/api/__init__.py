"""
Clients HTTP vers les services externes.

Exports :
- SupabaseStorageClient : Stockage objet des medias (IObjectStorage)
- TransientStorageError, request_with_retry : Relance sur 429
"""

from memopyk.adapters.api.retry import TransientStorageError, request_with_retry
from memopyk.adapters.api.supabase_storage import SupabaseStorageClient

__all__ = [
    "SupabaseStorageClient",
    "TransientStorageError",
    "request_with_retry",
]
