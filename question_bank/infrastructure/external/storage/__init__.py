"""Object storage: Supabase Storage backend.

Implements application.interfaces.storage.IStorageService (download, upload,
delete, public_url). Built per request from the shared SupabaseRESTClient in
api.v1.dependencies.get_storage_service.
"""

from question_bank.infrastructure.external.storage.supabase_storage import (
    SupabaseStorageService,
)

__all__ = ["SupabaseStorageService"]
