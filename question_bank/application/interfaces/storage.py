"""Storage service interface (port). Implementation: SupabaseStorageService."""

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class StoredObject:
    """Object bytes plus the content headers the backend reported."""

    content: bytes
    content_type: str | None = None
    content_disposition: str | None = None


class IStorageService(Protocol):
    """Protocol for the object store holding the past question files."""

    async def download(self, file_path: str) -> StoredObject:
        """Fetch an object. Raises StorageDownloadError with the upstream status."""
        ...

    async def upload(
        self, file_path: str, content: bytes, content_type: str
    ) -> Any:
        """Write an object in one request; return the backend's JSON reply (or None)."""
        ...

    async def delete(self, file_path: str) -> bool:
        """Remove an object. Returns False if it did not exist."""
        ...

    def public_url(self, file_path: str) -> str:
        """Return the public URL of an object (for share links)."""
        ...
