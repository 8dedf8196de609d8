"""Supabase Storage backend for past question files.

Every call carries the service-role key (added by SupabaseRESTClient); object
paths are encoded with encode_object_path so download, upload and delete
address the same URL for the same stored path.
"""

from __future__ import annotations

import logging
from typing import Any

from question_bank.application.interfaces.storage import StoredObject
from question_bank.infrastructure.exceptions import (
    StorageDeleteError,
    StorageDownloadError,
    StorageUploadError,
    SupabaseError,
)
from question_bank.infrastructure.supabase._rest_client import (
    InvalidObjectPath,
    SupabaseRESTClient,
)

logger = logging.getLogger(__name__)


def _reason(e: SupabaseError | InvalidObjectPath) -> str:
    if isinstance(e, InvalidObjectPath):
        return str(e)
    if e.status_code is None:
        return e.message
    return f"Storage responded with status {e.status_code}: {e.message}"


class SupabaseStorageService:
    """Implements IStorageService against one Supabase Storage bucket."""

    def __init__(
        self,
        client: SupabaseRESTClient,
        bucket: str,
        *,
        upsert: bool = False,
    ) -> None:
        self._bucket = client.storage(bucket)
        self.bucket = bucket
        self.upsert = upsert

    def public_url(self, file_path: str) -> str:
        return self._bucket.public_url(file_path)

    async def download(self, file_path: str) -> StoredObject:
        """Fetch the object; content headers are passed through as reported."""
        try:
            resp = await self._bucket.download(file_path)
        except InvalidObjectPath as e:
            raise StorageDownloadError(file_path, _reason(e)) from e
        except SupabaseError as e:
            raise StorageDownloadError(file_path, _reason(e), e.status_code) from e
        return StoredObject(
            content=resp.content,
            content_type=resp.headers.get("content-type"),
            content_disposition=resp.headers.get("content-disposition"),
        )

    async def upload(self, file_path: str, content: bytes, content_type: str) -> Any:
        """Create the object in one upstream request; returns the JSON reply or None."""
        try:
            resp = await self._bucket.upload(
                file_path, content, content_type, upsert=self.upsert
            )
        except InvalidObjectPath as e:
            raise StorageUploadError(file_path, _reason(e)) from e
        except SupabaseError as e:
            raise StorageUploadError(file_path, _reason(e), e.status_code) from e
        logger.info(
            "Stored %s (%d bytes) in bucket %s", file_path, len(content), self.bucket
        )
        try:
            return resp.json()
        except ValueError:
            return None

    async def delete(self, file_path: str) -> bool:
        """Remove the object. Returns False if it was already missing."""
        try:
            await self._bucket.remove(file_path)
        except InvalidObjectPath as e:
            raise StorageDeleteError(file_path, _reason(e)) from e
        except SupabaseError as e:
            # Storage reports a missing object as 404, or 400 with a not-found message.
            if e.status_code == 404 or "not found" in e.message.lower():
                return False
            raise StorageDeleteError(file_path, _reason(e), e.status_code) from e
        return True
