"""Storage download proxy: GET /api/proxy-storage?filePath=<object path>.

Fetches the object with the server-held service key and returns its bytes
unmodified, with the content headers the store reported, a public cache
policy and a framing policy that lets the in-page PDF viewer embed it.
"""

import logging
from urllib.parse import quote

from fastapi import APIRouter, Request, Response

from question_bank.api.proxy._common import (
    ALL_METHODS,
    FILE_PATH_PARAM,
    cors_headers,
    error_response,
    method_not_allowed,
    valid_object_path,
)
from question_bank.api.v1.dependencies import build_storage_service
from question_bank.core.config import get_settings
from question_bank.infrastructure.exceptions import StorageDownloadError

logger = logging.getLogger(__name__)

router = APIRouter()

DEFAULT_CONTENT_TYPE = "application/pdf"
_ALLOWED = "GET, OPTIONS"


def attachment_disposition(file_name: str) -> str:
    """Content-Disposition forcing a download, safe for any file name."""
    cleaned = "".join(ch for ch in file_name if ch not in '"\\\r\n').strip()
    fallback = cleaned.encode("ascii", "ignore").decode() or "download"
    return (
        f'attachment; filename="{fallback}"; '
        f"filename*=UTF-8''{quote(cleaned or 'download', safe='')}"
    )


@router.api_route("/proxy-storage", methods=ALL_METHODS, include_in_schema=False)
async def proxy_storage(request: Request) -> Response:
    settings = get_settings()
    cors = cors_headers(settings.proxy_allowed_origin, _ALLOWED, "Authorization")
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=cors)
    if request.method != "GET":
        return method_not_allowed(_ALLOWED, cors)

    file_path = request.query_params.get(FILE_PATH_PARAM, "").strip()
    if not file_path:
        return error_response(400, "File path is required", headers=cors)
    if not valid_object_path(file_path):
        return error_response(400, "Invalid file path", headers=cors)

    storage = build_storage_service(request.app.state.supabase, settings)
    try:
        obj = await storage.download(file_path)
    except StorageDownloadError as e:
        if e.status_code is None:
            logger.error("Storage fetch for %s failed: %s", file_path, e.reason, exc_info=e)
            details = e.reason
        else:
            logger.warning("Storage returned %s for %s", e.status_code, file_path)
            details = f"Storage responded with status {e.status_code}"
        return error_response(500, "Failed to fetch file", details, headers=cors)

    headers = {
        **cors,
        "Content-Type": obj.content_type or DEFAULT_CONTENT_TYPE,
        "Cache-Control": settings.proxy_cache_control,
        "X-Frame-Options": "SAMEORIGIN",
        "Content-Security-Policy": "frame-ancestors 'self'",
    }
    file_name = request.query_params.get("fileName", "").strip()
    if file_name:
        headers["Content-Disposition"] = attachment_disposition(file_name)
    elif obj.content_disposition:
        headers["Content-Disposition"] = obj.content_disposition
    # Content-Length is set from the bytes actually sent; the upstream value
    # can describe a compressed body that httpx has already decoded.
    return Response(content=obj.content, status_code=200, headers=headers)
