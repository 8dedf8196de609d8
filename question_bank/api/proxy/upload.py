"""Storage upload proxy: POST /api/proxy-upload?filePath=<object path>.

Reads the raw request body as a byte stream (no form parsing), enforces the
single server-side size limit while reading, and writes it to storage in one
upstream request with the server-held service key. Admin sessions only.
"""

import logging

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

from question_bank.api.proxy._common import (
    ALL_METHODS,
    FILE_PATH_PARAM,
    cors_headers,
    error_response,
    method_not_allowed,
    valid_object_path,
)
from question_bank.api.v1.dependencies import build_storage_service
from question_bank.core.config import Settings, get_settings
from question_bank.core.limiter import limit_upload
from question_bank.domain.exceptions import AuthenticationException
from question_bank.infrastructure.exceptions import StorageUploadError

logger = logging.getLogger(__name__)

router = APIRouter()

DEFAULT_CONTENT_TYPE = "application/pdf"
_ALLOWED = "POST, OPTIONS"


def _bearer_token(request: Request) -> str | None:
    scheme, _, token = request.headers.get("authorization", "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def _declared_length(request: Request) -> int | None:
    raw = request.headers.get("content-length", "").strip()
    return int(raw) if raw.isdigit() else None


@router.api_route("/proxy-upload", methods=ALL_METHODS, include_in_schema=False)
async def proxy_upload(request: Request) -> Response:
    settings = get_settings()
    cors = cors_headers(
        settings.proxy_allowed_origin, _ALLOWED, "Authorization, Content-Type"
    )
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=cors)
    if request.method != "POST":
        return method_not_allowed(_ALLOWED, cors)
    return await _store_upload(request, settings, cors)


# Only POSTs count against the upload rate limit; preflights and 405s do not.
@limit_upload
async def _store_upload(
    request: Request, settings: Settings, cors: dict[str, str]
) -> Response:
    file_path = request.query_params.get(FILE_PATH_PARAM, "").strip()
    if not file_path:
        return error_response(400, "File path is required", headers=cors)
    if not valid_object_path(file_path):
        return error_response(400, "Invalid file path", headers=cors)

    token = _bearer_token(request)
    if token is None:
        return error_response(401, "Authentication required", headers=cors)
    try:
        session = await request.app.state.session_service.resolve(token)
    except AuthenticationException as e:
        return error_response(401, "Authentication required", e.message, headers=cors)
    if not session.is_admin:
        return error_response(403, "Admin access required", headers=cors)

    max_bytes = settings.max_upload_size
    too_large = f"Maximum upload size is {max_bytes} bytes"
    declared = _declared_length(request)
    if declared is not None and declared > max_bytes:
        return error_response(413, "File too large", too_large, headers=cors)

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > max_bytes:
            return error_response(413, "File too large", too_large, headers=cors)
    if not body:
        return error_response(400, "File body is required", headers=cors)

    content_type = request.headers.get("content-type") or DEFAULT_CONTENT_TYPE
    storage = build_storage_service(request.app.state.supabase, settings)
    try:
        data = await storage.upload(file_path, bytes(body), content_type)
    except StorageUploadError as e:
        if e.status_code is None:
            logger.error("Storage upload for %s failed: %s", file_path, e.reason, exc_info=e)
        return error_response(500, "Failed to upload file", e.reason, headers=cors)

    logger.info("Admin %s uploaded %s (%d bytes)", session.user_id, file_path, len(body))
    content: dict = {"success": True}
    if data is not None:
        content["data"] = data
    return JSONResponse(status_code=200, content=content, headers=cors)
