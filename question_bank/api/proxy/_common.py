"""Helpers shared by the storage proxies (CORS, method gating, error bodies)."""

from fastapi.responses import JSONResponse

from question_bank.infrastructure.supabase import InvalidObjectPath, encode_object_path

# Every method is routed to the proxies so unsupported ones get the JSON 405.
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
FILE_PATH_PARAM = "filePath"


def cors_headers(origin: str, methods: str, allow_headers: str) -> dict[str, str]:
    headers = {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Methods": methods,
        "Access-Control-Allow-Headers": allow_headers,
    }
    if origin != "*":
        headers["Vary"] = "Origin"
    return headers


def error_response(
    status_code: int,
    error: str,
    details: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Proxy error body: {"error": ..., "details"?: ...}."""
    content: dict[str, str] = {"error": error}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def valid_object_path(file_path: str) -> bool:
    """False for paths with empty, "." or ".." segments (they would leave the bucket)."""
    try:
        encode_object_path(file_path)
    except InvalidObjectPath:
        return False
    return True


def method_not_allowed(allowed: str, cors: dict[str, str]) -> JSONResponse:
    return error_response(405, "Method Not Allowed", headers={**cors, "Allow": allowed})
