"""Thin Supabase REST client (no supabase-py).

Covers the three Supabase HTTP APIs the service uses:
- PostgREST (/rest/v1) for table rows,
- GoTrue (/auth/v1) for hosted auth,
- Storage (/storage/v1) for objects.

All HTTP calls use httpx.AsyncClient so they do not block the event loop.
The service-role key is attached here, server side, and never leaves the process.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any
from urllib.parse import quote

import httpx

from question_bank.infrastructure.exceptions import SupabaseError

logger = logging.getLogger(__name__)

_REST = "/rest/v1"
_AUTH = "/auth/v1"
_STORAGE = "/storage/v1"

# Characters with meaning in PostgREST filter syntax; stripped from free-text terms.
_FILTER_RESERVED = str.maketrans("", "", ",()*%\\\"")


class InvalidObjectPath(ValueError):
    """Object path that cannot be mapped to a URL inside the bucket."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Invalid object path: {path!r}")
        self.path = path


def encode_object_path(path: str) -> str:
    """Percent-encode a storage object path segment by segment (slashes kept).

    Used for every object URL (download, upload, delete) so that one stored
    path always maps to exactly one upstream URL. Empty, "." and ".."
    segments are refused: the HTTP client would collapse them and the
    request would leave the bucket.

    Raises:
        InvalidObjectPath: If the path has an empty or dot segment.
    """
    segments = path.split("/")
    if any(s in ("", ".", "..") for s in segments):
        raise InvalidObjectPath(path)
    return "/".join(quote(segment, safe="") for segment in segments)


def _error_message(resp: httpx.Response) -> str:
    """Best-effort error text from a PostgREST, GoTrue or Storage error body."""
    try:
        body = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase
    if isinstance(body, dict):
        for key in ("message", "msg", "error_description", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return resp.text or resp.reason_phrase


def _parse_count(resp: httpx.Response) -> int:
    """Total from a PostgREST Content-Range header ('0-9/42' or '*/42')."""
    _, _, total = resp.headers.get("content-range", "").partition("/")
    if not total or total == "*":
        return 0
    return int(total)


async def _request_async(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    headers: dict[str, str],
    params: list[tuple[str, str]] | None = None,
    json_body: Any = None,
    content: bytes | None = None,
) -> httpx.Response:
    """Perform one HTTP request. Raises SupabaseError on transport failure or non-2xx."""
    try:
        resp = await client.request(
            method,
            url,
            headers=headers,
            params=params,
            json=json_body,
            content=content,
        )
    except httpx.HTTPError as e:
        raise SupabaseError(f"Supabase request failed: {e!s}") from e
    if resp.is_success:
        return resp
    message = _error_message(resp)
    logger.warning(
        "Supabase %s %s returned %s: %s", method, url, resp.status_code, message
    )
    raise SupabaseError(message, resp.status_code)


def _json_or_empty(resp: httpx.Response) -> Any:
    raw = resp.content
    return resp.json() if raw else None


class _Query:
    """Fluent PostgREST query; filters/order/limit run on the server."""

    def __init__(
        self,
        table: "TableReference",
        method: str,
        *,
        columns: str | None = None,
        body: dict[str, Any] | None = None,
    ) -> None:
        self._table = table
        self._method = method
        self._body = body
        self._params: list[tuple[str, str]] = []
        if columns is not None:
            self._params.append(("select", columns))

    def _filter(self, column: str, op: str, value: Any) -> "_Query":
        self._params.append((column, f"{op}.{value}"))
        return self

    def eq(self, column: str, value: Any) -> "_Query":
        return self._filter(column, "eq", value)

    def neq(self, column: str, value: Any) -> "_Query":
        return self._filter(column, "neq", value)

    def gte(self, column: str, value: Any) -> "_Query":
        return self._filter(column, "gte", value)

    def ilike_any(self, columns: Iterable[str], term: str) -> "_Query":
        """Case-insensitive substring match on any of columns (PostgREST `or`)."""
        cleaned = term.translate(_FILTER_RESERVED).strip()
        if not cleaned:
            return self
        clauses = ",".join(f"{c}.ilike.*{cleaned}*" for c in columns)
        self._params.append(("or", f"({clauses})"))
        return self

    def order(self, column: str, *, descending: bool = False) -> "_Query":
        self._params.append(("order", f"{column}.{'desc' if descending else 'asc'}"))
        return self

    def limit(self, n: int) -> "_Query":
        self._params.append(("limit", str(n)))
        return self

    async def execute(self) -> list[dict[str, Any]]:
        """Run the query and return rows (writes return the affected rows)."""
        headers = self._table._client.service_headers()
        if self._method in ("PATCH", "DELETE"):
            headers["Prefer"] = "return=representation"
        resp = await _request_async(
            self._table._client._http,
            self._method,
            self._table.url,
            headers=headers,
            params=self._params,
            json_body=self._body,
        )
        rows = _json_or_empty(resp)
        return rows if isinstance(rows, list) else []

    async def count(self) -> int:
        """Return the exact number of matching rows without fetching them."""
        headers = self._table._client.service_headers()
        headers["Prefer"] = "count=exact"
        resp = await _request_async(
            self._table._client._http,
            "HEAD",
            self._table.url,
            headers=headers,
            params=self._params,
        )
        return _parse_count(resp)


class TableReference:
    """Reference to one PostgREST table."""

    def __init__(self, client: "SupabaseRESTClient", name: str) -> None:
        self._client = client
        self.name = name
        self.url = f"{client.base_url}{_REST}/{name}"

    def select(self, columns: str = "*") -> _Query:
        return _Query(self, "GET", columns=columns)

    def update(self, values: dict[str, Any]) -> _Query:
        """Start a PATCH; add filters (e.g. .eq('id', x)) then .execute()."""
        return _Query(self, "PATCH", body=values)

    def delete(self) -> _Query:
        """Start a DELETE; add filters then .execute()."""
        return _Query(self, "DELETE")

    async def insert(self, rows: dict[str, Any] | list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Insert one or more rows and return them as stored."""
        headers = self._client.service_headers()
        headers["Prefer"] = "return=representation"
        resp = await _request_async(
            self._client._http, "POST", self.url, headers=headers, json_body=rows
        )
        out = _json_or_empty(resp)
        return out if isinstance(out, list) else []

    async def upsert(
        self,
        rows: dict[str, Any] | list[dict[str, Any]],
        *,
        on_conflict: str = "id",
    ) -> list[dict[str, Any]]:
        """Insert or merge rows on the conflict column (safe to retry)."""
        headers = self._client.service_headers()
        headers["Prefer"] = "resolution=merge-duplicates,return=representation"
        resp = await _request_async(
            self._client._http,
            "POST",
            self.url,
            headers=headers,
            params=[("on_conflict", on_conflict)],
            json_body=rows,
        )
        out = _json_or_empty(resp)
        return out if isinstance(out, list) else []


class AuthAPI:
    """GoTrue endpoints used by the session service."""

    def __init__(self, client: "SupabaseRESTClient") -> None:
        self._client = client
        self._base = f"{client.base_url}{_AUTH}"

    def _headers(self, access_token: str | None = None) -> dict[str, str]:
        key = self._client.auth_key
        return {
            "apikey": key,
            "Authorization": f"Bearer {access_token or key}",
        }

    async def sign_up(
        self, email: str, password: str, data: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Create an auth user. Returns a session payload, or the bare user when
        email confirmation is required."""
        resp = await _request_async(
            self._client._http,
            "POST",
            f"{self._base}/signup",
            headers=self._headers(),
            json_body={"email": email, "password": password, "data": data or {}},
        )
        return _json_or_empty(resp) or {}

    async def sign_in_with_password(self, email: str, password: str) -> dict[str, Any]:
        resp = await _request_async(
            self._client._http,
            "POST",
            f"{self._base}/token",
            headers=self._headers(),
            params=[("grant_type", "password")],
            json_body={"email": email, "password": password},
        )
        return _json_or_empty(resp) or {}

    async def refresh_session(self, refresh_token: str) -> dict[str, Any]:
        resp = await _request_async(
            self._client._http,
            "POST",
            f"{self._base}/token",
            headers=self._headers(),
            params=[("grant_type", "refresh_token")],
            json_body={"refresh_token": refresh_token},
        )
        return _json_or_empty(resp) or {}

    async def get_user(self, access_token: str) -> dict[str, Any]:
        """Return the auth user for an access token (401 when invalid/expired)."""
        resp = await _request_async(
            self._client._http,
            "GET",
            f"{self._base}/user",
            headers=self._headers(access_token),
        )
        return _json_or_empty(resp) or {}

    async def sign_out(self, access_token: str) -> None:
        await _request_async(
            self._client._http,
            "POST",
            f"{self._base}/logout",
            headers=self._headers(access_token),
        )

    async def reset_password_for_email(
        self, email: str, redirect_to: str | None = None
    ) -> None:
        params = [("redirect_to", redirect_to)] if redirect_to else None
        await _request_async(
            self._client._http,
            "POST",
            f"{self._base}/recover",
            headers=self._headers(),
            params=params,
            json_body={"email": email},
        )


class StorageBucket:
    """Objects in one storage bucket, addressed by path."""

    def __init__(self, client: "SupabaseRESTClient", bucket: str) -> None:
        self._client = client
        self.bucket = bucket

    def object_url(self, path: str) -> str:
        return (
            f"{self._client.base_url}{_STORAGE}/object/"
            f"{self.bucket}/{encode_object_path(path)}"
        )

    def public_url(self, path: str) -> str:
        return (
            f"{self._client.base_url}{_STORAGE}/object/public/"
            f"{self.bucket}/{encode_object_path(path)}"
        )

    async def download(self, path: str) -> httpx.Response:
        """Fetch an object with the service key; the full body is read into memory."""
        return await _request_async(
            self._client._http,
            "GET",
            self.object_url(path),
            headers=self._client.service_headers(),
        )

    async def upload(
        self,
        path: str,
        content: bytes,
        content_type: str,
        *,
        upsert: bool = False,
    ) -> httpx.Response:
        """Create the object in a single POST carrying the body unchanged."""
        headers = self._client.service_headers()
        headers["Content-Type"] = content_type
        headers["x-upsert"] = "true" if upsert else "false"
        return await _request_async(
            self._client._http,
            "POST",
            self.object_url(path),
            headers=headers,
            content=content,
        )

    async def remove(self, path: str) -> None:
        await _request_async(
            self._client._http,
            "DELETE",
            self.object_url(path),
            headers=self._client.service_headers(),
        )


class SupabaseRESTClient:
    """Lightweight Supabase client using the REST APIs (no supabase-py)."""

    def __init__(
        self,
        base_url: str,
        service_key: str,
        *,
        auth_key: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._service_key = service_key
        self.auth_key = auth_key or service_key
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        self._owns_http = http_client is None
        self.auth = AuthAPI(self)

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    def service_headers(self) -> dict[str, str]:
        """Fresh header dict carrying the service-role key."""
        return {
            "apikey": self._service_key,
            "Authorization": f"Bearer {self._service_key}",
        }

    def table(self, name: str) -> TableReference:
        return TableReference(self, name)

    def storage(self, bucket: str) -> StorageBucket:
        return StorageBucket(self, bucket)
