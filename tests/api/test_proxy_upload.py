"""Upload proxy: method gating, admin-only access, size limit, single upstream write."""

import pytest
from httpx import AsyncClient

from question_bank.core.limiter import UPLOAD_LIMIT, limiter
from tests.fakes import (
    ADMIN_HEADERS,
    OBJECT_PREFIX,
    SERVICE_KEY,
    USER_HEADERS,
    FakeSupabase,
    respond,
)

PDF_BYTES = b"%PDF-1.7\n" + bytes(range(256)) * 4
UPLOAD_URL = "/api/proxy-upload?filePath=CompSci%2F123-exam.pdf"
UPSTREAM_PATH = f"{OBJECT_PREFIX}CompSci/123-exam.pdf"
UPLOAD_LIMIT_COUNT = int(UPLOAD_LIMIT.split("/")[0])


async def test_options_allows_post(client: AsyncClient) -> None:
    response = await client.options("/api/proxy-upload")
    assert response.status_code == 200
    assert response.content == b""
    assert "POST" in response.headers["access-control-allow-methods"]
    assert "Content-Type" in response.headers["access-control-allow-headers"]


@pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE"])
async def test_unsupported_method_returns_405(client: AsyncClient, method: str) -> None:
    response = await client.request(method, UPLOAD_URL, headers=ADMIN_HEADERS)
    assert response.status_code == 405
    assert "error" in response.json()


async def test_missing_file_path_returns_400_before_auth(client: AsyncClient) -> None:
    response = await client.post("/api/proxy-upload", content=PDF_BYTES)
    assert response.status_code == 400
    assert response.json() == {"error": "File path is required"}


@pytest.mark.parametrize(
    "file_path", ["../../../../rest/v1/profiles", "../private/x.pdf", "a/./b.pdf", "a//b.pdf"]
)
async def test_path_leaving_bucket_returns_400(
    client: AsyncClient, fake_supabase: FakeSupabase, file_path: str
) -> None:
    fake_supabase.on("POST", "/", respond(200, json_body={}), prefix=True)
    response = await client.post(
        "/api/proxy-upload",
        params={"filePath": file_path},
        content=PDF_BYTES,
        headers=ADMIN_HEADERS,
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid file path"}
    assert fake_supabase.requests_to("POST", "/") == []


async def test_requires_bearer_token(client: AsyncClient, fake_supabase: FakeSupabase) -> None:
    response = await client.post(UPLOAD_URL, content=PDF_BYTES)
    assert response.status_code == 401
    assert response.json()["error"] == "Authentication required"
    assert fake_supabase.requests_to("POST", "/storage") == []


async def test_rejected_token_returns_401(client: AsyncClient) -> None:
    response = await client.post(
        UPLOAD_URL, content=PDF_BYTES, headers={"Authorization": "Bearer expired"}
    )
    assert response.status_code == 401


async def test_non_admin_returns_403(client: AsyncClient, fake_supabase: FakeSupabase) -> None:
    response = await client.post(UPLOAD_URL, content=PDF_BYTES, headers=USER_HEADERS)
    assert response.status_code == 403
    assert response.json() == {"error": "Admin access required"}
    assert fake_supabase.requests_to("POST", "/storage") == []


async def test_upload_issues_exactly_one_upstream_write(
    client: AsyncClient, fake_supabase: FakeSupabase
) -> None:
    """Path P and bytes B: one upstream POST to the URL for P carrying B unchanged."""
    fake_supabase.on(
        "POST",
        UPSTREAM_PATH,
        respond(200, json_body={"Key": "past-questions/CompSci/123-exam.pdf"}),
    )
    response = await client.post(
        UPLOAD_URL,
        content=PDF_BYTES,
        headers={**ADMIN_HEADERS, "Content-Type": "application/pdf"},
    )
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "data": {"Key": "past-questions/CompSci/123-exam.pdf"},
    }
    uploads = fake_supabase.requests_to("POST", "/storage")
    assert len(uploads) == 1
    (upstream,) = uploads
    assert upstream.url.path == UPSTREAM_PATH
    assert upstream.content == PDF_BYTES
    assert upstream.headers["content-type"] == "application/pdf"
    assert upstream.headers["authorization"] == f"Bearer {SERVICE_KEY}"
    assert upstream.headers["x-upsert"] == "false"


async def test_inbound_content_type_is_forwarded(
    client: AsyncClient, fake_supabase: FakeSupabase
) -> None:
    fake_supabase.on("POST", UPSTREAM_PATH, respond(200, json_body={"Key": "k"}))
    await client.post(
        UPLOAD_URL,
        content=b"plain text",
        headers={**ADMIN_HEADERS, "Content-Type": "text/plain"},
    )
    (upstream,) = fake_supabase.requests_to("POST", "/storage")
    assert upstream.headers["content-type"] == "text/plain"


async def test_non_json_upstream_reply_omits_data(
    client: AsyncClient, fake_supabase: FakeSupabase
) -> None:
    fake_supabase.on("POST", UPSTREAM_PATH, respond(200, content=b"ok"))
    response = await client.post(UPLOAD_URL, content=PDF_BYTES, headers=ADMIN_HEADERS)
    assert response.json() == {"success": True}


async def test_upstream_failure_returns_500_with_upstream_text(
    client: AsyncClient, fake_supabase: FakeSupabase
) -> None:
    fake_supabase.on(
        "POST",
        UPSTREAM_PATH,
        respond(400, json_body={"statusCode": "409", "error": "Duplicate", "message": "The resource already exists"}),
    )
    response = await client.post(UPLOAD_URL, content=PDF_BYTES, headers=ADMIN_HEADERS)
    assert response.status_code == 500
    assert response.json() == {
        "error": "Failed to upload file",
        "details": "Storage responded with status 400: The resource already exists",
    }
    assert len(fake_supabase.requests_to("POST", "/storage")) == 1


async def test_declared_length_over_limit_returns_413(
    client: AsyncClient, fake_supabase: FakeSupabase, override_settings
) -> None:
    override_settings(MAX_UPLOAD_SIZE="16")
    response = await client.post(UPLOAD_URL, content=b"x" * 17, headers=ADMIN_HEADERS)
    assert response.status_code == 413
    assert response.json() == {
        "error": "File too large",
        "details": "Maximum upload size is 16 bytes",
    }
    assert fake_supabase.requests_to("POST", "/storage") == []


async def test_streamed_body_over_limit_returns_413(
    client: AsyncClient, fake_supabase: FakeSupabase, override_settings
) -> None:
    """Chunked body without Content-Length is cut off once the running total passes the limit."""
    override_settings(MAX_UPLOAD_SIZE="16")

    async def chunks():
        for _ in range(4):
            yield b"x" * 8

    response = await client.post(UPLOAD_URL, content=chunks(), headers=ADMIN_HEADERS)
    assert response.status_code == 413
    assert fake_supabase.requests_to("POST", "/storage") == []


async def test_body_at_limit_is_accepted(
    client: AsyncClient, fake_supabase: FakeSupabase, override_settings
) -> None:
    override_settings(MAX_UPLOAD_SIZE="16")
    fake_supabase.on("POST", UPSTREAM_PATH, respond(200, json_body={"Key": "k"}))
    response = await client.post(UPLOAD_URL, content=b"x" * 16, headers=ADMIN_HEADERS)
    assert response.status_code == 200


async def test_empty_body_returns_400(client: AsyncClient, fake_supabase: FakeSupabase) -> None:
    response = await client.post(UPLOAD_URL, content=b"", headers=ADMIN_HEADERS)
    assert response.status_code == 400
    assert response.json() == {"error": "File body is required"}
    assert fake_supabase.requests_to("POST", "/storage") == []


async def test_upsert_follows_config(
    client: AsyncClient, fake_supabase: FakeSupabase, override_settings
) -> None:
    override_settings(STORAGE_UPSERT="true")
    fake_supabase.on("POST", UPSTREAM_PATH, respond(200, json_body={"Key": "k"}))
    await client.post(UPLOAD_URL, content=PDF_BYTES, headers=ADMIN_HEADERS)
    (upstream,) = fake_supabase.requests_to("POST", "/storage")
    assert upstream.headers["x-upsert"] == "true"


@pytest.fixture
def upload_rate_limit(client: AsyncClient):
    """Enable SlowAPI for one test with empty counters."""
    limiter.reset()
    limiter.enabled = True
    yield
    limiter.enabled = False
    limiter.reset()


async def test_preflights_and_405s_do_not_count_against_upload_limit(
    client: AsyncClient, upload_rate_limit
) -> None:
    for _ in range(UPLOAD_LIMIT_COUNT + 5):
        assert (await client.options("/api/proxy-upload")).status_code == 200
        assert (await client.put(UPLOAD_URL)).status_code == 405
    for _ in range(UPLOAD_LIMIT_COUNT):
        assert (await client.post("/api/proxy-upload", content=PDF_BYTES)).status_code == 400
    response = await client.post("/api/proxy-upload", content=PDF_BYTES)
    assert response.status_code == 429
