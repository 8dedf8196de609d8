"""Tests for the Supabase REST client (query building, headers, error mapping)."""

import httpx
import pytest

from question_bank.infrastructure.exceptions import SupabaseError
from question_bank.infrastructure.supabase._rest_client import (
    InvalidObjectPath,
    SupabaseRESTClient,
    _parse_count,
    encode_object_path,
)


class Recorder:
    def __init__(self, response: httpx.Response) -> None:
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response


def _client(recorder: Recorder) -> SupabaseRESTClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
    return SupabaseRESTClient("https://x.supabase.co/", "svc", auth_key="anon", http_client=http)


@pytest.mark.parametrize(
    "path, expected",
    [
        ("a/b.pdf", "a/b.pdf"),
        ("Comp Sci/#1 exam?.pdf", "Comp%20Sci/%231%20exam%3F.pdf"),
        ("Médecine/é.pdf", "M%C3%A9decine/%C3%A9.pdf"),
    ],
)
def test_encode_object_path(path: str, expected: str) -> None:
    assert encode_object_path(path) == expected


@pytest.mark.parametrize("path", ["../x.pdf", "a/../../b", "./a.pdf", "/a.pdf", "a//b.pdf", "a/", ""])
def test_encode_object_path_refuses_dot_and_empty_segments(path: str) -> None:
    with pytest.raises(InvalidObjectPath):
        encode_object_path(path)


async def test_storage_calls_never_leave_the_bucket() -> None:
    recorder = Recorder(httpx.Response(200))
    bucket = _client(recorder).storage("past-questions")
    with pytest.raises(InvalidObjectPath):
        await bucket.download("../../../../auth/v1/admin/users")
    with pytest.raises(InvalidObjectPath):
        await bucket.upload("../../../../rest/v1/profiles", b"{}", "application/json")
    assert recorder.requests == []


@pytest.mark.parametrize(
    "header, expected", [("0-9/42", 42), ("*/7", 7), ("*/*", 0), ("", 0)]
)
def test_parse_count(header: str, expected: int) -> None:
    resp = httpx.Response(200, headers={"content-range": header} if header else {})
    assert _parse_count(resp) == expected


async def test_select_sends_filters_and_service_key() -> None:
    recorder = Recorder(httpx.Response(200, json=[{"id": 1}]))
    client = _client(recorder)
    rows = await (
        client.table("past_questions")
        .select("*")
        .ilike_any(["course_title", "course_code"], "calc")
        .eq("level", "100")
        .order("created_at", descending=True)
        .limit(3)
        .execute()
    )
    assert rows == [{"id": 1}]
    (request,) = recorder.requests
    assert str(request.url).startswith("https://x.supabase.co/rest/v1/past_questions?")
    assert request.headers["apikey"] == "svc"
    assert request.headers["authorization"] == "Bearer svc"
    assert request.url.params["or"] == "(course_title.ilike.*calc*,course_code.ilike.*calc*)"
    assert request.url.params["level"] == "eq.100"
    assert request.url.params["limit"] == "3"


async def test_blank_search_term_adds_no_filter() -> None:
    recorder = Recorder(httpx.Response(200, json=[]))
    await _client(recorder).table("t").select().ilike_any(["a"], " ,() ").execute()
    assert "or" not in recorder.requests[0].url.params


async def test_error_response_raises_with_status_and_message() -> None:
    recorder = Recorder(httpx.Response(409, json={"message": "duplicate key"}))
    with pytest.raises(SupabaseError) as exc_info:
        await _client(recorder).table("t").insert({"a": 1})
    assert exc_info.value.status_code == 409
    assert exc_info.value.message == "duplicate key"


async def test_transport_error_raises_without_status() -> None:
    def boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    http = httpx.AsyncClient(transport=httpx.MockTransport(boom))
    client = SupabaseRESTClient("https://x.supabase.co", "svc", http_client=http)
    with pytest.raises(SupabaseError) as exc_info:
        await client.table("t").select().execute()
    assert exc_info.value.status_code is None


async def test_auth_calls_use_auth_key() -> None:
    recorder = Recorder(httpx.Response(200, json={"id": "u1"}))
    client = _client(recorder)
    await client.auth.get_user("user-jwt")
    (request,) = recorder.requests
    assert request.url.path == "/auth/v1/user"
    assert request.headers["apikey"] == "anon"
    assert request.headers["authorization"] == "Bearer user-jwt"


async def test_storage_upload_is_single_post() -> None:
    recorder = Recorder(httpx.Response(200, json={"Key": "k"}))
    bucket = _client(recorder).storage("past-questions")
    await bucket.upload("Dept/1-a b.pdf", b"%PDF", "application/pdf", upsert=True)
    (request,) = recorder.requests
    assert request.method == "POST"
    assert request.url.raw_path == b"/storage/v1/object/past-questions/Dept/1-a%20b.pdf"
    assert request.headers["x-upsert"] == "true"
    assert request.headers["content-type"] == "application/pdf"
    assert request.content == b"%PDF"


def test_public_url() -> None:
    client = _client(Recorder(httpx.Response(200)))
    assert (
        client.storage("b").public_url("x/y z.pdf")
        == "https://x.supabase.co/storage/v1/object/public/b/x/y%20z.pdf"
    )


async def test_injected_http_client_is_not_closed() -> None:
    http = httpx.AsyncClient(transport=httpx.MockTransport(Recorder(httpx.Response(200))))
    client = SupabaseRESTClient("https://x.supabase.co", "svc", http_client=http)
    await client.aclose()
    assert not http.is_closed
    await http.aclose()
