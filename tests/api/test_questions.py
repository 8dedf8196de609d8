"""Catalog API: search filters, recent, departments, detail and share link."""

import pytest
from httpx import AsyncClient

from tests.fakes import MISSING_ID, QUESTION_ID, FakeSupabase, question_row, respond


async def test_search_sends_filters_to_table_store(
    client: AsyncClient, fake_supabase: FakeSupabase
) -> None:
    fake_supabase.on("GET", "/rest/v1/past_questions", respond(200, json_body=[question_row()]))
    response = await client.get(
        "/api/v1/questions",
        params={"q": "data", "department": "CompSci", "level": "200", "semester": "First"},
    )
    assert response.status_code == 200
    (call,) = fake_supabase.requests_to("GET", "/rest/v1/past_questions")
    params = call.url.params
    assert params["or"] == "(course_title.ilike.*data*,course_code.ilike.*data*)"
    assert params["department"] == "eq.CompSci"
    assert params["level"] == "eq.200"
    assert params["semester"] == "eq.First"
    assert "session" not in params
    assert params["order"] == "created_at.desc"


async def test_search_items_link_to_download_proxy(
    client: AsyncClient, fake_supabase: FakeSupabase
) -> None:
    fake_supabase.on("GET", "/rest/v1/past_questions", respond(200, json_body=[question_row()]))
    response = await client.get("/api/v1/questions")
    (item,) = response.json()
    assert item["course_code"] == "CSC201"
    assert item["file_url"] == "/api/proxy-storage?filePath=CompSci%2F1700000000000-exam.pdf"
    assert item["created_at"].startswith("2024-03-01T10:00:00")


async def test_search_term_strips_filter_syntax(
    client: AsyncClient, fake_supabase: FakeSupabase
) -> None:
    fake_supabase.on("GET", "/rest/v1/past_questions", respond(200, json_body=[]))
    await client.get("/api/v1/questions", params={"q": "a,b(c)*"})
    (call,) = fake_supabase.requests_to("GET", "/rest/v1/past_questions")
    assert call.url.params["or"] == "(course_title.ilike.*abc*,course_code.ilike.*abc*)"


async def test_recent_returns_three_newest(
    client: AsyncClient, fake_supabase: FakeSupabase
) -> None:
    rows = [question_row(f"q{i}") for i in range(3)]
    fake_supabase.on("GET", "/rest/v1/past_questions", respond(200, json_body=rows))
    response = await client.get("/api/v1/questions/recent")
    assert [q["id"] for q in response.json()] == ["q0", "q1", "q2"]
    (call,) = fake_supabase.requests_to("GET", "/rest/v1/past_questions")
    assert call.url.params["limit"] == "3"
    assert call.url.params["order"] == "created_at.desc"


async def test_departments_are_distinct_and_sorted(
    client: AsyncClient, fake_supabase: FakeSupabase
) -> None:
    rows = [
        {"department": "Law"},
        {"department": "CompSci"},
        {"department": "Law"},
        {"department": "  "},
        {"department": None},
    ]
    fake_supabase.on("GET", "/rest/v1/past_questions", respond(200, json_body=rows))
    response = await client.get("/api/v1/questions/departments")
    assert response.json() == ["CompSci", "Law"]


async def test_get_question_returns_record(
    client: AsyncClient, fake_supabase: FakeSupabase
) -> None:
    fake_supabase.on("GET", "/rest/v1/past_questions", respond(200, json_body=[question_row()]))
    response = await client.get(f"/api/v1/questions/{QUESTION_ID}")
    assert response.status_code == 200
    assert response.json()["id"] == QUESTION_ID
    (call,) = fake_supabase.requests_to("GET", "/rest/v1/past_questions")
    assert call.url.params["id"] == f"eq.{QUESTION_ID}"


async def test_get_missing_question_returns_404(
    client: AsyncClient, fake_supabase: FakeSupabase
) -> None:
    fake_supabase.on("GET", "/rest/v1/past_questions", respond(200, json_body=[]))
    response = await client.get(f"/api/v1/questions/{MISSING_ID}")
    assert response.status_code == 404
    assert response.json()["error"] == "RESOURCE_NOT_FOUND"


async def test_share_link_uses_public_object_url(
    client: AsyncClient, fake_supabase: FakeSupabase
) -> None:
    fake_supabase.on("GET", "/rest/v1/past_questions", respond(200, json_body=[question_row()]))
    response = await client.get(f"/api/v1/questions/{QUESTION_ID}/share")
    assert response.json() == {
        "title": "CSC201 - Data Structures",
        "url": "https://test.supabase.co/storage/v1/object/public/past-questions/CompSci/1700000000000-exam.pdf",
    }


@pytest.mark.parametrize("path", ["/api/v1/questions/abc", "/api/v1/questions/abc/share"])
async def test_malformed_id_is_rejected_without_upstream_call(
    client: AsyncClient, fake_supabase: FakeSupabase, path: str
) -> None:
    response = await client.get(path)
    assert response.status_code == 422
    assert fake_supabase.requests_to("GET", "/rest/v1/past_questions") == []


async def test_table_store_outage_returns_502(
    client: AsyncClient, fake_supabase: FakeSupabase
) -> None:
    fake_supabase.on(
        "GET", "/rest/v1/past_questions", respond(503, json_body={"message": "upstream down"})
    )
    response = await client.get("/api/v1/questions")
    assert response.status_code == 502
    assert response.json()["error"] == "UPSTREAM_ERROR"
