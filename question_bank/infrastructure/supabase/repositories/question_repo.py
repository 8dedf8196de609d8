"""Supabase-backed past question repository (implements IQuestionRepository)."""

from __future__ import annotations

from typing import Any

from question_bank.application.dtos.question import (
    QuestionCreate,
    QuestionFilters,
    QuestionResult,
)
from question_bank.infrastructure.supabase._rest_client import SupabaseRESTClient
from question_bank.infrastructure.supabase.tables import TABLE_PAST_QUESTIONS
from question_bank.shared.utils.datetime import parse_timestamp

_SEARCH_COLUMNS = ("course_title", "course_code")


def to_question_result(row: dict[str, Any]) -> QuestionResult:
    """Map a past_questions row to the read-model."""
    return QuestionResult(
        id=str(row.get("id", "")),
        course_code=row.get("course_code") or "",
        course_title=row.get("course_title") or "",
        department=row.get("department") or "",
        level=str(row.get("level") or ""),
        session=row.get("session") or "",
        semester=row.get("semester") or "",
        file_path=row.get("file_path") or "",
        created_at=parse_timestamp(row.get("created_at")),
    )


class SupabaseQuestionRepository:
    """Past question catalog stored in the past_questions table."""

    def __init__(self, client: SupabaseRESTClient) -> None:
        self._table = client.table(TABLE_PAST_QUESTIONS)

    async def search(self, filters: QuestionFilters) -> list[QuestionResult]:
        """Substring match on title/code plus equality filters, newest first."""
        query = self._table.select("*")
        if filters.q:
            query = query.ilike_any(_SEARCH_COLUMNS, filters.q)
        for column in ("department", "level", "session", "semester"):
            value = getattr(filters, column)
            if value:
                query = query.eq(column, value)
        rows = await query.order("created_at", descending=True).execute()
        return [to_question_result(r) for r in rows]

    async def get_by_id(self, question_id: str) -> QuestionResult | None:
        rows = await self._table.select("*").eq("id", question_id).limit(1).execute()
        if not rows:
            return None
        return to_question_result(rows[0])

    async def list_recent(self, limit: int) -> list[QuestionResult]:
        rows = await (
            self._table.select("*")
            .order("created_at", descending=True)
            .limit(limit)
            .execute()
        )
        return [to_question_result(r) for r in rows]

    async def list_departments(self) -> list[str]:
        """Distinct, non-empty departments in alphabetical order."""
        rows = await (
            self._table.select("department")
            .neq("department", "")
            .order("department")
            .execute()
        )
        seen: dict[str, None] = {}
        for row in rows:
            name = (row.get("department") or "").strip()
            if name:
                seen.setdefault(name, None)
        return sorted(seen)

    async def count(self) -> int:
        return await self._table.select("id").count()

    async def create(self, data: QuestionCreate) -> QuestionResult:
        rows = await self._table.insert(
            {
                "course_code": data.course_code,
                "course_title": data.course_title,
                "department": data.department,
                "level": data.level,
                "session": data.session,
                "semester": data.semester,
                "file_path": data.file_path,
            }
        )
        if not rows:
            raise RuntimeError("Insert into past_questions returned no row")
        return to_question_result(rows[0])

    async def delete(self, question_id: str) -> QuestionResult | None:
        rows = await self._table.delete().eq("id", question_id).execute()
        if not rows:
            return None
        return to_question_result(rows[0])
