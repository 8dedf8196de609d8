"""Supabase-backed download log repository (implements IDownloadLogRepository)."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from question_bank.application.dtos.download import (
    DownloadedQuestion,
    DownloadLogCreate,
    DownloadLogResult,
)
from question_bank.infrastructure.supabase._rest_client import SupabaseRESTClient
from question_bank.infrastructure.supabase.tables import (
    TABLE_DOWNLOADS_LOG,
    TABLE_PAST_QUESTIONS,
)
from question_bank.shared.utils.datetime import parse_timestamp

# History rows embed the linked question through the question_id foreign key.
_HISTORY_COLUMNS = (
    "id, user_id, file_path, downloaded_at, "
    f"{TABLE_PAST_QUESTIONS}(id, course_code, course_title, file_path)"
)


def _to_result(row: dict[str, Any]) -> DownloadLogResult:
    embedded = row.get(TABLE_PAST_QUESTIONS)
    question = None
    if isinstance(embedded, dict) and embedded.get("id") is not None:
        question = DownloadedQuestion(
            id=str(embedded["id"]),
            course_code=embedded.get("course_code") or "",
            course_title=embedded.get("course_title") or "",
            file_path=embedded.get("file_path") or "",
        )
    return DownloadLogResult(
        id=str(row.get("id", "")),
        user_id=row.get("user_id") or "",
        file_path=row.get("file_path") or "",
        downloaded_at=parse_timestamp(row.get("downloaded_at")),
        question=question,
    )


class SupabaseDownloadLogRepository:
    """Append-only download log in the downloads_log table."""

    def __init__(self, client: SupabaseRESTClient) -> None:
        self._table = client.table(TABLE_DOWNLOADS_LOG)

    async def create(self, data: DownloadLogCreate) -> DownloadLogResult:
        row: dict[str, Any] = {"user_id": data.user_id, "file_path": data.file_path}
        if data.question_id is not None:
            row["question_id"] = data.question_id
        rows = await self._table.insert(row)
        if not rows:
            raise RuntimeError("Insert into downloads_log returned no row")
        return _to_result(rows[0])

    async def list_for_user(self, user_id: str) -> list[DownloadLogResult]:
        rows = await (
            self._table.select(_HISTORY_COLUMNS)
            .eq("user_id", user_id)
            .order("downloaded_at", descending=True)
            .execute()
        )
        return [_to_result(r) for r in rows]

    async def count_for_user(self, user_id: str, since: datetime | None = None) -> int:
        query = self._table.select("id").eq("user_id", user_id)
        if since is not None:
            query = query.gte("downloaded_at", since.isoformat())
        return await query.count()
