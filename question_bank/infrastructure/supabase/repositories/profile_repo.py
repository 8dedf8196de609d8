"""Supabase-backed profile repository (implements IProfileRepository)."""

from __future__ import annotations

from typing import Any

from question_bank.application.dtos.profile import ProfileResult, ProfileUpdate
from question_bank.infrastructure.supabase._rest_client import SupabaseRESTClient
from question_bank.infrastructure.supabase.tables import TABLE_PROFILES
from question_bank.shared.utils.datetime import parse_timestamp, utc_now


def _to_result(row: dict[str, Any]) -> ProfileResult:
    return ProfileResult(
        id=str(row.get("id", "")),
        full_name=row.get("full_name") or "",
        department=row.get("department"),
        role=row.get("role"),
        updated_at=parse_timestamp(row.get("updated_at")),
    )


class SupabaseProfileRepository:
    """User profiles keyed by the auth subject ID."""

    def __init__(self, client: SupabaseRESTClient) -> None:
        self._table = client.table(TABLE_PROFILES)

    async def get(self, user_id: str) -> ProfileResult | None:
        rows = await self._table.select("*").eq("id", user_id).limit(1).execute()
        if not rows:
            return None
        return _to_result(rows[0])

    async def upsert(self, user_id: str, full_name: str, role: str) -> ProfileResult:
        rows = await self._table.upsert(
            {"id": user_id, "full_name": full_name, "role": role},
            on_conflict="id",
        )
        if not rows:
            return ProfileResult(id=user_id, full_name=full_name, role=role)
        return _to_result(rows[0])

    async def create(self, user_id: str, full_name: str) -> ProfileResult:
        rows = await self._table.insert({"id": user_id, "full_name": full_name})
        if not rows:
            return ProfileResult(id=user_id, full_name=full_name)
        return _to_result(rows[0])

    async def update(self, user_id: str, changes: ProfileUpdate) -> ProfileResult | None:
        values: dict[str, Any] = {"updated_at": utc_now().isoformat()}
        if changes.full_name is not None:
            values["full_name"] = changes.full_name
        if changes.department is not None:
            values["department"] = changes.department
        rows = await self._table.update(values).eq("id", user_id).execute()
        if not rows:
            return None
        return _to_result(rows[0])

    async def count(self) -> int:
        return await self._table.select("id").count()
