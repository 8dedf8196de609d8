"""Supabase-backed contact message repository (implements IContactRepository)."""

from question_bank.application.dtos.contact import ContactMessageCreate
from question_bank.infrastructure.supabase._rest_client import SupabaseRESTClient
from question_bank.infrastructure.supabase.tables import TABLE_CONTACT_MESSAGES


class SupabaseContactRepository:
    def __init__(self, client: SupabaseRESTClient) -> None:
        self._table = client.table(TABLE_CONTACT_MESSAGES)

    async def create(self, data: ContactMessageCreate) -> None:
        await self._table.insert(
            {"name": data.name, "email": data.email, "message": data.message}
        )
