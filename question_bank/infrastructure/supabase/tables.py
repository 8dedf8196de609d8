"""Supabase table names (schema-in-code).

Tables are owned by the Supabase project (created in its SQL editor or
migrations there); this service only queries them. Use these constants so
table names stay consistent across repositories.

Example:
    rows = await client.table(TABLE_PAST_QUESTIONS).select("*").limit(3).execute()
"""

TABLE_PAST_QUESTIONS = "past_questions"
TABLE_DOWNLOADS_LOG = "downloads_log"
TABLE_PROFILES = "profiles"
TABLE_CONTACT_MESSAGES = "contact_messages"
