"""Supabase integration over REST (PostgREST, GoTrue, Storage)."""

from question_bank.infrastructure.supabase._rest_client import (
    InvalidObjectPath,
    SupabaseRESTClient,
    encode_object_path,
)
from question_bank.infrastructure.supabase.client import create_supabase_client

__all__ = [
    "InvalidObjectPath",
    "SupabaseRESTClient",
    "create_supabase_client",
    "encode_object_path",
]
