"""Supabase REST (PostgREST) and Auth (GoTrue) clients."""

from marketplace_admin.infrastructure.supabase.auth_client import AuthClient
from marketplace_admin.infrastructure.supabase.rest_client import (
    QueryBuilder,
    QueryResult,
    SupabaseClient,
    build_or_filter,
)

__all__ = ["AuthClient", "QueryBuilder", "QueryResult", "SupabaseClient", "build_or_filter"]
