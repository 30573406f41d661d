"""
User service: list, fetch, activate/deactivate, delete and stats for `users`.
"""

from __future__ import annotations

from marketplace_admin.domains.models import PaginatedResponse, Row, UserQueryParams, UserStats
from marketplace_admin.infrastructure.supabase.rest_client import SupabaseClient
from marketplace_admin.services.queries import (
    apply_search,
    count_rows,
    delete_by_id,
    failure_message,
    fetch_by_id,
    fetch_page,
    update_by_id,
    utc_now_iso,
)

TABLE = "users"
SEARCH_COLUMNS = ("full_name", "email")


def get_users(client: SupabaseClient, params: UserQueryParams | None = None) -> PaginatedResponse[Row]:
    """Paginated users, filtered by type / active flag and searched by name or email."""
    params = params or UserQueryParams()
    with failure_message("Failed to fetch users"):
        query = client.table(TABLE).select("*", count="exact")
        if params.user_type:
            query = query.eq("user_type", params.user_type)
        if params.is_active is not None:
            query = query.eq("is_active", params.is_active)
        query = apply_search(query, SEARCH_COLUMNS, params.search)
        return fetch_page(query, params)


def get_user_by_id(client: SupabaseClient, user_id: str) -> Row:
    with failure_message("Failed to fetch user"):
        return fetch_by_id(client, TABLE, user_id)


def update_user_status(client: SupabaseClient, user_id: str, is_active: bool) -> Row:
    with failure_message("Failed to update user status"):
        return update_by_id(client, TABLE, user_id, {"is_active": is_active, "updated_at": utc_now_iso()})


def delete_user(client: SupabaseClient, user_id: str) -> None:
    with failure_message("Failed to delete user"):
        delete_by_id(client, TABLE, user_id)


def get_user_stats(client: SupabaseClient) -> UserStats:
    with failure_message("Failed to fetch user stats"):
        total = count_rows(client, TABLE)
        active = count_rows(client, TABLE, is_active=True)
        customers = count_rows(client, TABLE, user_type="customer")
        providers = count_rows(client, TABLE, user_type="provider")
        admins = count_rows(client, TABLE, user_type="admin")
    return UserStats(
        total=total,
        active=active,
        inactive=total - active,
        customers=customers,
        providers=providers,
        admins=admins,
    )
