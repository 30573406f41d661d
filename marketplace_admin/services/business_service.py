"""
Business service: list, fetch, status change, delete and stats for `businesses`.
"""

from __future__ import annotations

from marketplace_admin.domains.models import BusinessQueryParams, BusinessStats, PaginatedResponse, Row
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

TABLE = "businesses"
SEARCH_COLUMNS = ("name", "address", "contact_email")
SELECT_WITH_JOINS = """
    *,
    company:companies!company_id(*),
    category:categories!category_id(*),
    subcategory:subcategories!subcategory_id(*)
"""


def get_businesses(client: SupabaseClient, params: BusinessQueryParams | None = None) -> PaginatedResponse[Row]:
    params = params or BusinessQueryParams()
    with failure_message("Failed to fetch businesses"):
        query = client.table(TABLE).select(SELECT_WITH_JOINS, count="exact")
        if params.status:
            query = query.eq("status", params.status)
        if params.category_id:
            query = query.eq("category_id", params.category_id)
        if params.company_id:
            query = query.eq("company_id", params.company_id)
        query = apply_search(query, SEARCH_COLUMNS, params.search)
        return fetch_page(query, params)


def get_business_by_id(client: SupabaseClient, business_id: str) -> Row:
    with failure_message("Failed to fetch business"):
        return fetch_by_id(client, TABLE, business_id, SELECT_WITH_JOINS)


def update_business_status(client: SupabaseClient, business_id: str, status: str) -> Row:
    with failure_message("Failed to update business status"):
        return update_by_id(
            client, TABLE, business_id, {"status": status, "updated_at": utc_now_iso()}, SELECT_WITH_JOINS
        )


def delete_business(client: SupabaseClient, business_id: str) -> None:
    with failure_message("Failed to delete business"):
        delete_by_id(client, TABLE, business_id)


def get_business_stats(client: SupabaseClient) -> BusinessStats:
    with failure_message("Failed to fetch business stats"):
        return BusinessStats(
            total=count_rows(client, TABLE),
            active=count_rows(client, TABLE, status="active"),
            pending=count_rows(client, TABLE, status="pending"),
            suspended=count_rows(client, TABLE, status="suspended"),
            rejected=count_rows(client, TABLE, status="rejected"),
        )
