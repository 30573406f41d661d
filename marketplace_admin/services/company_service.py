"""
Company service. Approval also verifies the company; rejection or suspension
revokes verification.
"""

from __future__ import annotations

from typing import Any

from marketplace_admin.domains.models import CompanyQueryParams, CompanyStats, PaginatedResponse, Row
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

TABLE = "companies"
SEARCH_COLUMNS = ("name", "registration_number", "email")
SELECT_WITH_JOINS = """
    *,
    owner:users!owner_id(*),
    category:categories!category_id(*)
"""


def get_companies(client: SupabaseClient, params: CompanyQueryParams | None = None) -> PaginatedResponse[Row]:
    params = params or CompanyQueryParams()
    with failure_message("Failed to fetch companies"):
        query = client.table(TABLE).select(SELECT_WITH_JOINS, count="exact")
        if params.status:
            query = query.eq("status", params.status)
        if params.category_id:
            query = query.eq("category_id", params.category_id)
        query = apply_search(query, SEARCH_COLUMNS, params.search)
        return fetch_page(query, params)


def get_company_by_id(client: SupabaseClient, company_id: str) -> Row:
    with failure_message("Failed to fetch company"):
        return fetch_by_id(client, TABLE, company_id, SELECT_WITH_JOINS)


def status_update_payload(status: str) -> dict[str, Any]:
    """Columns written alongside a status change."""
    now = utc_now_iso()
    values: dict[str, Any] = {"status": status, "updated_at": now}
    if status == "approved":
        values["approved_at"] = now
        values["is_verified"] = True
    elif status in ("rejected", "suspended"):
        values["is_verified"] = False
    return values


def update_company_status(client: SupabaseClient, company_id: str, status: str) -> Row:
    with failure_message("Failed to update company status"):
        return update_by_id(client, TABLE, company_id, status_update_payload(status), SELECT_WITH_JOINS)


def delete_company(client: SupabaseClient, company_id: str) -> None:
    with failure_message("Failed to delete company"):
        delete_by_id(client, TABLE, company_id)


def get_company_stats(client: SupabaseClient) -> CompanyStats:
    with failure_message("Failed to fetch company stats"):
        return CompanyStats(
            total=count_rows(client, TABLE),
            pending=count_rows(client, TABLE, status="pending"),
            approved=count_rows(client, TABLE, status="approved"),
            rejected=count_rows(client, TABLE, status="rejected"),
            suspended=count_rows(client, TABLE, status="suspended"),
        )
