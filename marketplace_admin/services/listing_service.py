"""
Service-listing service (the marketplace's `services` table).

Activating a listing also flips `is_active` on; suspending, rejecting or
deleting flips it off. Other statuses leave the flag alone.
"""

from __future__ import annotations

from typing import Any

from marketplace_admin.domains.models import PaginatedResponse, Row, ServiceQueryParams, ServiceStats
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

TABLE = "services"
SEARCH_COLUMNS = ("title", "description")
SELECT_WITH_JOINS = """
    *,
    business:businesses!business_id(*),
    category:categories!category_id(*),
    provider:users!provider_id(*)
"""
_DEACTIVATING = ("suspended", "rejected", "deleted")


def get_services(client: SupabaseClient, params: ServiceQueryParams | None = None) -> PaginatedResponse[Row]:
    params = params or ServiceQueryParams()
    with failure_message("Failed to fetch services"):
        query = client.table(TABLE).select(SELECT_WITH_JOINS, count="exact")
        if params.status:
            query = query.eq("status", params.status)
        if params.category_id:
            query = query.eq("category_id", params.category_id)
        if params.business_id:
            query = query.eq("business_id", params.business_id)
        query = apply_search(query, SEARCH_COLUMNS, params.search)
        return fetch_page(query, params)


def get_service_by_id(client: SupabaseClient, service_id: str) -> Row:
    with failure_message("Failed to fetch service"):
        return fetch_by_id(client, TABLE, service_id, SELECT_WITH_JOINS)


def status_update_payload(status: str) -> dict[str, Any]:
    values: dict[str, Any] = {"status": status, "updated_at": utc_now_iso()}
    if status == "active":
        values["is_active"] = True
    elif status in _DEACTIVATING:
        values["is_active"] = False
    return values


def update_service_status(client: SupabaseClient, service_id: str, status: str) -> Row:
    with failure_message("Failed to update service status"):
        return update_by_id(client, TABLE, service_id, status_update_payload(status), SELECT_WITH_JOINS)


def delete_service(client: SupabaseClient, service_id: str) -> None:
    with failure_message("Failed to delete service"):
        delete_by_id(client, TABLE, service_id)


def get_service_stats(client: SupabaseClient) -> ServiceStats:
    with failure_message("Failed to fetch service stats"):
        return ServiceStats(
            total=count_rows(client, TABLE),
            active=count_rows(client, TABLE, status="active"),
            pending=count_rows(client, TABLE, status="pending"),
            suspended=count_rows(client, TABLE, status="suspended"),
            rejected=count_rows(client, TABLE, status="rejected"),
            request_deletion=count_rows(client, TABLE, status="requestDeletion"),
        )
