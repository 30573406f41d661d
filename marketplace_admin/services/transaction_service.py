"""
Transaction service over the `payments` table. Read-only: list, fetch,
stats (counts plus completed revenue) and revenue by payment provider.
"""

from __future__ import annotations

from typing import Any

from marketplace_admin.domains.models import PaginatedResponse, Row, TransactionQueryParams, TransactionStats
from marketplace_admin.infrastructure.supabase.rest_client import SupabaseClient
from marketplace_admin.services.queries import apply_search, count_rows, failure_message, fetch_by_id, fetch_page

TABLE = "payments"
SEARCH_COLUMNS = ("order_id", "description", "provider_payment_id")
SELECT_WITH_JOINS = """
    *,
    customer:users!customer_id(*),
    business:businesses!business_id(*),
    order:orders!order_id(*)
"""
REPORT_PAGE_SIZE = 1000


def get_transactions(
    client: SupabaseClient,
    params: TransactionQueryParams | None = None,
) -> PaginatedResponse[Row]:
    params = params or TransactionQueryParams()
    with failure_message("Failed to fetch transactions"):
        query = client.table(TABLE).select(SELECT_WITH_JOINS, count="exact")
        if params.status:
            query = query.eq("status", params.status)
        if params.payment_provider:
            query = query.eq("payment_provider", params.payment_provider)
        if params.date_from:
            query = query.gte("created_at", params.date_from)
        if params.date_to:
            query = query.lte("created_at", params.date_to)
        query = apply_search(query, SEARCH_COLUMNS, params.search)
        return fetch_page(query, params)


def get_transaction_by_id(client: SupabaseClient, transaction_id: str) -> Row:
    with failure_message("Failed to fetch transaction"):
        return fetch_by_id(client, TABLE, transaction_id, SELECT_WITH_JOINS)


def sum_amounts(rows: list[dict[str, Any]]) -> float:
    return sum(float(r.get("amount") or 0) for r in rows)


def get_transaction_stats(client: SupabaseClient) -> TransactionStats:
    with failure_message("Failed to fetch transaction stats"):
        total = count_rows(client, TABLE)
        pending = count_rows(client, TABLE, status="pending")
        completed = count_rows(client, TABLE, status="completed")
        failed = count_rows(client, TABLE, status="failed")
        refunded = count_rows(client, TABLE, status="refunded")
        revenue_rows = client.table(TABLE).select("amount").eq("status", "completed").execute().data or []
    return TransactionStats(
        total=total,
        total_revenue=sum_amounts(revenue_rows),
        pending=pending,
        completed=completed,
        failed=failed,
        refunded=refunded,
    )


def get_transactions_by_date_range(client: SupabaseClient, date_from: str, date_to: str) -> PaginatedResponse[Row]:
    """Everything in the window (first 1000 rows) for reporting."""
    params = TransactionQueryParams(date_from=date_from, date_to=date_to, page_size=REPORT_PAGE_SIZE)
    return get_transactions(client, params)


def aggregate_by_provider(rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Group payments by provider, keeping first-seen order.

    Returns:
        [{"provider": str, "revenue": float, "count": int}, ...]
    """
    totals: dict[str, dict[str, Any]] = {}
    for row in rows:
        provider = row.get("payment_provider") or "unknown"
        entry = totals.setdefault(provider, {"provider": provider, "revenue": 0.0, "count": 0})
        entry["revenue"] += float(row.get("amount") or 0)
        entry["count"] += 1
    return list(totals.values())


def get_revenue_by_provider(client: SupabaseClient) -> list[dict[str, Any]]:
    with failure_message("Failed to fetch revenue by provider"):
        rows = (
            client.table(TABLE)
            .select("payment_provider, amount")
            .eq("status", "completed")
            .execute()
            .data
            or []
        )
    return aggregate_by_provider(rows)
