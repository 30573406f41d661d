"""
Query helpers shared by the entity services: paginated list, count, by-id
fetch and the "Failed to ..." error wrapping.
"""

from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator

from marketplace_admin.domains.models import PaginatedResponse, QueryParams, Row
from marketplace_admin.infrastructure.supabase.rest_client import QueryBuilder, SupabaseClient, build_or_filter
from marketplace_admin.utils.errors import ApiError, as_api_error
from marketplace_admin.utils.logger import get_logger

logger = get_logger()


def utc_now_iso() -> str:
    """Timestamp in the store's format, e.g. 2024-03-05T10:00:00.000Z."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


@contextmanager
def failure_message(fallback: str) -> Iterator[None]:
    """Re-raise anything that is not an ApiError as ApiError(fallback)."""
    try:
        yield
    except ApiError:
        raise
    except Exception as e:
        logger.exception("%s: %s", fallback, e)
        raise as_api_error(e, fallback) from e


def apply_search(query: QueryBuilder, columns: tuple[str, ...], search: str | None) -> QueryBuilder:
    if search and search.strip():
        query = query.or_(build_or_filter(columns, search.strip()))
    return query


def fetch_page(query: QueryBuilder, params: QueryParams) -> PaginatedResponse[Row]:
    """Order, slice and run a list query that was selected with count="exact"."""
    offset = params.offset
    query = query.order(params.sort_by, ascending=params.ascending)
    query = query.range(offset, offset + params.page_size - 1)
    result = query.execute()
    rows = result.data or []
    total = result.count or 0
    return PaginatedResponse.build(rows, total, params.page, params.page_size)


def count_rows(client: SupabaseClient, table: str, **filters: Any) -> int:
    """Exact row count (HEAD request) with optional equality filters."""
    query = client.table(table).select("*", count="exact", head=True)
    for column, value in filters.items():
        query = query.eq(column, value)
    return query.execute().count or 0


def fetch_by_id(client: SupabaseClient, table: str, item_id: str, columns: str = "*") -> Row:
    return client.table(table).select(columns).eq("id", item_id).single().execute().data


def update_by_id(client: SupabaseClient, table: str, item_id: str, values: dict[str, Any], columns: str = "*") -> Row:
    logger.info("Updating %s %s: %s", table, item_id, sorted(values))
    return client.table(table).update(values).eq("id", item_id).select(columns).single().execute().data


def delete_by_id(client: SupabaseClient, table: str, item_id: str) -> None:
    logger.info("Deleting %s %s", table, item_id)
    client.table(table).delete().eq("id", item_id).execute()
