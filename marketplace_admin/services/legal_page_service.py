"""
Legal page service: CRUD over `legal_pages` with slug uniqueness checks.
"""

from __future__ import annotations

from marketplace_admin.domains.models import (
    CreateLegalPageInput,
    LegalPageFilters,
    Row,
    UpdateLegalPageInput,
)
from marketplace_admin.infrastructure.supabase.rest_client import SupabaseClient
from marketplace_admin.services.queries import (
    apply_search,
    delete_by_id,
    failure_message,
    fetch_by_id,
    update_by_id,
    utc_now_iso,
)
from marketplace_admin.utils.errors import ApiError
from marketplace_admin.utils.logger import get_logger
from marketplace_admin.utils.validation import generate_slug as _slugify

logger = get_logger()

TABLE = "legal_pages"
SEARCH_COLUMNS = ("title", "slug")
DUPLICATE_SLUG_MESSAGE = "A legal page with this slug already exists"
DUPLICATE_SLUG_CODE = "duplicate_slug"


def get_legal_pages(client: SupabaseClient, filters: LegalPageFilters | None = None) -> list[Row]:
    """All legal pages, most recently updated first."""
    filters = filters or LegalPageFilters()
    with failure_message("Failed to fetch legal pages"):
        query = client.table(TABLE).select("*").order("updated_at", ascending=False)
        if filters.page_type:
            query = query.eq("page_type", filters.page_type)
        if filters.is_active is not None:
            query = query.eq("is_active", filters.is_active)
        query = apply_search(query, SEARCH_COLUMNS, filters.search)
        return query.execute().data or []


def get_legal_page_by_id(client: SupabaseClient, page_id: str) -> Row:
    with failure_message("Failed to fetch legal page"):
        return fetch_by_id(client, TABLE, page_id)


def get_legal_page_by_slug(client: SupabaseClient, slug: str) -> Row:
    with failure_message("Failed to fetch legal page"):
        return client.table(TABLE).select("*").eq("slug", slug).single().execute().data


def slug_taken(client: SupabaseClient, slug: str, exclude_id: str | None = None) -> bool:
    query = client.table(TABLE).select("id").eq("slug", slug)
    if exclude_id:
        query = query.neq("id", exclude_id)
    return query.maybe_single().execute().data is not None


def create_legal_page(client: SupabaseClient, data: CreateLegalPageInput) -> Row:
    with failure_message("Failed to create legal page"):
        if slug_taken(client, data.slug):
            raise ApiError(DUPLICATE_SLUG_MESSAGE, code=DUPLICATE_SLUG_CODE)
        row = {
            "title": data.title,
            "slug": data.slug,
            "page_type": data.page_type,
            "content": data.content,
            "is_active": True,
        }
        logger.info("Creating legal page %s", data.slug)
        return client.table(TABLE).insert(row).select("*").single().execute().data


def update_legal_page(client: SupabaseClient, page_id: str, data: UpdateLegalPageInput) -> Row:
    with failure_message("Failed to update legal page"):
        if data.slug and slug_taken(client, data.slug, exclude_id=page_id):
            raise ApiError(DUPLICATE_SLUG_MESSAGE, code=DUPLICATE_SLUG_CODE)
        values = data.changes()
        values["updated_at"] = utc_now_iso()
        return update_by_id(client, TABLE, page_id, values)


def delete_legal_page(client: SupabaseClient, page_id: str) -> None:
    with failure_message("Failed to delete legal page"):
        delete_by_id(client, TABLE, page_id)


def generate_slug(title: str) -> str:
    """URL slug for a page title, e.g. "Terms of Service" -> "terms-of-service"."""
    return _slugify(title)
