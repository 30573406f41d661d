"""Businesses list."""

from __future__ import annotations

from marketplace_admin.domains.constants import BUSINESS_STATUS_COLORS, BUSINESS_STATUSES
from marketplace_admin.infrastructure.supabase.rest_client import SupabaseClient
from marketplace_admin.orchestration.entity_states import BusinessesState
from marketplace_admin.ui import components as ui
from marketplace_admin.ui.pages._status_list import render_status_list
from marketplace_admin.utils.formatting import format_date, short_id

SORT_OPTIONS = {
    "created_at": "Created",
    "name": "Name",
    "rating": "Rating",
}


def _fields(business: dict) -> list[tuple[str, object]]:
    company = business.get("company") or {}
    category = business.get("category") or {}
    subcategory = business.get("subcategory") or {}
    phones = business.get("contact_phone") or []
    return [
        ("ID", short_id(business.get("id"))),
        ("Company", company.get("name")),
        ("Category", " / ".join(n for n in (category.get("name"), subcategory.get("name")) if n)),
        ("Address", business.get("address")),
        ("Email", business.get("contact_email")),
        ("Phone", ", ".join(phones) if isinstance(phones, list) else phones),
        ("Currency", business.get("currency")),
        ("Rating", business.get("rating")),
        ("Description", business.get("description")),
        ("Created", format_date(business.get("created_at"))),
    ]


def render(client: SupabaseClient) -> None:
    state = ui.session_object("businesses_state", BusinessesState, client)
    render_status_list(
        state,
        key="businesses",
        title="Businesses",
        kind="business",
        statuses=BUSINESS_STATUSES,
        colors=BUSINESS_STATUS_COLORS,
        search_placeholder="Name, address or contact email",
        sort_options=SORT_OPTIONS,
        metrics=lambda s: [
            ("Total", s.total),
            ("Active", s.active),
            ("Pending", s.pending),
            ("Suspended", s.suspended),
            ("Rejected", s.rejected),
        ],
        row_title=lambda b: b.get("name") or "Unnamed business",
        row_fields=_fields,
    )
