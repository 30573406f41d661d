"""Services (marketplace listings) list."""

from __future__ import annotations

from marketplace_admin.domains.constants import SERVICE_STATUS_COLORS, SERVICE_STATUSES
from marketplace_admin.infrastructure.supabase.rest_client import SupabaseClient
from marketplace_admin.orchestration.entity_states import ServicesState
from marketplace_admin.ui import components as ui
from marketplace_admin.ui.pages._status_list import render_status_list
from marketplace_admin.utils.formatting import format_currency, format_date, short_id

SORT_OPTIONS = {
    "created_at": "Created",
    "title": "Title",
    "normal_price": "Price",
    "view_count": "Views",
    "rating": "Rating",
}


def _price(service: dict) -> str:
    currency = service.get("currency")
    normal = format_currency(service.get("normal_price"), currency)
    promo = service.get("promotional_price")
    if promo:
        return f"{format_currency(promo, currency)} (was {normal})"
    return normal


def _fields(service: dict) -> list[tuple[str, object]]:
    business = service.get("business") or {}
    category = service.get("category") or {}
    provider = service.get("provider") or {}
    return [
        ("ID", short_id(service.get("id"))),
        ("Business", business.get("name")),
        ("Category", category.get("name")),
        ("Provider", provider.get("full_name") or provider.get("email")),
        ("Price", _price(service)),
        ("Active", "Yes" if service.get("is_active") else "No"),
        ("Views", service.get("view_count")),
        ("Rating", service.get("rating")),
        ("Description", service.get("description")),
        ("Created", format_date(service.get("created_at"))),
    ]


def render(client: SupabaseClient) -> None:
    state = ui.session_object("services_state", ServicesState, client)
    render_status_list(
        state,
        key="services",
        title="Services",
        kind="service",
        statuses=SERVICE_STATUSES,
        colors=SERVICE_STATUS_COLORS,
        search_placeholder="Title or description",
        sort_options=SORT_OPTIONS,
        metrics=lambda s: [
            ("Total", s.total),
            ("Active", s.active),
            ("Pending", s.pending),
            ("Suspended", s.suspended),
            ("Rejected", s.rejected),
            ("Deletion requests", s.request_deletion),
        ],
        row_title=lambda s: s.get("title") or "Untitled service",
        row_fields=_fields,
    )
