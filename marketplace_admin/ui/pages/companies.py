"""Companies list: approve / reject / suspend, delete."""

from __future__ import annotations

from marketplace_admin.domains.constants import COMPANY_STATUS_COLORS, COMPANY_STATUSES
from marketplace_admin.infrastructure.supabase.rest_client import SupabaseClient
from marketplace_admin.orchestration.entity_states import CompaniesState
from marketplace_admin.ui import components as ui
from marketplace_admin.ui.pages._status_list import render_status_list
from marketplace_admin.utils.formatting import format_date, short_id

SORT_OPTIONS = {
    "created_at": "Created",
    "name": "Name",
    "rating": "Rating",
    "total_orders": "Orders",
}


def _fields(company: dict) -> list[tuple[str, object]]:
    owner = company.get("owner") or {}
    category = company.get("category") or {}
    location = ", ".join(p for p in (company.get("city"), company.get("country")) if p)
    return [
        ("ID", short_id(company.get("id"))),
        ("Registration number", company.get("registration_number")),
        ("Owner", owner.get("full_name") or owner.get("email")),
        ("Category", category.get("name")),
        ("Email", company.get("email")),
        ("Phone", company.get("phone")),
        ("Website", company.get("website")),
        ("Address", company.get("address")),
        ("Location", location),
        ("Verified", "Yes" if company.get("is_verified") else "No"),
        ("Orders", company.get("total_orders")),
        ("Rating", company.get("rating")),
        ("Created", format_date(company.get("created_at"))),
        ("Approved", format_date(company.get("approved_at"))),
    ]


def render(client: SupabaseClient) -> None:
    state = ui.session_object("companies_state", CompaniesState, client)
    render_status_list(
        state,
        key="companies",
        title="Companies",
        kind="company",
        statuses=COMPANY_STATUSES,
        colors=COMPANY_STATUS_COLORS,
        search_placeholder="Name, registration number or email",
        sort_options=SORT_OPTIONS,
        metrics=lambda s: [
            ("Total", s.total),
            ("Pending", s.pending),
            ("Approved", s.approved),
            ("Rejected", s.rejected),
            ("Suspended", s.suspended),
        ],
        row_title=lambda c: c.get("name") or "Unnamed company",
        row_fields=_fields,
    )
