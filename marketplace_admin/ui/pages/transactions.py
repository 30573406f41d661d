"""Transactions (payments) list with date range filter and revenue by provider."""

from __future__ import annotations

from datetime import date

import streamlit as st

from marketplace_admin.domains.constants import PAYMENT_PROVIDERS, TRANSACTION_STATUS_COLORS, TRANSACTION_STATUSES
from marketplace_admin.infrastructure.supabase.rest_client import SupabaseClient
from marketplace_admin.orchestration.entity_states import TransactionsState
from marketplace_admin.ui import components as ui
from marketplace_admin.utils.config import default_currency
from marketplace_admin.utils.formatting import format_currency, format_datetime, short_id, status_label

SORT_OPTIONS = {
    "created_at": "Date",
    "amount": "Amount",
    "status": "Status",
}


def date_bounds(start: date | None, end: date | None) -> tuple[str | None, str | None]:
    """Inclusive day range as created_at bounds."""
    date_from = f"{start.isoformat()}T00:00:00" if start else None
    date_to = f"{end.isoformat()}T23:59:59.999" if end else None
    return date_from, date_to


def render(client: SupabaseClient) -> None:
    state = ui.session_object("transactions_state", TransactionsState, client)
    currency = default_currency()

    st.header("Transactions")
    stats = state.stats
    if stats:
        ui.metrics_row([
            ("Total", stats.total),
            ("Revenue", format_currency(stats.total_revenue, currency)),
            ("Completed", stats.completed),
            ("Pending", stats.pending),
            ("Failed", stats.failed),
            ("Refunded", stats.refunded),
        ])

    col1, col2, col3, col4 = st.columns([2, 1, 1, 2])
    with col1:
        search = ui.search_box(state, "transactions", "Order, description or provider reference")
    with col2:
        status = ui.choice_filter(
            "Status", "transaction", TRANSACTION_STATUSES, state.filters.get("status"), "transactions_status"
        )
    with col3:
        provider = ui.choice_filter(
            "Provider", "payment_provider", PAYMENT_PROVIDERS,
            state.filters.get("payment_provider"), "transactions_provider",
        )
    with col4:
        picked = st.date_input("Date range", value=(), key="transactions_dates")
    start = picked[0] if len(picked) > 0 else None
    end = picked[1] if len(picked) > 1 else None
    date_from, date_to = date_bounds(start, end)
    state.set_filters({
        "search": search,
        "status": status,
        "payment_provider": provider,
        "date_from": date_from,
        "date_to": date_to,
    })
    ui.sort_controls(state, SORT_OPTIONS, "transactions")

    with st.spinner("Loading transactions…"):
        state.sync()
    ui.error_banner(state.error, state.refetch, "transactions", context="Transactions")

    if not state.items and not state.error:
        st.info("No transactions found.")
    for tx in state.items:
        _render_row(tx)
    ui.pagination_bar(state, "transactions")

    with st.expander("Revenue by provider"):
        if state.revenue_by_provider is None:
            state.load_revenue_by_provider()
        rows = state.revenue_by_provider or []
        if not rows:
            st.caption("No completed payments yet.")
        for entry in rows:
            st.markdown(
                f"**{status_label('payment_provider', entry['provider'])}**: "
                f"{format_currency(entry['revenue'], currency)} ({entry['count']} payments)"
            )
        if st.button("Refresh", key="transactions_revenue_refresh"):
            state.load_revenue_by_provider()
            st.rerun()


def _render_row(tx: dict) -> None:
    customer = tx.get("customer") or {}
    business = tx.get("business") or {}
    current = tx.get("status")
    badge = ui.status_badge(status_label("transaction", current), TRANSACTION_STATUS_COLORS.get(current))
    amount = format_currency(tx.get("amount"), tx.get("currency"))
    with st.expander(f"{short_id(tx.get('id'))} · {amount} · {format_datetime(tx.get('created_at'))}  {badge}"):
        ui.detail_fields([
            ("Order", short_id(tx.get("order_id"))),
            ("Customer", customer.get("full_name") or customer.get("email")),
            ("Business", business.get("name")),
            ("Provider", status_label("payment_provider", tx.get("payment_provider"))),
            ("Method", tx.get("payment_method")),
            ("Provider reference", tx.get("provider_payment_id")),
            ("Fee", format_currency(tx.get("transaction_fee"), tx.get("currency"))),
            ("Description", tx.get("description")),
            ("Receipt", tx.get("receipt_url")),
        ])
