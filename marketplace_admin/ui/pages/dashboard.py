"""Dashboard: per-entity summary metrics plus recent / pending panels."""

from __future__ import annotations

import streamlit as st

from marketplace_admin.domains.constants import DASHBOARD_PANEL_ROWS
from marketplace_admin.infrastructure.supabase.rest_client import SupabaseClient
from marketplace_admin.orchestration.entity_states import (
    BusinessesState,
    CompaniesState,
    ServicesState,
    TransactionsState,
    UsersState,
)
from marketplace_admin.orchestration.list_state import EntityListState
from marketplace_admin.ui import components as ui
from marketplace_admin.utils.config import default_currency
from marketplace_admin.utils.formatting import format_currency, format_date, format_datetime, short_id, status_label


def _panel_state(key: str, factory: type[EntityListState], client: SupabaseClient, **filters) -> EntityListState:
    state = ui.session_object(key, factory, client)
    state.set_page_size(DASHBOARD_PANEL_ROWS)
    state.set_filters(filters)
    return state


def render(client: SupabaseClient) -> None:
    st.header("Dashboard")
    currency = default_currency()

    users = ui.session_object("dashboard_users", UsersState, client)
    services = ui.session_object("dashboard_services", ServicesState, client)
    companies = _panel_state("dashboard_companies", CompaniesState, client, status="pending")
    businesses = _panel_state("dashboard_businesses", BusinessesState, client, status="pending")
    transactions = _panel_state("dashboard_transactions", TransactionsState, client)

    if st.button("Refresh", key="dashboard_refresh"):
        for state in (users, services, companies, businesses, transactions):
            state.refetch_stats()
        for state in (companies, businesses, transactions):
            state.refetch()

    with st.spinner("Loading dashboard…"):
        users.load_stats()
        services.load_stats()
        for state in (companies, businesses, transactions):
            state.sync()

    col1, col2, col3, col4, col5 = st.columns(5)
    with col1:
        s = users.stats
        st.metric("Users", s.total if s else "-", help=f"{s.active} active" if s else None)
    with col2:
        s = companies.stats
        st.metric("Companies", s.total if s else "-", help=f"{s.pending} pending" if s else None)
    with col3:
        s = businesses.stats
        st.metric("Businesses", s.total if s else "-", help=f"{s.pending} pending" if s else None)
    with col4:
        s = services.stats
        st.metric("Services", s.total if s else "-", help=f"{s.active} active" if s else None)
    with col5:
        s = transactions.stats
        st.metric(
            "Revenue",
            format_currency(s.total_revenue, currency) if s else "-",
            help=f"{s.completed} completed of {s.total}" if s else None,
        )

    st.subheader("Recent transactions")
    ui.error_banner(transactions.error, transactions.refetch, "dashboard_transactions")
    if not transactions.items and not transactions.error:
        st.caption("No transactions yet.")
    for tx in transactions.items:
        customer = tx.get("customer") or {}
        st.markdown(
            f"{short_id(tx.get('id'))} · **{format_currency(tx.get('amount'), tx.get('currency'))}** · "
            f"{customer.get('full_name') or customer.get('email') or '-'} · "
            f"{status_label('transaction', tx.get('status'))} · {format_datetime(tx.get('created_at'))}"
        )

    col1, col2 = st.columns(2)
    with col1:
        st.subheader("Pending companies")
        ui.error_banner(companies.error, companies.refetch, "dashboard_companies")
        if not companies.items and not companies.error:
            st.caption("Nothing waiting for review.")
        for company in companies.items:
            st.markdown(f"**{company.get('name')}** · {format_date(company.get('created_at'))}")
    with col2:
        st.subheader("Pending businesses")
        ui.error_banner(businesses.error, businesses.refetch, "dashboard_businesses")
        if not businesses.items and not businesses.error:
            st.caption("Nothing waiting for review.")
        for business in businesses.items:
            company = business.get("company") or {}
            st.markdown(
                f"**{business.get('name')}** · {company.get('name') or '-'} · "
                f"{format_date(business.get('created_at'))}"
            )
