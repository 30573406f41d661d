"""Users list: search, type/status filters, activate/deactivate, delete."""

from __future__ import annotations

import streamlit as st

from marketplace_admin.domains.constants import ACTIVE_STATUS_COLORS, ACTIVE_STATUS_LABELS, USER_TYPES
from marketplace_admin.infrastructure.supabase.rest_client import SupabaseClient
from marketplace_admin.orchestration.entity_states import UsersState
from marketplace_admin.ui import components as ui
from marketplace_admin.utils.formatting import format_date, short_id, status_label

SORT_OPTIONS = {
    "created_at": "Joined",
    "full_name": "Name",
    "email": "Email",
    "updated_at": "Last updated",
}
ACTIVE_CHOICES = {None: "All", True: "Active", False: "Inactive"}


def render(client: SupabaseClient) -> None:
    state = ui.session_object("users_state", UsersState, client)

    st.header("Users")
    stats = state.stats
    if stats:
        ui.metrics_row([
            ("Total", stats.total),
            ("Active", stats.active),
            ("Inactive", stats.inactive),
            ("Customers", stats.customers),
            ("Providers", stats.providers),
            ("Admins", stats.admins),
        ])

    col1, col2, col3 = st.columns([2, 1, 1])
    with col1:
        search = ui.search_box(state, "users", "Name or email")
    with col2:
        user_type = ui.choice_filter("Type", "user_type", USER_TYPES, state.filters.get("user_type"), "users_type")
    with col3:
        choices = list(ACTIVE_CHOICES)
        current = state.filters.get("is_active")
        is_active = st.selectbox(
            "Status",
            choices,
            index=choices.index(current) if current in choices else 0,
            format_func=lambda v: ACTIVE_CHOICES[v],
            key="users_active",
        )
    state.set_filters({"search": search, "user_type": user_type, "is_active": is_active})
    ui.sort_controls(state, SORT_OPTIONS, "users")

    with st.spinner("Loading users…"):
        state.sync()
    ui.error_banner(state.error, state.refetch, "users", context="Users")

    if not state.items and not state.error:
        st.info("No users found.")
    for user in state.items:
        _render_row(state, user)
    ui.pagination_bar(state, "users")


def _render_row(state: UsersState, user: dict) -> None:
    user_id = user["id"]
    active = bool(user.get("is_active"))
    badge = ui.status_badge(ACTIVE_STATUS_LABELS[active], ACTIVE_STATUS_COLORS[active])
    title = f"{user.get('full_name') or 'Unnamed'} · {user.get('email') or '-'}"
    with st.expander(f"{title}  {badge}"):
        ui.detail_fields([
            ("ID", short_id(user_id)),
            ("Type", status_label("user_type", user.get("user_type"))),
            ("Phone", user.get("phone_number") or user.get("phone")),
            ("Email verified", "Yes" if user.get("is_email_verified") else "No"),
            ("Phone verified", "Yes" if user.get("is_phone_verified") else "No"),
            ("Joined", format_date(user.get("created_at"))),
        ])
        col1, col2 = st.columns(2)
        with col1:
            label = "Deactivate" if active else "Activate"
            if st.button(label, key=f"user_toggle_{user_id}"):
                if state.update_status(user_id, not active):
                    st.rerun()
        with col2:
            ui.confirm_delete(
                f"user_{user_id}",
                user.get("full_name") or "this user",
                lambda: state.delete(user_id),
            )
