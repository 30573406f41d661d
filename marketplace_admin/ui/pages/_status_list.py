"""
Shared layout for status-driven lists (companies, businesses, services):
stats row, search + status filter, sort, rows with a status selector.
"""

from __future__ import annotations

from typing import Any, Callable

import streamlit as st

from marketplace_admin.orchestration.list_state import EntityListState
from marketplace_admin.ui import components as ui
from marketplace_admin.utils.formatting import status_label


def render_status_list(
    state: EntityListState,
    *,
    key: str,
    title: str,
    kind: str,
    statuses: tuple[str, ...],
    colors: dict[str, str],
    search_placeholder: str,
    sort_options: dict[str, str],
    metrics: Callable[[Any], list[tuple[str, Any]]],
    row_title: Callable[[dict], str],
    row_fields: Callable[[dict], list[tuple[str, Any]]],
) -> None:
    st.header(title)
    if state.stats:
        ui.metrics_row(metrics(state.stats))

    col1, col2 = st.columns([2, 1])
    with col1:
        search = ui.search_box(state, key, search_placeholder)
    with col2:
        status = ui.choice_filter("Status", kind, statuses, state.filters.get("status"), f"{key}_status")
    state.set_filters({**state.filters, "search": search, "status": status})
    ui.sort_controls(state, sort_options, key)

    with st.spinner(f"Loading {state.plural_label}…"):
        state.sync()
    ui.error_banner(state.error, state.refetch, key, context=title)

    if not state.items and not state.error:
        st.info(f"No {state.plural_label} found.")
    for row in state.items:
        row_id = row["id"]
        current = row.get("status")
        badge = ui.status_badge(status_label(kind, current), colors.get(current))
        with st.expander(f"{row_title(row)}  {badge}"):
            ui.detail_fields(row_fields(row))
            col1, col2 = st.columns(2)
            with col1:
                index = statuses.index(current) if current in statuses else 0
                choice = st.selectbox(
                    "Status",
                    statuses,
                    index=index,
                    format_func=lambda v: status_label(kind, v),
                    key=f"{key}_status_{row_id}",
                )
                if st.button("Update status", key=f"{key}_update_{row_id}", disabled=choice == current):
                    if state.update_status(row_id, choice):
                        st.rerun()
            with col2:
                ui.confirm_delete(
                    f"{key}_{row_id}",
                    row.get("name") or row.get("title") or f"this {state.singular_label}",
                    lambda row_id=row_id: state.delete(row_id),
                )
    ui.pagination_bar(state, key)
