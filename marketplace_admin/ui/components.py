"""
Reusable Streamlit widgets for the list pages: metrics row, status badge,
search/sort/filter controls, pagination bar, detail fields, delete
confirmation and the inline error banner.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

import streamlit as st

from marketplace_admin.domains.constants import MIN_SEARCH_LENGTH, PAGE_SIZE_OPTIONS, STATUS_LABELS
from marketplace_admin.infrastructure.supabase.rest_client import SupabaseClient
from marketplace_admin.orchestration.list_state import EntityListState, SessionBound, drop_session_states
from marketplace_admin.orchestration.pagination import Pagination
from marketplace_admin.ui.toast import inline_api_error, notify
from marketplace_admin.utils.config import api_retry_attempts, api_retry_delay
from marketplace_admin.utils.errors import ApiError, retry_operation
from marketplace_admin.utils.logger import get_logger

logger = get_logger()

S = TypeVar("S", bound=SessionBound)

# Badge colour names -> Streamlit markdown colours
_BADGE_COLORS: dict[str, str] = {
    "success": "green",
    "warning": "orange",
    "danger": "red",
    "secondary": "gray",
    "default": "gray",
    "primary": "blue",
}


def session_object(key: str, factory: Callable[..., S], client: SupabaseClient) -> S:
    """Get (or create) a state manager in st.session_state and bind it to this run's client."""
    obj = st.session_state.get(key)
    if obj is None:
        obj = factory(client, notify)
        st.session_state[key] = obj
    else:
        obj.attach(client, notify)
    return obj


def sign_out(auth: Any) -> None:
    """Sign the admin out and forget every page's cached rows, stats and errors."""
    auth.logout()
    drop_session_states(st.session_state, keep=("auth",))


def status_badge(label: str, color: str | None) -> str:
    """Markdown badge, e.g. ':green-background[Active]'."""
    return f":{_BADGE_COLORS.get(color or 'default', 'gray')}-background[{label}]"


def metrics_row(metrics: list[tuple[str, Any]]) -> None:
    cols = st.columns(len(metrics))
    for col, (label, value) in zip(cols, metrics):
        with col:
            st.metric(label, value)


def search_box(state: EntityListState, key: str, placeholder: str) -> str:
    """Search term, or "" while it is shorter than MIN_SEARCH_LENGTH."""
    term = st.text_input(
        "Search",
        value=state.filters.get("search", ""),
        placeholder=placeholder,
        key=f"{key}_search",
    ).strip()
    return term if len(term) >= MIN_SEARCH_LENGTH else ""


def choice_filter(
    label: str,
    kind: str,
    options: tuple[str, ...],
    current: Any,
    key: str,
) -> str | None:
    """Selectbox with an "All" entry; returns None for All."""
    choices: list[str | None] = [None, *options]
    labels = STATUS_LABELS.get(kind, {})
    index = choices.index(current) if current in choices else 0
    return st.selectbox(
        label,
        choices,
        index=index,
        format_func=lambda v: "All" if v is None else labels.get(v, str(v)),
        key=key,
    )


def sort_controls(state: EntityListState, options: dict[str, str], key: str) -> None:
    """Sort column + direction selectors; writes straight into the state."""
    col1, col2 = st.columns(2)
    columns = list(options)
    with col1:
        sort_by = st.selectbox(
            "Sort by",
            columns,
            index=columns.index(state.sort_by) if state.sort_by in columns else 0,
            format_func=lambda c: options[c],
            key=f"{key}_sort_by",
        )
    with col2:
        sort_order = st.selectbox(
            "Order",
            ["desc", "asc"],
            index=0 if state.sort_order == "desc" else 1,
            format_func=lambda o: "Newest first" if o == "desc" else "Oldest first",
            key=f"{key}_sort_order",
        )
    state.set_sort_by(sort_by)
    state.set_sort_order(sort_order)


def pagination_bar(state: EntityListState, key: str) -> None:
    p = state.pagination
    pager = Pagination(initial_page=p.page, initial_page_size=p.page_size, total=p.total)
    if p.total:
        start = pager.offset + 1
        end = min(pager.offset + p.page_size, p.total)
        st.caption(f"Showing {start}-{end} of {p.total}")
    else:
        st.caption("No results")

    numbers = pager.page_numbers
    cols = st.columns([1, *([1] * len(numbers)), 1, 2])
    with cols[0]:
        if st.button("‹", key=f"{key}_prev", disabled=not pager.can_go_prev, use_container_width=True):
            state.set_page(p.page - 1)
            st.rerun()
    for col, n in zip(cols[1:], numbers):
        with col:
            kind = "primary" if n == p.page else "secondary"
            if st.button(str(n), key=f"{key}_page_{n}", type=kind, use_container_width=True):
                state.set_page(n)
                st.rerun()
    with cols[len(numbers) + 1]:
        if st.button("›", key=f"{key}_next", disabled=not pager.can_go_next, use_container_width=True):
            state.set_page(p.page + 1)
            st.rerun()
    with cols[-1]:
        size = st.selectbox(
            "Per page",
            PAGE_SIZE_OPTIONS,
            index=PAGE_SIZE_OPTIONS.index(p.page_size) if p.page_size in PAGE_SIZE_OPTIONS else 0,
            key=f"{key}_page_size",
            label_visibility="collapsed",
        )
    if size != p.page_size:
        state.set_page_size(size)
        st.rerun()


def detail_fields(fields: list[tuple[str, Any]]) -> None:
    for label, value in fields:
        if value in (None, "", []):
            value = "-"
        st.markdown(f"**{label}:** {value}")


def confirm_delete(key: str, label: str, on_confirm: Callable[[], bool]) -> None:
    """Two-step delete: the first click arms, the second confirms."""
    armed_key = f"{key}_armed"
    if not st.session_state.get(armed_key):
        if st.button("Delete", key=f"{key}_delete", type="secondary"):
            st.session_state[armed_key] = True
            st.rerun()
        return
    st.warning(f"Delete {label}? This cannot be undone.")
    col1, col2 = st.columns(2)
    with col1:
        if st.button("Confirm delete", key=f"{key}_confirm", type="primary", use_container_width=True):
            st.session_state[armed_key] = False
            if on_confirm():
                st.rerun()
    with col2:
        if st.button("Cancel", key=f"{key}_cancel", use_container_width=True):
            st.session_state[armed_key] = False
            st.rerun()


def error_banner(
    error: ApiError | None,
    on_retry: Callable[[], bool],
    key: str,
    context: str | None = None,
) -> None:
    """
    Inline error with a "Try again" button.

    `on_retry` returns False on failure; it is retried with backoff before
    the banner is shown again. A 401 signs the admin out.
    """
    if error is None:
        return
    if error.status == 401:
        auth = st.session_state.get("auth")
        if auth is not None:
            sign_out(auth)
            st.rerun()
    inline_api_error(error, context)
    if st.button("Try again", key=f"{key}_retry"):
        def attempt() -> bool:
            if not on_retry():
                raise ApiError(error.message, code=error.code, status=error.status)
            return True

        try:
            retry_operation(attempt, max_retries=api_retry_attempts(), delay=api_retry_delay())
        except ApiError as e:
            logger.warning("Retry gave up: %s", e.message)
        st.rerun()
