"""Legal pages: list, create/edit form with generated slug, activate, delete."""

from __future__ import annotations

import streamlit as st

from marketplace_admin.domains.constants import LEGAL_PAGE_TYPES
from marketplace_admin.domains.models import CreateLegalPageInput, LegalPageFilters, UpdateLegalPageInput
from marketplace_admin.infrastructure.supabase.rest_client import SupabaseClient
from marketplace_admin.orchestration.legal_page_state import LegalPagesState
from marketplace_admin.ui import components as ui
from marketplace_admin.utils import validation as v
from marketplace_admin.utils.formatting import format_datetime, status_label

FORM_RULES = [
    v.ValidationRule("title", v.required),
    v.ValidationRule("title", v.max_length(200)),
    v.ValidationRule("slug", v.required),
    v.ValidationRule("slug", v.slug),
    v.ValidationRule("page_type", v.required),
    v.ValidationRule("content", v.required),
]


def render(client: SupabaseClient) -> None:
    state = ui.session_object("legal_pages_state", LegalPagesState, client)

    st.header("Legal Pages")
    col1, col2, col3 = st.columns([2, 1, 1])
    with col1:
        search = st.text_input("Search", value=state.filters.search or "", key="legal_search").strip()
    with col2:
        page_type = ui.choice_filter(
            "Type", "legal_page_type", LEGAL_PAGE_TYPES, state.filters.page_type, "legal_type"
        )
    with col3:
        if st.button("New page", key="legal_new", type="primary", use_container_width=True):
            st.session_state.legal_editing = "new"
    state.set_filters(LegalPageFilters(page_type=page_type, search=search or None))

    with st.spinner("Loading legal pages…"):
        state.sync()
    ui.error_banner(state.error, state.refetch, "legal", context="Legal pages")

    editing = st.session_state.get("legal_editing")
    if editing == "new":
        _render_form(state, None)
    elif editing:
        page = state.find(editing) or state.get_by_id(editing)
        if page:
            _render_form(state, page)
        else:
            st.session_state.legal_editing = None

    if not state.pages and not state.error:
        st.info("No legal pages yet.")
    for page in state.pages:
        _render_row(state, page)


def _render_row(state: LegalPagesState, page: dict) -> None:
    page_id = page["id"]
    active = bool(page.get("is_active"))
    badge = ui.status_badge("Active" if active else "Inactive", "success" if active else "danger")
    with st.expander(f"{page.get('title')} · /{page.get('slug')}  {badge}"):
        ui.detail_fields([
            ("Type", status_label("legal_page_type", page.get("page_type"))),
            ("Updated", format_datetime(page.get("updated_at"))),
        ])
        with st.container(border=True):
            st.html(page.get("content") or "")
        col1, col2, col3 = st.columns(3)
        with col1:
            if st.button("Edit", key=f"legal_edit_{page_id}"):
                st.session_state.legal_editing = page_id
                st.rerun()
        with col2:
            if st.button("Deactivate" if active else "Activate", key=f"legal_toggle_{page_id}"):
                if state.set_active(page_id, not active):
                    st.rerun()
        with col3:
            ui.confirm_delete(f"legal_{page_id}", page.get("title") or "this page", lambda: state.delete(page_id))


def _render_form(state: LegalPagesState, page: dict | None) -> None:
    is_new = page is None
    page = page or {}
    with st.form("legal_page_form"):
        st.subheader("New legal page" if is_new else f"Edit {page.get('title')}")
        title = st.text_input("Title", value=page.get("title", ""))
        slug = st.text_input(
            "Slug",
            value=page.get("slug", ""),
            help="Lowercase letters, numbers and hyphens. Leave empty to generate from the title.",
        )
        page_type = st.selectbox(
            "Type",
            LEGAL_PAGE_TYPES,
            index=LEGAL_PAGE_TYPES.index(page["page_type"]) if page.get("page_type") in LEGAL_PAGE_TYPES else 0,
            format_func=lambda t: status_label("legal_page_type", t),
            disabled=not is_new,
        )
        content = st.text_area("Content (HTML)", value=page.get("content", ""), height=300)
        col1, col2 = st.columns(2)
        with col1:
            submitted = st.form_submit_button("Save", type="primary", use_container_width=True)
        with col2:
            cancelled = st.form_submit_button("Cancel", use_container_width=True)

    if cancelled:
        st.session_state.legal_editing = None
        st.rerun()
    if not submitted:
        return

    slug = slug.strip() or v.generate_slug(title)
    data = {"title": title.strip(), "slug": slug, "page_type": page_type, "content": content}
    result = v.validate_form(data, FORM_RULES)
    if not result.is_valid:
        for message in result.errors.values():
            st.error(message)
        return

    if is_new:
        saved = state.create(CreateLegalPageInput(**data))
    else:
        saved = state.update(
            page["id"],
            UpdateLegalPageInput(title=data["title"], slug=slug, content=content),
        )
    if saved is not None:
        st.session_state.legal_editing = None
        st.rerun()
