"""Toast and inline error helpers over `st.toast` / `st.error`."""

from __future__ import annotations

import streamlit as st

from marketplace_admin.utils.errors import ApiError, describe_api_error

TOAST_ICONS: dict[str, str] = {
    "success": ":material/check_circle:",
    "error": ":material/error:",
    "warning": ":material/warning:",
    "info": ":material/info:",
}


def notify(level: str, message: str) -> None:
    """Notifier handed to the state managers."""
    st.toast(message, icon=TOAST_ICONS.get(level, TOAST_ICONS["info"]))


def inline_api_error(error: ApiError, context: str | None = None) -> None:
    level, message = describe_api_error(error, context)
    if level == "warning":
        st.warning(message, icon=TOAST_ICONS["warning"])
    else:
        st.error(message, icon=TOAST_ICONS["error"])
