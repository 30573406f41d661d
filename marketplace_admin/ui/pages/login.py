"""Sign-in form (admins only)."""

from __future__ import annotations

import streamlit as st

from marketplace_admin.domains import routes
from marketplace_admin.orchestration.auth_state import AuthState
from marketplace_admin.utils.validation import validate_email


def render(auth: AuthState) -> None:
    st.header("Admin sign in")
    with st.form("login_form"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign in", type="primary", use_container_width=True)

    if submitted:
        email = email.strip()
        if not email or not password:
            st.error("Email and password are required")
        elif not validate_email(email):
            st.error("Please enter a valid email address")
        else:
            with st.spinner("Signing in…"):
                ok = auth.login(email, password)
            if ok:
                st.session_state.route = routes.DASHBOARD
                st.rerun()

    if auth.error:
        st.error(auth.error)

    if st.button("Create an admin account", key="login_to_register"):
        auth.clear_error()
        st.session_state.route = routes.REGISTER
        st.rerun()
