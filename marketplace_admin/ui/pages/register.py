"""Admin account registration. Does not sign the new account in."""

from __future__ import annotations

import streamlit as st

from marketplace_admin.domains import routes
from marketplace_admin.domains.models import CreateUserInput
from marketplace_admin.orchestration.auth_state import AuthState
from marketplace_admin.utils import validation as v

FORM_RULES = [
    v.ValidationRule("full_name", v.required),
    v.ValidationRule("full_name", v.min_length(2)),
    v.ValidationRule("email", v.required),
    v.ValidationRule("email", v.email),
    v.ValidationRule("password", v.required),
    v.ValidationRule("password", v.password),
]


def render(auth: AuthState) -> None:
    st.header("Create admin account")
    with st.form("register_form"):
        full_name = st.text_input("Full name")
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        confirm = st.text_input("Confirm password", type="password")
        submitted = st.form_submit_button("Register", type="primary", use_container_width=True)

    if submitted:
        data = {"full_name": full_name.strip(), "email": email.strip(), "password": password}
        result = v.validate_form(data, FORM_RULES)
        errors = dict(result.errors)
        if password != confirm:
            errors["confirm"] = "Passwords do not match"
        if errors:
            for message in errors.values():
                st.error(message)
        else:
            with st.spinner("Creating account…"):
                profile = auth.register(CreateUserInput(**data))
            if profile is not None:
                st.success("Account created. Check your email to confirm it, then sign in.")

    if auth.error:
        st.error(auth.error)

    if st.button("Back to sign in", key="register_to_login"):
        auth.clear_error()
        st.session_state.route = routes.LOGIN
        st.rerun()
