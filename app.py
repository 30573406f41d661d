"""
Marketplace Admin — Streamlit UI entry point.
"""

import streamlit as st

# Load .env first so the Supabase settings are in place before anything reads them
from marketplace_admin.utils.config import load_config, log_file, log_level
load_config()

from marketplace_admin.domains import routes
from marketplace_admin.infrastructure.supabase.rest_client import SupabaseClient
from marketplace_admin.orchestration.auth_state import AuthState
from marketplace_admin.orchestration.list_state import drop_session_states
from marketplace_admin.ui import components as ui
from marketplace_admin.ui.pages import (
    businesses,
    companies,
    dashboard,
    legal_pages,
    login,
    register,
    services,
    transactions,
    users,
)
from marketplace_admin.utils.logger import setup_logger, get_logger

setup_logger("marketplace_admin", level=log_level(), log_file=log_file())
log = get_logger()

st.set_page_config(page_title="Marketplace Admin", layout="wide")

PAGES = {
    routes.DASHBOARD: dashboard.render,
    routes.USERS: users.render,
    routes.COMPANIES: companies.render,
    routes.BUSINESSES: businesses.render,
    routes.SERVICES: services.render,
    routes.LEGAL_PAGES: legal_pages.render,
    routes.TRANSACTIONS: transactions.render,
}

# One client per browser session: it carries the signed-in admin's token
if "client" not in st.session_state:
    st.session_state.client = SupabaseClient()
client = st.session_state.client

auth = ui.session_object("auth", AuthState, client)
auth.restore()
auth.ensure_fresh()

if "route" not in st.session_state:
    st.session_state.route = routes.DASHBOARD
route = st.session_state.route

if not auth.is_authenticated:
    drop_session_states(st.session_state, keep=("auth",))
    if routes.is_protected(route):
        route = st.session_state.route = routes.LOGIN
    if route == routes.REGISTER:
        register.render(auth)
    else:
        login.render(auth)
    st.stop()

if route in routes.AUTH_ROUTES:
    route = st.session_state.route = routes.DASHBOARD

with st.sidebar:
    st.title("Marketplace Admin")
    user = auth.user or {}
    st.caption(f"Signed in as **{user.get('full_name') or user.get('email')}**")
    for item in routes.NAV_ITEMS:
        kind = "primary" if item.path == route else "secondary"
        if st.button(item.label, key=f"nav_{item.path}", icon=item.icon, type=kind, use_container_width=True):
            st.session_state.route = item.path
            st.rerun()
    st.divider()
    if st.button("Log out", key="logout", use_container_width=True):
        ui.sign_out(auth)
        st.session_state.route = routes.LOGIN
        st.rerun()

render = PAGES.get(route)
if render is None or routes.nav_item_for(route) is None:
    log.warning("Unknown route %s; showing dashboard", route)
    render = dashboard.render
render(client)
