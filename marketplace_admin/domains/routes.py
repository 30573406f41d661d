"""
Route table for the admin dashboard. Paths double as Streamlit page keys.
"""

from __future__ import annotations

from dataclasses import dataclass

LOGIN = "/login"
REGISTER = "/register"

DASHBOARD = "/"
USERS = "/users"
COMPANIES = "/companies"
BUSINESSES = "/businesses"
SERVICES = "/services"
LEGAL_PAGES = "/legal-pages"
TRANSACTIONS = "/transactions"

AUTH_ROUTES: frozenset[str] = frozenset({LOGIN, REGISTER})


@dataclass(frozen=True)
class NavItem:
    label: str
    path: str
    icon: str


NAV_ITEMS: tuple[NavItem, ...] = (
    NavItem("Dashboard", DASHBOARD, ":material/dashboard:"),
    NavItem("Users", USERS, ":material/group:"),
    NavItem("Companies", COMPANIES, ":material/apartment:"),
    NavItem("Businesses", BUSINESSES, ":material/storefront:"),
    NavItem("Services", SERVICES, ":material/design_services:"),
    NavItem("Legal Pages", LEGAL_PAGES, ":material/description:"),
    NavItem("Transactions", TRANSACTIONS, ":material/credit_card:"),
)


def is_protected(path: str) -> bool:
    """Every route except login/register needs an authenticated admin."""
    return path not in AUTH_ROUTES


def nav_item_for(path: str) -> NavItem | None:
    for item in NAV_ITEMS:
        if item.path == path:
            return item
    return None
