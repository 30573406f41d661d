"""
Tests for the route table and navigation items.
"""

from __future__ import annotations

from marketplace_admin.domains import routes


def test_nav_lists_the_seven_admin_pages_in_order() -> None:
    assert [item.label for item in routes.NAV_ITEMS] == [
        "Dashboard",
        "Users",
        "Companies",
        "Businesses",
        "Services",
        "Legal Pages",
        "Transactions",
    ]


def test_only_auth_routes_are_public() -> None:
    assert not routes.is_protected(routes.LOGIN)
    assert not routes.is_protected(routes.REGISTER)
    assert all(routes.is_protected(item.path) for item in routes.NAV_ITEMS)


def test_nav_item_for() -> None:
    assert routes.nav_item_for(routes.LEGAL_PAGES).label == "Legal Pages"
    assert routes.nav_item_for("/nowhere") is None
