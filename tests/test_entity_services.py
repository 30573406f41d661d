"""
Tests for the user, company, business and service data-access functions:
filters, side-effect columns on status changes, and stats.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from marketplace_admin.domains.models import (
    BusinessQueryParams,
    CompanyQueryParams,
    ServiceQueryParams,
    UserQueryParams,
)
from marketplace_admin.services import business_service, company_service, listing_service, user_service
from marketplace_admin.utils.errors import ApiError

from conftest import sent


def _counts(make_response, *totals: int) -> list[MagicMock]:
    return [make_response(200, None, content_range=f"*/{n}") for n in totals]


def test_get_users_applies_filters_and_pagination(client, http: MagicMock, make_response) -> None:
    http.request.return_value = make_response(200, [{"id": "u1"}], content_range="10-10/11")
    params = UserQueryParams(page=2, page_size=10, user_type="provider", is_active=False, search="ann")

    result = user_service.get_users(client, params)

    req = sent(http)
    assert req["url"].endswith("/rest/v1/users")
    assert ("user_type", "eq.provider") in req["params"]
    assert ("is_active", "eq.false") in req["params"]
    assert ("or", "(full_name.ilike.%ann%,email.ilike.%ann%)") in req["params"]
    assert ("offset", "10") in req["params"]
    assert ("limit", "10") in req["params"]
    assert ("order", "created_at.desc") in req["params"]
    assert result.total == 11
    assert result.total_pages == 2
    assert result.page == 2
    assert result.data == [{"id": "u1"}]


def test_get_users_without_count_header_reports_zero(client, http: MagicMock, make_response) -> None:
    http.request.return_value = make_response(200, [])

    result = user_service.get_users(client)

    assert result.total == 0
    assert result.total_pages == 0


def test_blank_search_is_ignored(client, http: MagicMock, make_response) -> None:
    http.request.return_value = make_response(200, [], content_range="*/0")

    user_service.get_users(client, UserQueryParams(search="   "))

    assert not any(name == "or" for name, _ in sent(http)["params"])


def test_update_user_status_writes_flag_and_timestamp(client, http: MagicMock, make_response) -> None:
    http.request.return_value = make_response(200, {"id": "u1", "is_active": False})

    row = user_service.update_user_status(client, "u1", False)

    req = sent(http)
    assert req["method"] == "PATCH"
    assert req["json"]["is_active"] is False
    assert req["json"]["updated_at"].endswith("Z")
    assert row == {"id": "u1", "is_active": False}


def test_get_user_stats_derives_inactive(client, http: MagicMock, make_response) -> None:
    http.request.side_effect = _counts(make_response, 20, 15, 12, 6, 2)

    stats = user_service.get_user_stats(client)

    assert (stats.total, stats.active, stats.inactive) == (20, 15, 5)
    assert (stats.customers, stats.providers, stats.admins) == (12, 6, 2)
    assert all(call.args[0] == "HEAD" for call in http.request.call_args_list)


def test_delete_user_failure_surfaces_api_error(client, http: MagicMock, make_response) -> None:
    http.request.return_value = make_response(
        409, {"message": "update or delete on table violates foreign key constraint", "code": "23503"}
    )

    with pytest.raises(ApiError) as exc:
        user_service.delete_user(client, "u1")

    assert exc.value.code == "23503"
    assert exc.value.status == 409


def test_get_companies_embeds_owner_and_category(client, http: MagicMock, make_response) -> None:
    http.request.return_value = make_response(200, [], content_range="*/0")

    company_service.get_companies(client, CompanyQueryParams(status="pending", category_id="cat1"))

    params = dict(sent(http)["params"])
    assert params["select"] == "*,owner:users!owner_id(*),category:categories!category_id(*)"
    assert params["status"] == "eq.pending"
    assert params["category_id"] == "eq.cat1"


def test_company_approval_verifies_and_stamps() -> None:
    values = company_service.status_update_payload("approved")
    assert values["status"] == "approved"
    assert values["is_verified"] is True
    assert values["approved_at"] == values["updated_at"]


@pytest.mark.parametrize("status", ["rejected", "suspended"])
def test_company_rejection_revokes_verification(status) -> None:
    values = company_service.status_update_payload(status)
    assert values["is_verified"] is False
    assert "approved_at" not in values


def test_company_pending_leaves_verification_alone() -> None:
    assert "is_verified" not in company_service.status_update_payload("pending")


def test_get_company_stats(client, http: MagicMock, make_response) -> None:
    http.request.side_effect = _counts(make_response, 9, 3, 4, 1, 1)

    stats = company_service.get_company_stats(client)

    assert (stats.total, stats.pending, stats.approved, stats.rejected, stats.suspended) == (9, 3, 4, 1, 1)
    status_filters = [dict(c.kwargs["params"]).get("status") for c in http.request.call_args_list]
    assert status_filters == [None, "eq.pending", "eq.approved", "eq.rejected", "eq.suspended"]


def test_get_businesses_filters_by_company(client, http: MagicMock, make_response) -> None:
    http.request.return_value = make_response(200, [], content_range="*/0")

    business_service.get_businesses(
        client, BusinessQueryParams(company_id="co1", search="salon", sort_by="name", sort_order="asc")
    )

    params = sent(http)["params"]
    assert ("company_id", "eq.co1") in params
    assert ("order", "name.asc") in params
    assert ("or", "(name.ilike.%salon%,address.ilike.%salon%,contact_email.ilike.%salon%)") in params


def test_update_business_status_only_writes_status(client, http: MagicMock, make_response) -> None:
    http.request.return_value = make_response(200, {"id": "b1", "status": "active"})

    business_service.update_business_status(client, "b1", "active")

    assert set(sent(http)["json"]) == {"status", "updated_at"}


def test_get_business_stats(client, http: MagicMock, make_response) -> None:
    http.request.side_effect = _counts(make_response, 10, 6, 2, 1, 1)

    stats = business_service.get_business_stats(client)

    assert (stats.total, stats.active, stats.pending, stats.suspended, stats.rejected) == (10, 6, 2, 1, 1)


def test_get_services_filters_by_business(client, http: MagicMock, make_response) -> None:
    http.request.return_value = make_response(200, [], content_range="*/0")

    listing_service.get_services(client, ServiceQueryParams(business_id="b1", status="active"))

    params = dict(sent(http)["params"])
    assert params["business_id"] == "eq.b1"
    assert params["status"] == "eq.active"
    assert "provider:users!provider_id(*)" in params["select"]


@pytest.mark.parametrize(
    "status, is_active",
    [
        ("active", True),
        ("suspended", False),
        ("rejected", False),
        ("deleted", False),
        ("pending", None),
        ("requestDeletion", None),
    ],
)
def test_service_status_syncs_active_flag(status, is_active) -> None:
    values = listing_service.status_update_payload(status)
    assert values["status"] == status
    assert values.get("is_active") is is_active


def test_get_service_stats_counts_deletion_requests(client, http: MagicMock, make_response) -> None:
    http.request.side_effect = _counts(make_response, 30, 20, 4, 3, 2, 1)

    stats = listing_service.get_service_stats(client)

    assert stats.request_deletion == 1
    assert stats.total == 30
    last_params = dict(http.request.call_args_list[-1].kwargs["params"])
    assert last_params["status"] == "eq.requestDeletion"


def test_network_failure_keeps_network_code(client, http: MagicMock) -> None:
    http.request.side_effect = requests.ConnectionError("down")

    with pytest.raises(ApiError) as exc:
        listing_service.get_services(client)

    assert exc.value.is_network
