"""
Tests for legal page CRUD and slug uniqueness.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from marketplace_admin.domains.models import CreateLegalPageInput, LegalPageFilters, UpdateLegalPageInput
from marketplace_admin.services import legal_page_service
from marketplace_admin.services.legal_page_service import DUPLICATE_SLUG_MESSAGE
from marketplace_admin.utils.errors import ApiError

from conftest import sent

PAGE_INPUT = CreateLegalPageInput(
    title="Terms of Service",
    slug="terms-of-service",
    page_type="terms",
    content="<p>Be nice.</p>",
)


def test_get_legal_pages_orders_by_last_update(client, http: MagicMock, make_response) -> None:
    http.request.return_value = make_response(200, [{"id": "l1"}])

    pages = legal_page_service.get_legal_pages(
        client, LegalPageFilters(page_type="privacy", is_active=True, search="gdpr")
    )

    params = sent(http)["params"]
    assert ("order", "updated_at.desc") in params
    assert ("page_type", "eq.privacy") in params
    assert ("is_active", "eq.true") in params
    assert ("or", "(title.ilike.%gdpr%,slug.ilike.%gdpr%)") in params
    assert pages == [{"id": "l1"}]


def test_create_rejects_duplicate_slug(client, http: MagicMock, make_response) -> None:
    http.request.return_value = make_response(200, [{"id": "existing"}])

    with pytest.raises(ApiError) as exc:
        legal_page_service.create_legal_page(client, PAGE_INPUT)

    assert exc.value.message == DUPLICATE_SLUG_MESSAGE
    assert exc.value.code == "duplicate_slug"
    assert http.request.call_count == 1


def test_create_inserts_active_page(client, http: MagicMock, make_response) -> None:
    created = {"id": "l2", "slug": "terms-of-service", "is_active": True}
    http.request.side_effect = [make_response(200, []), make_response(201, created)]

    page = legal_page_service.create_legal_page(client, PAGE_INPUT)

    insert = sent(http)
    assert insert["method"] == "POST"
    assert insert["json"] == {
        "title": "Terms of Service",
        "slug": "terms-of-service",
        "page_type": "terms",
        "content": "<p>Be nice.</p>",
        "is_active": True,
    }
    assert page == created


def test_update_checks_slug_against_other_pages(client, http: MagicMock, make_response) -> None:
    http.request.side_effect = [make_response(200, []), make_response(200, {"id": "l1", "slug": "privacy"})]

    legal_page_service.update_legal_page(client, "l1", UpdateLegalPageInput(slug="privacy", content="<p>v2</p>"))

    check = sent(http, 0)
    assert ("slug", "eq.privacy") in check["params"]
    assert ("id", "neq.l1") in check["params"]
    patch_req = sent(http, 1)
    assert patch_req["method"] == "PATCH"
    assert set(patch_req["json"]) == {"slug", "content", "updated_at"}


def test_update_with_taken_slug_fails(client, http: MagicMock, make_response) -> None:
    http.request.return_value = make_response(200, [{"id": "other"}])

    with pytest.raises(ApiError, match="slug already exists"):
        legal_page_service.update_legal_page(client, "l1", UpdateLegalPageInput(slug="privacy"))


def test_update_without_slug_skips_check(client, http: MagicMock, make_response) -> None:
    http.request.return_value = make_response(200, {"id": "l1", "is_active": False})

    legal_page_service.update_legal_page(client, "l1", UpdateLegalPageInput(is_active=False))

    assert http.request.call_count == 1
    assert sent(http)["json"]["is_active"] is False


def test_delete_legal_page(client, http: MagicMock, make_response) -> None:
    http.request.return_value = make_response(204, None)

    legal_page_service.delete_legal_page(client, "l1")

    req = sent(http)
    assert req["method"] == "DELETE"
    assert ("id", "eq.l1") in req["params"]


def test_get_legal_page_by_slug(client, http: MagicMock, make_response) -> None:
    http.request.return_value = make_response(200, {"id": "l1", "slug": "privacy"})

    page = legal_page_service.get_legal_page_by_slug(client, "privacy")

    assert page["id"] == "l1"
    req = sent(http)
    assert ("slug", "eq.privacy") in req["params"]
    assert req["headers"]["Accept"] == "application/vnd.pgrst.object+json"


def test_generate_slug_is_exposed_for_forms() -> None:
    assert legal_page_service.generate_slug("Cookie Policy") == "cookie-policy"
