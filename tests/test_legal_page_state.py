"""
Tests for LegalPagesState: list refresh on filter change and in-place
create / update / delete.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from marketplace_admin.domains.models import CreateLegalPageInput, LegalPageFilters, UpdateLegalPageInput
from marketplace_admin.orchestration.legal_page_state import LegalPagesState
from marketplace_admin.utils.errors import ApiError

PAGES = [
    {"id": "l1", "title": "Terms", "slug": "terms", "is_active": True},
    {"id": "l2", "title": "Privacy", "slug": "privacy", "is_active": True},
]


@pytest.fixture
def service():
    with patch("marketplace_admin.orchestration.legal_page_state.legal_page_service") as svc:
        svc.get_legal_pages.return_value = list(PAGES)
        yield svc


@pytest.fixture
def notifier() -> MagicMock:
    return MagicMock()


@pytest.fixture
def state(service, notifier) -> LegalPagesState:
    s = LegalPagesState(MagicMock(), notifier)
    s.sync()
    return s


def test_sync_only_refetches_on_filter_change(state: LegalPagesState, service) -> None:
    state.sync()
    assert service.get_legal_pages.call_count == 1

    state.set_filters(LegalPageFilters(page_type="privacy"))
    state.sync()

    assert service.get_legal_pages.call_count == 2
    assert service.get_legal_pages.call_args.args[1].page_type == "privacy"


def test_create_prepends(state: LegalPagesState, service, notifier) -> None:
    service.create_legal_page.return_value = {"id": "l3", "title": "Cookies", "slug": "cookies"}

    page = state.create(CreateLegalPageInput("Cookies", "cookies", "cookie", "<p>c</p>"))

    assert page["id"] == "l3"
    assert [p["id"] for p in state.pages] == ["l3", "l1", "l2"]
    notifier.assert_called_with("success", "Legal page created successfully")


def test_create_duplicate_slug(state: LegalPagesState, service, notifier) -> None:
    service.create_legal_page.side_effect = ApiError(
        "A legal page with this slug already exists", code="duplicate_slug"
    )

    assert state.create(CreateLegalPageInput("Terms", "terms", "terms", "<p>t</p>")) is None
    assert state.error.code == "duplicate_slug"
    assert len(state) == 2
    notifier.assert_called_with("error", "A legal page with this slug already exists")


def test_update_replaces_in_place(state: LegalPagesState, service) -> None:
    service.update_legal_page.return_value = {"id": "l2", "title": "Privacy v2", "slug": "privacy"}

    state.update("l2", UpdateLegalPageInput(title="Privacy v2"))

    assert state.pages[1]["title"] == "Privacy v2"
    assert state.find("l2")["title"] == "Privacy v2"


def test_set_active_sends_flag_only(state: LegalPagesState, service) -> None:
    service.update_legal_page.return_value = {**PAGES[0], "is_active": False}

    state.set_active("l1", False)

    data = service.update_legal_page.call_args.args[2]
    assert data.changes() == {"is_active": False}
    assert state.pages[0]["is_active"] is False


def test_delete_removes_page(state: LegalPagesState, service) -> None:
    assert state.delete("l1") is True
    assert [p["id"] for p in state.pages] == ["l2"]


def test_delete_failure(state: LegalPagesState, service) -> None:
    service.delete_legal_page.side_effect = ApiError("Failed to delete legal page")

    assert state.delete("l1") is False
    assert len(state) == 2


def test_get_by_id_failure_returns_none(state: LegalPagesState, service) -> None:
    service.get_legal_page_by_id.side_effect = ApiError("Failed to fetch legal page", status=404)

    assert state.get_by_id("missing") is None
    assert state.error.status == 404


def test_load_failure(service, notifier) -> None:
    service.get_legal_pages.side_effect = ApiError("Failed to fetch legal pages")
    s = LegalPagesState(MagicMock(), notifier)

    assert s.refetch() is False
    assert s.pages == []
    notifier.assert_called_with("error", "Failed to load legal pages. Please refresh the page.")
