"""
Session-held state for the legal pages screen (unpaginated).
"""

from __future__ import annotations

from typing import Any

from marketplace_admin.domains.models import (
    CreateLegalPageInput,
    LegalPageFilters,
    Row,
    UpdateLegalPageInput,
)
from marketplace_admin.infrastructure.supabase.rest_client import SupabaseClient
from marketplace_admin.orchestration.list_state import Notifier, SessionBound
from marketplace_admin.services import legal_page_service
from marketplace_admin.utils.errors import ApiError
from marketplace_admin.utils.logger import get_logger

logger = get_logger()


class LegalPagesState(SessionBound):
    """Every legal page, newest edit first, plus create/update/delete."""

    def __init__(self, client: SupabaseClient | None = None, notifier: Notifier | None = None) -> None:
        super().__init__(client, notifier)
        self.pages: list[Row] = []
        self.loading = False
        self.error: ApiError | None = None
        self.filters = LegalPageFilters()
        self._fetched_filters: LegalPageFilters | None = None

    def sync(self) -> None:
        if self._fetched_filters != self.filters:
            self.refetch()

    def set_filters(self, filters: LegalPageFilters) -> None:
        self.filters = filters

    def refetch(self) -> bool:
        self.loading = True
        self.error = None
        self._fetched_filters = LegalPageFilters(**vars(self.filters))
        try:
            self.pages = legal_page_service.get_legal_pages(self.client, self.filters)
        except ApiError as e:
            logger.warning("Loading legal pages failed: %s", e.message)
            self.error = e
            self._notify("error", "Failed to load legal pages. Please refresh the page.")
            return False
        finally:
            self.loading = False
        return True

    def get_by_id(self, page_id: str) -> Row | None:
        try:
            return legal_page_service.get_legal_page_by_id(self.client, page_id)
        except ApiError as e:
            self.error = e
            self._notify("error", e.message)
            return None

    def create(self, data: CreateLegalPageInput) -> Row | None:
        try:
            page = legal_page_service.create_legal_page(self.client, data)
        except ApiError as e:
            self.error = e
            self._notify("error", e.message)
            return None
        self.pages = [page, *self.pages]
        self._notify("success", "Legal page created successfully")
        return page

    def update(self, page_id: str, data: UpdateLegalPageInput) -> Row | None:
        try:
            page = legal_page_service.update_legal_page(self.client, page_id, data)
        except ApiError as e:
            self.error = e
            self._notify("error", e.message)
            return None
        self.pages = [page if row.get("id") == page_id else row for row in self.pages]
        self._notify("success", "Legal page updated successfully")
        return page

    def set_active(self, page_id: str, is_active: bool) -> Row | None:
        return self.update(page_id, UpdateLegalPageInput(is_active=is_active))

    def delete(self, page_id: str) -> bool:
        try:
            legal_page_service.delete_legal_page(self.client, page_id)
        except ApiError as e:
            self.error = e
            self._notify("error", e.message)
            return False
        self.pages = [row for row in self.pages if row.get("id") != page_id]
        self._notify("success", "Legal page deleted successfully")
        return True

    def clear_error(self) -> None:
        self.error = None

    def __len__(self) -> int:
        return len(self.pages)

    def find(self, page_id: str) -> dict[str, Any] | None:
        """Already-loaded page by id, without a round trip."""
        return next((row for row in self.pages if row.get("id") == page_id), None)
