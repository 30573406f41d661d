"""
Pagination arithmetic for list pages: bounded page changes, page-number
window and query offset.
"""

from __future__ import annotations

import math

from marketplace_admin.domains.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MAX_VISIBLE_PAGES
from marketplace_admin.domains.models import PaginationState


class Pagination:
    """
    Page / page-size / total bookkeeping.

    total_pages is never below 1 so an empty list still shows page 1 of 1.
    """

    def __init__(
        self,
        initial_page: int = DEFAULT_PAGE,
        initial_page_size: int = DEFAULT_PAGE_SIZE,
        total: int = 0,
    ) -> None:
        self._initial_page = initial_page
        self._initial_page_size = initial_page_size
        self.page = initial_page
        self.page_size = initial_page_size
        self.total = total

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total / self.page_size))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def can_go_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def can_go_prev(self) -> bool:
        return self.page > 1

    @property
    def state(self) -> PaginationState:
        return PaginationState(
            page=self.page,
            page_size=self.page_size,
            total=self.total,
            total_pages=self.total_pages,
        )

    @property
    def page_numbers(self) -> list[int]:
        """Up to five page numbers around the current page."""
        total_pages = self.total_pages
        if total_pages <= MAX_VISIBLE_PAGES:
            return list(range(1, total_pages + 1))
        start = max(1, self.page - MAX_VISIBLE_PAGES // 2)
        end = min(total_pages, start + MAX_VISIBLE_PAGES - 1)
        if end - start < MAX_VISIBLE_PAGES - 1:
            start = max(1, end - MAX_VISIBLE_PAGES + 1)
        return list(range(start, end + 1))

    def set_page(self, page: int) -> None:
        self.page = max(1, min(page, self.total_pages))

    def set_page_size(self, page_size: int) -> None:
        self.page_size = max(1, page_size)
        self.page = 1

    def set_total(self, total: int) -> None:
        self.total = max(0, total)
        if self.page > self.total_pages:
            self.page = self.total_pages

    def next_page(self) -> None:
        if self.can_go_next:
            self.page += 1

    def prev_page(self) -> None:
        if self.can_go_prev:
            self.page -= 1

    def first_page(self) -> None:
        self.page = 1

    def last_page(self) -> None:
        self.page = self.total_pages

    def reset(self) -> None:
        self.page = self._initial_page
        self.page_size = self._initial_page_size
