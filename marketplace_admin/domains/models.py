"""
Value objects shared by the data-access layer, state managers and pages.

Entity rows themselves stay plain dicts, as returned by the data store
(joined relations nested under keys such as ``owner`` or ``company``).
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from typing import Any, Generic, TypeVar

from marketplace_admin.domains.constants import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    DEFAULT_SORT_BY,
    DEFAULT_SORT_ORDER,
)

Row = dict[str, Any]
T = TypeVar("T")


def total_pages_for(total: int, page_size: int) -> int:
    """ceil(total / page_size); 0 rows means 0 pages."""
    if page_size <= 0:
        return 0
    return math.ceil(total / page_size)


@dataclass
class PaginatedResponse(Generic[T]):
    data: list[T]
    total: int
    page: int
    page_size: int
    total_pages: int

    @classmethod
    def build(cls, data: list[T], total: int, page: int, page_size: int) -> "PaginatedResponse[T]":
        return cls(
            data=data,
            total=total,
            page=page,
            page_size=page_size,
            total_pages=total_pages_for(total, page_size),
        )


@dataclass
class PaginationState:
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE
    total: int = 0
    total_pages: int = 0


@dataclass
class Session:
    access_token: str
    refresh_token: str
    expires_at: int = 0


# --- Stats ---

@dataclass
class UserStats:
    total: int = 0
    active: int = 0
    inactive: int = 0
    customers: int = 0
    providers: int = 0
    admins: int = 0


@dataclass
class CompanyStats:
    total: int = 0
    pending: int = 0
    approved: int = 0
    rejected: int = 0
    suspended: int = 0


@dataclass
class BusinessStats:
    total: int = 0
    active: int = 0
    pending: int = 0
    suspended: int = 0
    rejected: int = 0


@dataclass
class ServiceStats:
    total: int = 0
    active: int = 0
    pending: int = 0
    suspended: int = 0
    rejected: int = 0
    request_deletion: int = 0


@dataclass
class TransactionStats:
    total: int = 0
    total_revenue: float = 0.0
    pending: int = 0
    completed: int = 0
    failed: int = 0
    refunded: int = 0


# --- Query parameters ---

@dataclass
class QueryParams:
    """Pagination and sort shared by every paginated list."""

    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE
    sort_by: str = DEFAULT_SORT_BY
    sort_order: str = DEFAULT_SORT_ORDER
    search: str | None = None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def ascending(self) -> bool:
        return self.sort_order == "asc"


@dataclass
class UserQueryParams(QueryParams):
    user_type: str | None = None
    is_active: bool | None = None


@dataclass
class CompanyQueryParams(QueryParams):
    status: str | None = None
    category_id: str | None = None


@dataclass
class BusinessQueryParams(QueryParams):
    status: str | None = None
    category_id: str | None = None
    company_id: str | None = None


@dataclass
class ServiceQueryParams(QueryParams):
    status: str | None = None
    category_id: str | None = None
    business_id: str | None = None


@dataclass
class TransactionQueryParams(QueryParams):
    status: str | None = None
    payment_provider: str | None = None
    date_from: str | None = None
    date_to: str | None = None


@dataclass
class LegalPageFilters:
    page_type: str | None = None
    is_active: bool | None = None
    search: str | None = None


# --- Inputs ---

@dataclass
class CreateUserInput:
    email: str
    password: str
    full_name: str
    user_type: str = "admin"


@dataclass
class CreateLegalPageInput:
    title: str
    slug: str
    page_type: str
    content: str


@dataclass
class UpdateLegalPageInput:
    title: str | None = None
    slug: str | None = None
    content: str | None = None
    is_active: bool | None = None

    def changes(self) -> dict[str, Any]:
        """Only the fields that were provided."""
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass
class ValidationResult:
    is_valid: bool
    errors: dict[str, str] = field(default_factory=dict)
