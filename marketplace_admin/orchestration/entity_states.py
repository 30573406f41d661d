"""
List state per paginated entity, wired to its service module.
"""

from __future__ import annotations

from typing import Any

from marketplace_admin.domains.models import (
    BusinessQueryParams,
    BusinessStats,
    CompanyQueryParams,
    CompanyStats,
    PaginatedResponse,
    Row,
    ServiceQueryParams,
    ServiceStats,
    TransactionQueryParams,
    TransactionStats,
    UserQueryParams,
    UserStats,
)
from marketplace_admin.orchestration.list_state import EntityListState
from marketplace_admin.services import (
    business_service,
    company_service,
    listing_service,
    transaction_service,
    user_service,
)
from marketplace_admin.utils.errors import ApiError
from marketplace_admin.utils.logger import get_logger

logger = get_logger()


class UsersState(EntityListState):
    plural_label = "users"
    singular_label = "user"
    params_cls = UserQueryParams
    stats: UserStats | None

    def _fetch_page(self, params: UserQueryParams) -> PaginatedResponse[Row]:
        return user_service.get_users(self.client, params)

    def _fetch_stats(self) -> UserStats:
        return user_service.get_user_stats(self.client)

    def _fetch_one(self, item_id: str) -> Row:
        return user_service.get_user_by_id(self.client, item_id)

    def _update_status(self, item_id: str, status: Any) -> Row:
        return user_service.update_user_status(self.client, item_id, bool(status))

    def _delete(self, item_id: str) -> None:
        user_service.delete_user(self.client, item_id)


class CompaniesState(EntityListState):
    plural_label = "companies"
    singular_label = "company"
    params_cls = CompanyQueryParams
    stats: CompanyStats | None

    def _fetch_page(self, params: CompanyQueryParams) -> PaginatedResponse[Row]:
        return company_service.get_companies(self.client, params)

    def _fetch_stats(self) -> CompanyStats:
        return company_service.get_company_stats(self.client)

    def _fetch_one(self, item_id: str) -> Row:
        return company_service.get_company_by_id(self.client, item_id)

    def _update_status(self, item_id: str, status: Any) -> Row:
        return company_service.update_company_status(self.client, item_id, status)

    def _delete(self, item_id: str) -> None:
        company_service.delete_company(self.client, item_id)


class BusinessesState(EntityListState):
    plural_label = "businesses"
    singular_label = "business"
    params_cls = BusinessQueryParams
    stats: BusinessStats | None

    def _fetch_page(self, params: BusinessQueryParams) -> PaginatedResponse[Row]:
        return business_service.get_businesses(self.client, params)

    def _fetch_stats(self) -> BusinessStats:
        return business_service.get_business_stats(self.client)

    def _fetch_one(self, item_id: str) -> Row:
        return business_service.get_business_by_id(self.client, item_id)

    def _update_status(self, item_id: str, status: Any) -> Row:
        return business_service.update_business_status(self.client, item_id, status)

    def _delete(self, item_id: str) -> None:
        business_service.delete_business(self.client, item_id)


class ServicesState(EntityListState):
    plural_label = "services"
    singular_label = "service"
    params_cls = ServiceQueryParams
    stats: ServiceStats | None

    def _fetch_page(self, params: ServiceQueryParams) -> PaginatedResponse[Row]:
        return listing_service.get_services(self.client, params)

    def _fetch_stats(self) -> ServiceStats:
        return listing_service.get_service_stats(self.client)

    def _fetch_one(self, item_id: str) -> Row:
        return listing_service.get_service_by_id(self.client, item_id)

    def _update_status(self, item_id: str, status: Any) -> Row:
        return listing_service.update_service_status(self.client, item_id, status)

    def _delete(self, item_id: str) -> None:
        listing_service.delete_service(self.client, item_id)


class TransactionsState(EntityListState):
    """Read-only: no status changes or deletes."""

    plural_label = "transactions"
    singular_label = "transaction"
    params_cls = TransactionQueryParams
    stats: TransactionStats | None

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.revenue_by_provider: list[dict[str, Any]] | None = None

    def _fetch_page(self, params: TransactionQueryParams) -> PaginatedResponse[Row]:
        return transaction_service.get_transactions(self.client, params)

    def _fetch_stats(self) -> TransactionStats:
        return transaction_service.get_transaction_stats(self.client)

    def _fetch_one(self, item_id: str) -> Row:
        return transaction_service.get_transaction_by_id(self.client, item_id)

    def update_status(self, item_id: str, status: Any) -> bool:
        logger.warning("Ignoring status change for transaction %s; transactions are read-only", item_id)
        return False

    def delete(self, item_id: str) -> bool:
        logger.warning("Ignoring delete for transaction %s; transactions are read-only", item_id)
        return False

    def load_revenue_by_provider(self) -> list[dict[str, Any]] | None:
        try:
            self.revenue_by_provider = transaction_service.get_revenue_by_provider(self.client)
        except ApiError as e:
            logger.warning("Loading revenue by provider failed: %s", e.message)
            self.error = e
            return None
        return self.revenue_by_provider
