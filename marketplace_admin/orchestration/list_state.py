"""
Session-held state for the paginated list pages.

Each page keeps one state object in `st.session_state`. Widgets call the
setters; `sync()` then re-issues the list query whenever filters, page, page
size or sort changed since the last fetch.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, MutableMapping

from marketplace_admin.domains.constants import DEFAULT_SORT_BY, DEFAULT_SORT_ORDER, SORT_ORDERS
from marketplace_admin.domains.models import PaginatedResponse, PaginationState, QueryParams, Row
from marketplace_admin.infrastructure.supabase.rest_client import SupabaseClient
from marketplace_admin.utils.config import default_page_size
from marketplace_admin.utils.errors import ApiError
from marketplace_admin.utils.logger import get_logger

logger = get_logger()

# (level, message) -> None; levels: success, error, warning, info
Notifier = Callable[[str, str], None]


def log_notifier(level: str, message: str) -> None:
    logger.info("[%s] %s", level, message)


class SessionBound:
    """Holds a client and notifier that are dropped when pickled."""

    def __init__(self, client: SupabaseClient | None = None, notifier: Notifier | None = None) -> None:
        self._client = client
        self._notify: Notifier = notifier or log_notifier

    def __getstate__(self) -> dict[str, Any]:
        state = dict(self.__dict__)
        state["_client"] = None
        state["_notify"] = None
        return state

    def __setstate__(self, state: dict[str, Any]) -> None:
        self.__dict__.update(state)
        self._notify = log_notifier

    def attach(self, client: SupabaseClient, notifier: Notifier | None = None) -> None:
        """Reconnect after deserialization, or swap in the session's client."""
        self._client = client
        if notifier is not None:
            self._notify = notifier

    @property
    def client(self) -> SupabaseClient:
        if self._client is None:
            raise RuntimeError(f"{type(self).__name__} has no client; call attach() first")
        return self._client


def drop_session_states(store: MutableMapping[str, Any], keep: tuple[str, ...] = ()) -> list[str]:
    """
    Remove every state manager held in `store` except those under `keep`.

    Called on sign-out so the next admin starts from empty lists, stats and errors.
    """
    dropped = [key for key, value in list(store.items()) if isinstance(value, SessionBound) and key not in keep]
    for key in dropped:
        del store[key]
    if dropped:
        logger.debug("Dropped session state: %s", ", ".join(sorted(dropped)))
    return dropped


class EntityListState(SessionBound):
    """
    Items, pagination, filters, sort and stats for one entity list.

    Subclasses set the labels and `params_cls` and implement the `_fetch_*`
    / `_update_status` / `_delete` hooks against their service module.
    """

    plural_label = "items"
    singular_label = "item"
    params_cls: type[QueryParams] = QueryParams

    def __init__(
        self,
        client: SupabaseClient | None = None,
        notifier: Notifier | None = None,
        page_size: int | None = None,
    ) -> None:
        super().__init__(client, notifier)
        self.items: list[Row] = []
        self.loading = False
        self.error: ApiError | None = None
        self.stats: Any = None
        self.stats_loading = False
        self.pagination = PaginationState(page=1, page_size=page_size or default_page_size())
        self.filters: dict[str, Any] = {}
        self.sort_by = DEFAULT_SORT_BY
        self.sort_order = DEFAULT_SORT_ORDER
        self._fetched_key: tuple | None = None
        self._stats_fetched = False

    # --- hooks for subclasses ---

    def _fetch_page(self, params: QueryParams) -> PaginatedResponse[Row]:
        raise NotImplementedError

    def _fetch_stats(self) -> Any:
        raise NotImplementedError

    def _fetch_one(self, item_id: str) -> Row:
        raise NotImplementedError

    def _update_status(self, item_id: str, status: Any) -> Row:
        raise NotImplementedError

    def _delete(self, item_id: str) -> None:
        raise NotImplementedError

    # --- query state ---

    def build_params(self) -> QueryParams:
        return self.params_cls(
            page=self.pagination.page,
            page_size=self.pagination.page_size,
            sort_by=self.sort_by,
            sort_order=self.sort_order,
            **self.filters,
        )

    def query_key(self) -> tuple:
        return (
            tuple(sorted(self.filters.items())),
            self.pagination.page,
            self.pagination.page_size,
            self.sort_by,
            self.sort_order,
        )

    @property
    def is_stale(self) -> bool:
        return self._fetched_key != self.query_key()

    def sync(self) -> None:
        """Fetch the list if the query changed, and stats if never loaded."""
        if self.is_stale:
            self.refetch()
        self.load_stats()

    def load_stats(self) -> None:
        if not self._stats_fetched:
            self.refetch_stats()

    def refetch(self) -> bool:
        self.loading = True
        self.error = None
        key = self.query_key()
        try:
            result = self._fetch_page(self.build_params())
        except ApiError as e:
            logger.warning("Loading %s failed: %s", self.plural_label, e.message)
            self.error = e
            # Remember the failed key so reruns don't hammer the store; "Try again" calls refetch().
            self._fetched_key = key
            self._notify("error", f"Failed to load {self.plural_label}. Please refresh the page.")
            return False
        finally:
            self.loading = False

        self.items = list(result.data)
        self.pagination = PaginationState(
            page=result.page,
            page_size=result.page_size,
            total=result.total,
            total_pages=result.total_pages,
        )
        self._fetched_key = self.query_key()
        return True

    def refetch_stats(self) -> None:
        self.stats_loading = True
        try:
            self.stats = self._fetch_stats()
        except ApiError as e:
            logger.warning("Loading %s stats failed: %s", self.singular_label, e.message)
        finally:
            self.stats_loading = False
            self._stats_fetched = True

    # --- setters ---

    def set_filters(self, filters: dict[str, Any]) -> None:
        cleaned = {k: v for k, v in filters.items() if v is not None and v != ""}
        if cleaned != self.filters:
            self.filters = cleaned
            self.pagination = replace(self.pagination, page=1)

    def set_page(self, page: int) -> None:
        self.pagination = replace(self.pagination, page=max(1, page))

    def set_page_size(self, page_size: int) -> None:
        if page_size != self.pagination.page_size:
            self.pagination = replace(self.pagination, page_size=page_size, page=1)

    def set_sort_by(self, sort_by: str) -> None:
        self.sort_by = sort_by

    def set_sort_order(self, sort_order: str) -> None:
        if sort_order not in SORT_ORDERS:
            raise ValueError(f"sort_order must be one of {SORT_ORDERS}, got {sort_order!r}")
        self.sort_order = sort_order

    def clear_error(self) -> None:
        self.error = None

    # --- row operations ---

    def get_by_id(self, item_id: str) -> Row | None:
        try:
            return self._fetch_one(item_id)
        except ApiError as e:
            self.error = e
            return None

    def update_status(self, item_id: str, status: Any) -> bool:
        try:
            updated = self._update_status(item_id, status)
        except ApiError as e:
            self.error = e
            self._notify("error", f"Failed to update {self.singular_label}. Please try again.")
            return False
        if updated:
            self.items = [updated if row.get("id") == item_id else row for row in self.items]
        self._notify("success", f"{self.singular_label.capitalize()} status updated successfully")
        self.refetch_stats()
        return True

    def delete(self, item_id: str) -> bool:
        try:
            self._delete(item_id)
        except ApiError as e:
            self.error = e
            self._notify("error", f"Failed to delete {self.singular_label}. Please try again.")
            return False
        was_last_on_page = len(self.items) == 1 and self.pagination.page > 1
        self.items = [row for row in self.items if row.get("id") != item_id]
        self.refetch_stats()
        if was_last_on_page:
            self.pagination = replace(self.pagination, page=self.pagination.page - 1)
        self.refetch()
        self._notify("success", f"{self.singular_label.capitalize()} deleted successfully")
        return True
