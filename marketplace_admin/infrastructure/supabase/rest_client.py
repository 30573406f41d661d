"""
PostgREST client for the Supabase data store. Wraps `requests` with a small
chainable query builder (filter, order, range, count, single, mutate).
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any

import requests

from marketplace_admin.utils.config import api_timeout, supabase_anon_key, supabase_url
from marketplace_admin.utils.errors import NETWORK_ERROR_CODE, TIMEOUT_ERROR_CODE, ApiError
from marketplace_admin.utils.logger import get_logger

logger = get_logger()

REST_PATH = "/rest/v1"
OBJECT_MEDIA_TYPE = "application/vnd.pgrst.object+json"

# Characters that break a PostgREST logic tree unless the value is quoted.
_RESERVED = re.compile(r'[,.:()"\\]')
_CONTENT_RANGE = re.compile(r"^(?:\d+-\d+|\*)/(\d+|\*)$")


def _quote_value(value: str) -> str:
    if not _RESERVED.search(value):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def build_or_filter(columns: list[str] | tuple[str, ...], term: str) -> str:
    """
    Build an OR filter matching `term` case-insensitively in any column.

    build_or_filter(["name", "email"], "ann") -> "name.ilike.%ann%,email.ilike.%ann%"
    """
    pattern = _quote_value(f"%{term}%")
    return ",".join(f"{col}.ilike.{pattern}" for col in columns)


def parse_content_range(header: str | None) -> int | None:
    """Total row count from a Content-Range header such as '0-9/57' or '*/0'."""
    if not header:
        return None
    m = _CONTENT_RANGE.match(header.strip())
    if not m or m.group(1) == "*":
        return None
    return int(m.group(1))


def _error_from_response(r: requests.Response) -> ApiError:
    status = getattr(r, "status_code", None)
    try:
        body = r.json()
    except (ValueError, json.JSONDecodeError):
        body = None
    if isinstance(body, dict):
        message = body.get("message") or body.get("msg") or body.get("error_description") or body.get("error")
        code = body.get("code") or body.get("error_code")
        details = body.get("details")
        if details and message and details not in message:
            message = f"{message} ({details})"
        hint = body.get("hint")
        if hint and message:
            message = f"{message} Hint: {hint}"
        if message:
            return ApiError(str(message), code=str(code) if code is not None else None, status=status)
    text = (r.text or "").strip()
    return ApiError(text[:300] or f"Request failed with status {status}", status=status)


@dataclass
class QueryResult:
    data: Any
    count: int | None = None


class QueryBuilder:
    """
    One request against one table. Build with chained calls, then `execute()`.

    Mirrors the PostgREST URL grammar: filters become `column=op.value`
    query parameters, `or_` becomes `or=(...)`, `range` becomes offset/limit.
    """

    def __init__(self, client: "SupabaseClient", table: str) -> None:
        self._client = client
        self._table = table
        self._method = "GET"
        self._params: list[tuple[str, str]] = []
        self._headers: dict[str, str] = {}
        self._body: Any = None
        self._select: str | None = None
        self._count: str | None = None
        self._single = False
        self._maybe_single = False

    # --- verbs ---

    def select(self, columns: str = "*", count: str | None = None, head: bool = False) -> "QueryBuilder":
        # Collapse whitespace so multi-line embed specs stay URL friendly.
        self._select = re.sub(r"\s+", "", columns) or "*"
        if self._method == "GET" and head:
            self._method = "HEAD"
        self._count = count
        return self

    def insert(self, row: dict[str, Any] | list[dict[str, Any]]) -> "QueryBuilder":
        self._method = "POST"
        self._body = row
        return self

    def update(self, values: dict[str, Any]) -> "QueryBuilder":
        self._method = "PATCH"
        self._body = values
        return self

    def delete(self) -> "QueryBuilder":
        self._method = "DELETE"
        return self

    # --- filters ---

    def _filter(self, column: str, op: str, value: Any) -> "QueryBuilder":
        if isinstance(value, bool):
            value = "true" if value else "false"
        elif value is None:
            value = "null"
        self._params.append((column, f"{op}.{value}"))
        return self

    def eq(self, column: str, value: Any) -> "QueryBuilder":
        return self._filter(column, "eq", value)

    def neq(self, column: str, value: Any) -> "QueryBuilder":
        return self._filter(column, "neq", value)

    def gte(self, column: str, value: Any) -> "QueryBuilder":
        return self._filter(column, "gte", value)

    def lte(self, column: str, value: Any) -> "QueryBuilder":
        return self._filter(column, "lte", value)

    def ilike(self, column: str, pattern: str) -> "QueryBuilder":
        return self._filter(column, "ilike", pattern)

    def or_(self, expression: str) -> "QueryBuilder":
        self._params.append(("or", f"({expression})"))
        return self

    # --- modifiers ---

    def order(self, column: str, ascending: bool = True) -> "QueryBuilder":
        self._params.append(("order", f"{column}.{'asc' if ascending else 'desc'}"))
        return self

    def range(self, start: int, end: int) -> "QueryBuilder":
        self._params.append(("offset", str(start)))
        self._params.append(("limit", str(end - start + 1)))
        return self

    def limit(self, n: int) -> "QueryBuilder":
        self._params.append(("limit", str(n)))
        return self

    def single(self) -> "QueryBuilder":
        self._single = True
        return self

    def maybe_single(self) -> "QueryBuilder":
        """Like single(), but zero rows yields None instead of an error."""
        self._maybe_single = True
        return self

    # --- request ---

    def build_request(self) -> tuple[str, str, list[tuple[str, str]], dict[str, str]]:
        """Return (method, url, params, headers) without sending anything."""
        params = list(self._params)
        headers = dict(self._headers)
        if self._select is not None:
            params.insert(0, ("select", self._select))

        prefer: list[str] = []
        if self._method in ("POST", "PATCH", "DELETE"):
            prefer.append("return=representation" if self._select is not None else "return=minimal")
        if self._count:
            prefer.append(f"count={self._count}")
        if prefer:
            headers["Prefer"] = ",".join(prefer)
        if self._single:
            headers["Accept"] = OBJECT_MEDIA_TYPE
        url = f"{self._client.rest_url}/{self._table}"
        return self._method, url, params, headers

    def execute(self) -> QueryResult:
        method, url, params, headers = self.build_request()
        r = self._client.request(method, url, params=params, headers=headers, json_body=self._body)
        count = parse_content_range(r.headers.get("Content-Range")) if self._count else None

        if method == "HEAD" or r.status_code == 204 or not (r.content or b""):
            return QueryResult(data=None if self._single or self._maybe_single else [], count=count)
        try:
            data = r.json()
        except (ValueError, json.JSONDecodeError) as e:
            logger.warning("Invalid JSON from %s %s: %s", method, self._table, e)
            raise ApiError("Invalid response from data store", code="invalid_json", status=r.status_code) from e

        if self._maybe_single:
            if isinstance(data, list):
                data = data[0] if data else None
        return QueryResult(data=data, count=count)


class SupabaseClient:
    """
    Per-session PostgREST client. Requests run as the signed-in user once
    `set_access_token` is called, otherwise with the anon key.
    """

    def __init__(
        self,
        url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        http: Any = None,
    ) -> None:
        self.url = (url or supabase_url()).rstrip("/")
        self.api_key = api_key or supabase_anon_key()
        self.timeout = timeout if timeout is not None else api_timeout()
        self._http = http or requests
        self._access_token: str | None = None

    def __getstate__(self) -> dict[str, Any]:
        state = dict(self.__dict__)
        state["_http"] = None
        return state

    def __setstate__(self, state: dict[str, Any]) -> None:
        self.__dict__.update(state)
        if self._http is None:
            self._http = requests

    @property
    def rest_url(self) -> str:
        return f"{self.url}{REST_PATH}"

    @property
    def access_token(self) -> str | None:
        return self._access_token

    def set_access_token(self, token: str | None) -> None:
        self._access_token = token

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self._access_token or self.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def table(self, name: str) -> QueryBuilder:
        return QueryBuilder(self, name)

    def request(
        self,
        method: str,
        url: str,
        params: list[tuple[str, str]] | None = None,
        headers: dict[str, str] | None = None,
        json_body: Any = None,
    ) -> requests.Response:
        """
        Send one request and raise ApiError on transport failure or non-2xx.
        """
        merged = self._headers()
        merged.update(headers or {})
        logger.debug("%s %s params=%s", method, url, params)
        try:
            r = self._http.request(
                method,
                url,
                params=params,
                headers=merged,
                json=json_body,
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            logger.warning("%s %s timed out after %ss", method, url, self.timeout)
            raise ApiError("Request timed out. Please try again.", code=TIMEOUT_ERROR_CODE) from e
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise ApiError(f"Network error: {e}", code=NETWORK_ERROR_CODE) from e

        if not 200 <= r.status_code < 300:
            err = _error_from_response(r)
            logger.warning("%s %s -> %s %s", method, url, r.status_code, err.message)
            raise err
        return r
