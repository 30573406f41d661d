"""
Shared fixtures: a SupabaseClient wired to a MagicMock HTTP backend, and a
factory for canned `requests` responses.
"""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import MagicMock

import pytest

from marketplace_admin.infrastructure.supabase.rest_client import SupabaseClient

SUPABASE_URL = "https://proj.supabase.co"
ANON_KEY = "anon-key"


def _make_response(
    status: int = 200,
    data: Any = None,
    content_range: str | None = None,
) -> MagicMock:
    r = MagicMock()
    r.status_code = status
    r.headers = {"Content-Range": content_range} if content_range else {}
    if data is None:
        r.content = b""
        r.text = ""
        r.json.side_effect = ValueError("no body")
    else:
        r.content = json.dumps(data).encode()
        r.text = r.content.decode()
        r.json.return_value = data
    return r


@pytest.fixture
def make_response():
    return _make_response


@pytest.fixture
def http() -> MagicMock:
    return MagicMock()


@pytest.fixture
def client(http: MagicMock) -> SupabaseClient:
    return SupabaseClient(url=SUPABASE_URL, api_key=ANON_KEY, timeout=5, http=http)


def sent(http: MagicMock, index: int = -1) -> dict[str, Any]:
    """Method, url, params, headers and body of one recorded request."""
    call = http.request.call_args_list[index]
    method, url = call.args
    return {
        "method": method,
        "url": url,
        "params": call.kwargs.get("params") or [],
        "headers": call.kwargs.get("headers") or {},
        "json": call.kwargs.get("json"),
    }
