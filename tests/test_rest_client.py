"""
Tests for the PostgREST client: query building, counts, single rows and
error mapping.
"""

from __future__ import annotations

import pickle
from unittest.mock import MagicMock, patch

import pytest
import requests

from marketplace_admin.infrastructure.supabase.rest_client import (
    SupabaseClient,
    build_or_filter,
    parse_content_range,
)
from marketplace_admin.utils.errors import ApiError

from conftest import ANON_KEY, SUPABASE_URL, sent


def test_build_or_filter_plain_term() -> None:
    """Each column gets an ilike clause joined by commas."""
    assert build_or_filter(["name", "email"], "ann") == "name.ilike.%ann%,email.ilike.%ann%"


def test_build_or_filter_quotes_reserved_characters() -> None:
    """Commas, dots and parentheses would break the or=() tree unless quoted."""
    assert build_or_filter(["email"], "ann@x.com") == 'email.ilike."%ann@x.com%"'
    assert build_or_filter(["name"], 'a "b"') == 'name.ilike."%a \\"b\\"%"'


@pytest.mark.parametrize(
    "header, expected",
    [
        ("0-9/57", 57),
        ("*/0", 0),
        ("*/*", None),
        ("", None),
        (None, None),
        ("garbage", None),
    ],
)
def test_parse_content_range(header, expected) -> None:
    assert parse_content_range(header) == expected


def test_list_query_builds_postgrest_params(client: SupabaseClient) -> None:
    """select/eq/order/range map onto PostgREST query parameters."""
    method, url, params, headers = (
        client.table("users")
        .select("*", count="exact")
        .eq("user_type", "admin")
        .eq("is_active", False)
        .order("created_at", ascending=False)
        .range(20, 29)
        .build_request()
    )
    assert method == "GET"
    assert url == f"{SUPABASE_URL}/rest/v1/users"
    assert params == [
        ("select", "*"),
        ("user_type", "eq.admin"),
        ("is_active", "eq.false"),
        ("order", "created_at.desc"),
        ("offset", "20"),
        ("limit", "10"),
    ]
    assert headers["Prefer"] == "count=exact"


def test_select_collapses_embed_whitespace(client: SupabaseClient) -> None:
    _, _, params, _ = client.table("companies").select("""
        *,
        owner:users!owner_id(*)
    """).build_request()
    assert params[0] == ("select", "*,owner:users!owner_id(*)")


def test_execute_returns_rows_and_count(client: SupabaseClient, http: MagicMock, make_response) -> None:
    http.request.return_value = make_response(200, [{"id": "u1"}, {"id": "u2"}], content_range="0-1/12")

    result = client.table("users").select("*", count="exact").range(0, 9).execute()

    assert result.data == [{"id": "u1"}, {"id": "u2"}]
    assert result.count == 12
    req = sent(http)
    assert req["headers"]["apikey"] == ANON_KEY
    assert req["headers"]["Authorization"] == f"Bearer {ANON_KEY}"


def test_head_count_request(client: SupabaseClient, http: MagicMock, make_response) -> None:
    """head=True sends HEAD and reads the total from Content-Range."""
    http.request.return_value = make_response(200, None, content_range="*/42")

    result = client.table("users").select("*", count="exact", head=True).eq("is_active", True).execute()

    assert result.count == 42
    assert result.data == []
    assert sent(http)["method"] == "HEAD"


def test_single_sets_object_accept_header(client: SupabaseClient, http: MagicMock, make_response) -> None:
    http.request.return_value = make_response(200, {"id": "u1"})

    result = client.table("users").select("*").eq("id", "u1").single().execute()

    assert result.data == {"id": "u1"}
    assert sent(http)["headers"]["Accept"] == "application/vnd.pgrst.object+json"


def test_maybe_single_without_rows_returns_none(client: SupabaseClient, http: MagicMock, make_response) -> None:
    http.request.return_value = make_response(200, [])

    result = client.table("legal_pages").select("id").eq("slug", "terms").maybe_single().execute()

    assert result.data is None
    assert sent(http)["headers"]["Accept"] == "application/json"


def test_update_requests_representation(client: SupabaseClient, http: MagicMock, make_response) -> None:
    http.request.return_value = make_response(200, {"id": "c1", "status": "approved"})

    client.table("companies").update({"status": "approved"}).eq("id", "c1").select("*").single().execute()

    req = sent(http)
    assert req["method"] == "PATCH"
    assert req["json"] == {"status": "approved"}
    assert req["headers"]["Prefer"] == "return=representation"
    assert ("id", "eq.c1") in req["params"]


def test_delete_with_empty_body(client: SupabaseClient, http: MagicMock, make_response) -> None:
    http.request.return_value = make_response(204, None)

    result = client.table("users").delete().eq("id", "u1").execute()

    assert result.data == []
    req = sent(http)
    assert req["method"] == "DELETE"
    assert req["headers"]["Prefer"] == "return=minimal"


def test_error_body_becomes_api_error(client: SupabaseClient, http: MagicMock, make_response) -> None:
    http.request.return_value = make_response(
        409,
        {"message": "duplicate key value", "code": "23505", "details": "Key (slug)=(terms) already exists."},
    )

    with pytest.raises(ApiError) as exc:
        client.table("legal_pages").insert({"slug": "terms"}).execute()

    assert exc.value.status == 409
    assert exc.value.code == "23505"
    assert exc.value.message.startswith("duplicate key value")
    assert "already exists" in exc.value.message


def test_timeout_maps_to_timeout_code(client: SupabaseClient, http: MagicMock) -> None:
    http.request.side_effect = requests.Timeout("slow")

    with pytest.raises(ApiError) as exc:
        client.table("users").select("*").execute()

    assert exc.value.code == "timeout"
    assert exc.value.is_network


def test_connection_error_maps_to_network_code(client: SupabaseClient, http: MagicMock) -> None:
    http.request.side_effect = requests.ConnectionError("refused")

    with pytest.raises(ApiError) as exc:
        client.table("users").select("*").execute()

    assert exc.value.code == "network_error"
    assert "refused" in exc.value.message


def test_invalid_json_body(client: SupabaseClient, http: MagicMock, make_response) -> None:
    r = make_response(200, None)
    r.content = b"<html>"
    http.request.return_value = r

    with pytest.raises(ApiError) as exc:
        client.table("users").select("*").execute()

    assert exc.value.code == "invalid_json"


def test_access_token_used_as_bearer(client: SupabaseClient, http: MagicMock, make_response) -> None:
    http.request.return_value = make_response(200, [])
    client.set_access_token("user-jwt")

    client.table("users").select("*").execute()

    headers = sent(http)["headers"]
    assert headers["Authorization"] == "Bearer user-jwt"
    assert headers["apikey"] == ANON_KEY


def test_default_backend_is_requests(make_response) -> None:
    """Without an injected backend the client calls requests.request."""
    c = SupabaseClient(url=SUPABASE_URL + "/", api_key=ANON_KEY, timeout=3)
    with patch(
        "marketplace_admin.infrastructure.supabase.rest_client.requests.request",
        return_value=make_response(200, [{"id": "x"}]),
    ) as mock_request:
        result = c.table("users").select("id").execute()

    assert result.data == [{"id": "x"}]
    assert mock_request.call_args.args[1] == f"{SUPABASE_URL}/rest/v1/users"
    assert mock_request.call_args.kwargs["timeout"] == 3


def test_client_reads_settings_from_env(monkeypatch) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://env.supabase.co/")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "env-key")
    monkeypatch.setenv("API_TIMEOUT_SECONDS", "12.5")
    with patch("marketplace_admin.utils.config.load_config"):
        c = SupabaseClient()
    assert c.url == "https://env.supabase.co"
    assert c.api_key == "env-key"
    assert c.timeout == 12.5


def test_client_pickles_without_backend(client: SupabaseClient) -> None:
    """Session state pickles the client; the HTTP backend is restored as requests."""
    client.set_access_token("tok")
    restored = pickle.loads(pickle.dumps(client))
    assert restored.access_token == "tok"
    assert restored.url == SUPABASE_URL
    assert restored._http is requests
