"""
GoTrue (Supabase Auth) REST client: password sign-in, sign-up, sign-out and
token introspection.
"""

from __future__ import annotations

from typing import Any

import requests

from marketplace_admin.domains.models import Session
from marketplace_admin.infrastructure.supabase.rest_client import SupabaseClient
from marketplace_admin.utils.errors import NETWORK_ERROR_CODE, TIMEOUT_ERROR_CODE, ApiError
from marketplace_admin.utils.logger import get_logger

logger = get_logger()

AUTH_PATH = "/auth/v1"


def _auth_error(r: Any) -> ApiError:
    status = getattr(r, "status_code", None)
    try:
        body = r.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = (
            body.get("error_description")
            or body.get("msg")
            or body.get("message")
            or body.get("error")
        )
        code = body.get("error_code") or body.get("code") or body.get("error")
        if message:
            return ApiError(str(message), code=str(code) if code is not None else None, status=status)
    return ApiError(f"Authentication request failed with status {status}", status=status)


def session_from_payload(payload: dict[str, Any]) -> Session | None:
    token = payload.get("access_token")
    if not token:
        return None
    return Session(
        access_token=token,
        refresh_token=payload.get("refresh_token") or "",
        expires_at=int(payload.get("expires_at") or 0),
    )


class AuthClient:
    """Talks to `<project>/auth/v1` with the same key and HTTP backend as the REST client."""

    def __init__(self, client: SupabaseClient) -> None:
        self._client = client

    @property
    def auth_url(self) -> str:
        return f"{self._client.url}{AUTH_PATH}"

    def _post(
        self,
        path: str,
        payload: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
        access_token: str | None = None,
        method: str = "POST",
    ) -> dict[str, Any]:
        headers = {
            "apikey": self._client.api_key,
            "Authorization": f"Bearer {access_token or self._client.api_key}",
            "Content-Type": "application/json",
        }
        url = f"{self.auth_url}{path}"
        try:
            r = self._client._http.request(
                method,
                url,
                params=params,
                headers=headers,
                json=payload,
                timeout=self._client.timeout,
            )
        except requests.Timeout as e:
            raise ApiError("Request timed out. Please try again.", code=TIMEOUT_ERROR_CODE) from e
        except requests.RequestException as e:
            logger.warning("Auth %s %s failed: %s", method, path, e)
            raise ApiError(f"Network error: {e}", code=NETWORK_ERROR_CODE) from e

        if not 200 <= r.status_code < 300:
            err = _auth_error(r)
            logger.warning("Auth %s %s -> %s %s", method, path, r.status_code, err.message)
            raise err
        if r.status_code == 204 or not (r.content or b""):
            return {}
        try:
            data = r.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}

    def sign_in_with_password(self, email: str, password: str) -> tuple[Session | None, dict[str, Any] | None]:
        """
        Returns:
            (session, auth_user) where auth_user is the GoTrue user object.
        """
        data = self._post(
            "/token",
            {"email": email, "password": password},
            params={"grant_type": "password"},
        )
        return session_from_payload(data), data.get("user")

    def sign_up(self, email: str, password: str, data: dict[str, Any] | None = None) -> dict[str, Any] | None:
        """Create an auth user. Returns the auth user (None if the server withheld it)."""
        payload: dict[str, Any] = {"email": email, "password": password}
        if data:
            payload["data"] = data
        body = self._post("/signup", payload)
        if "user" in body:
            return body.get("user")
        return body if body.get("id") else None

    def sign_out(self, access_token: str) -> None:
        self._post("/logout", access_token=access_token)

    def get_user(self, access_token: str) -> dict[str, Any] | None:
        data = self._post("/user", access_token=access_token, method="GET")
        return data or None

    def refresh_session(self, refresh_token: str) -> tuple[Session | None, dict[str, Any] | None]:
        data = self._post(
            "/token",
            {"refresh_token": refresh_token},
            params={"grant_type": "refresh_token"},
        )
        return session_from_payload(data), data.get("user")
