"""
Admin authentication: password sign-in gated on the `users.user_type` role,
sign-out, registration and session validation.
"""

from __future__ import annotations

import time

from marketplace_admin.domains.constants import ADMIN_USER_TYPE, AUTH_CHECK_TIMEOUT_SECONDS
from marketplace_admin.domains.models import CreateUserInput, Row, Session
from marketplace_admin.infrastructure.supabase.auth_client import AuthClient
from marketplace_admin.infrastructure.supabase.rest_client import SupabaseClient
from marketplace_admin.services.queries import failure_message, fetch_by_id
from marketplace_admin.utils.errors import ApiError, with_timeout
from marketplace_admin.utils.logger import get_logger

logger = get_logger()

USERS_TABLE = "users"
ACCESS_DENIED_MESSAGE = "Access denied. Admin privileges required."
PROFILE_FAILED_MESSAGE = "Failed to verify user profile."
AUTH_FAILED_MESSAGE = "Authentication failed. Please try again."
SESSION_EXPIRED_MESSAGE = "Your session has expired. Please sign in again."
# Refresh this many seconds before the access token actually expires.
REFRESH_LEEWAY_SECONDS = 60


def _sign_out_quietly(auth: AuthClient, client: SupabaseClient, session: Session | None) -> None:
    client.set_access_token(None)
    if session is None:
        return
    try:
        auth.sign_out(session.access_token)
    except ApiError as e:
        logger.warning("Sign-out after failed admin check also failed: %s", e.message)


def is_admin(user: Row | None) -> bool:
    return bool(user) and user.get("user_type") == ADMIN_USER_TYPE


def login(client: SupabaseClient, email: str, password: str) -> tuple[Session, Row]:
    """
    Sign in and require an admin profile.

    On success the client is left authenticated as the admin.

    Raises:
        ApiError: bad credentials, missing profile, or a non-admin role.
    """
    auth = AuthClient(client)
    with failure_message("An unexpected error occurred"):
        session, auth_user = auth.sign_in_with_password(email, password)
        if session is None or not auth_user:
            raise ApiError(AUTH_FAILED_MESSAGE)

        client.set_access_token(session.access_token)
        try:
            profile = fetch_by_id(client, USERS_TABLE, auth_user["id"])
        except ApiError as e:
            _sign_out_quietly(auth, client, session)
            raise ApiError(PROFILE_FAILED_MESSAGE, code=e.code) from e

        if not is_admin(profile):
            logger.info("Rejected non-admin sign-in for user %s", auth_user.get("id"))
            _sign_out_quietly(auth, client, session)
            raise ApiError(ACCESS_DENIED_MESSAGE, code="not_admin")

    logger.info("Admin %s signed in", profile.get("id"))
    return session, profile


def logout(client: SupabaseClient, session: Session | None) -> None:
    """Revoke the session remotely; the client always drops its token."""
    auth = AuthClient(client)
    client.set_access_token(None)
    if session is None:
        return
    with failure_message("Failed to logout"):
        auth.sign_out(session.access_token)


def register(client: SupabaseClient, data: CreateUserInput) -> Row:
    """Create the auth user and its `users` profile row. Does not sign in."""
    auth = AuthClient(client)
    with failure_message("Registration failed"):
        auth_user = auth.sign_up(
            data.email,
            data.password,
            {"full_name": data.full_name, "user_type": data.user_type},
        )
        if not auth_user or not auth_user.get("id"):
            raise ApiError("Registration failed. Please try again.")
        profile = {
            "id": auth_user["id"],
            "email": data.email,
            "full_name": data.full_name,
            "user_type": data.user_type,
            "is_active": True,
            "is_email_verified": False,
            "is_phone_verified": False,
        }
        row = client.table(USERS_TABLE).insert(profile).select("*").single().execute().data
    logger.info("Registered %s user %s", data.user_type, auth_user["id"])
    return row


def get_current_user(
    client: SupabaseClient,
    session: Session | None,
    timeout: float = AUTH_CHECK_TIMEOUT_SECONDS,
) -> Row | None:
    """
    Resolve the admin behind a stored session.

    Returns:
        The profile row, or None when there is no session or the token is
        no longer valid.

    Raises:
        ApiError: the profile lookup failed, timed out, or the user is not an admin.
    """
    if session is None:
        return None
    auth = AuthClient(client)
    with failure_message("Failed to get current user"):
        try:
            auth_user = with_timeout(auth.get_user, timeout, session.access_token)
        except ApiError as e:
            if e.status in (401, 403):
                logger.info("Stored session rejected (%s)", e.status)
                client.set_access_token(None)
                return None
            raise
        if not auth_user or not auth_user.get("id"):
            return None
        client.set_access_token(session.access_token)
        profile = with_timeout(fetch_by_id, timeout, client, USERS_TABLE, auth_user["id"])
        if not is_admin(profile):
            raise ApiError(ACCESS_DENIED_MESSAGE, code="not_admin")
    return profile


def session_expired(session: Session, now: float | None = None) -> bool:
    """True once the access token is within REFRESH_LEEWAY_SECONDS of expiry."""
    if not session.expires_at:
        return False
    now = time.time() if now is None else now
    return now >= session.expires_at - REFRESH_LEEWAY_SECONDS


def refresh(client: SupabaseClient, session: Session) -> Session:
    """Exchange the refresh token for a new session and authenticate the client with it."""
    auth = AuthClient(client)
    with failure_message("Failed to refresh session"):
        new_session, _ = auth.refresh_session(session.refresh_token)
        if new_session is None:
            raise ApiError(SESSION_EXPIRED_MESSAGE, code="session_expired", status=401)
    client.set_access_token(new_session.access_token)
    logger.info("Session refreshed")
    return new_session
