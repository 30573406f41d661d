"""
Session-held authentication state: the signed-in admin and their tokens.
"""

from __future__ import annotations

from typing import Any

from marketplace_admin.domains.models import CreateUserInput, Row, Session
from marketplace_admin.infrastructure.supabase.rest_client import SupabaseClient
from marketplace_admin.orchestration.list_state import Notifier, SessionBound
from marketplace_admin.services import auth_service
from marketplace_admin.utils.errors import ApiError
from marketplace_admin.utils.logger import get_logger

logger = get_logger()


class AuthState(SessionBound):
    def __init__(self, client: SupabaseClient | None = None, notifier: Notifier | None = None) -> None:
        super().__init__(client, notifier)
        self.user: Row | None = None
        self.session: Session | None = None
        self.error: str | None = None
        self.loading = False
        self._restored = False

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def __setstate__(self, state: dict[str, Any]) -> None:
        super().__setstate__(state)
        # Unpickled sessions are re-validated by restore()
        self._restored = False

    def attach(self, client: SupabaseClient, notifier: Notifier | None = None) -> None:
        super().attach(client, notifier)
        client.set_access_token(self.session.access_token if self.session else None)

    def _clear(self) -> None:
        self.user = None
        self.session = None
        if self._client is not None:
            self._client.set_access_token(None)

    def restore(self) -> None:
        """
        Re-validate a session carried over from a previous run, once.

        Sessions set by `login()` are already validated; one that came back
        through unpickling is checked against the auth server again.

        An invalid or non-admin session is cleared; lookup failures are
        recorded in `error` and also clear the session.
        """
        if self._restored:
            return
        self._restored = True
        if self.session is None:
            return
        self.loading = True
        try:
            user = auth_service.get_current_user(self.client, self.session)
        except ApiError as e:
            logger.warning("Session restore failed: %s", e.message)
            self.error = e.message
            self._clear()
            return
        finally:
            self.loading = False
        if user is None:
            self._clear()
        else:
            self.user = user

    def ensure_fresh(self) -> None:
        """Refresh an expiring access token; an unrefreshable session signs the admin out."""
        if self.session is None or not auth_service.session_expired(self.session):
            return
        try:
            self.session = auth_service.refresh(self.client, self.session)
        except ApiError as e:
            logger.info("Session refresh failed: %s", e.message)
            self.error = e.message
            self._clear()

    def login(self, email: str, password: str) -> bool:
        self.loading = True
        self.error = None
        try:
            session, user = auth_service.login(self.client, email, password)
        except ApiError as e:
            self.error = e.message
            self._clear()
            return False
        finally:
            self.loading = False
        self.session = session
        self.user = user
        self._restored = True
        self._notify("success", "Welcome back!")
        return True

    def logout(self) -> None:
        """Sign out remotely; local state is cleared even when that fails."""
        self.loading = True
        session = self.session
        try:
            auth_service.logout(self.client, session)
        except ApiError as e:
            logger.warning("Remote sign-out failed: %s", e.message)
            self.error = e.message
        finally:
            self._clear()
            self.loading = False
        self._notify("info", "You have been logged out")

    def register(self, data: CreateUserInput) -> Row | None:
        """Create an account. The current session (if any) is left as is."""
        self.loading = True
        self.error = None
        try:
            profile = auth_service.register(self.client, data)
        except ApiError as e:
            self.error = e.message
            return None
        finally:
            self.loading = False
        self._notify("success", "Account created successfully")
        return profile

    def clear_error(self) -> None:
        self.error = None
