"""Backend client protocol and the Supabase adapter."""

from typing import Any, Dict, List, Mapping, Optional, Protocol

import httpx
from postgrest.exceptions import APIError
from supabase import Client, create_client

from src.core.errors import AuthError, StoreError
from src.config.settings import Settings, get_settings
from src.config.messages import ERROR_BACKEND_NOT_CONFIGURED
from src.config.logging_config import get_logger

logger = get_logger(__name__)


class BackendClient(Protocol):
    """Capabilities the rate repository needs from the hosted backend.

    Filters are column -> value equality matches. Implementations raise
    StoreError when an operation fails, including transport failures.
    """

    def current_user_id(self) -> Optional[str]:
        """Id of the authenticated user, or None when signed out."""
        ...

    def insert(self, table: str, row: Mapping[str, Any]) -> Dict[str, Any]:
        """Insert one row and return it as stored (with generated columns)."""
        ...

    def select(
        self,
        table: str,
        filters: Mapping[str, Any],
        order_by: str,
        descending: bool = True
    ) -> List[Dict[str, Any]]:
        """Return all rows matching ``filters`` sorted by ``order_by``."""
        ...

    def delete(self, table: str, filters: Mapping[str, Any]) -> None:
        """Delete every row matching ``filters``."""
        ...


def _error_message(error: Exception) -> str:
    """Extract the human-readable part of a backend exception."""
    return getattr(error, "message", None) or str(error)


class SupabaseBackend:
    """BackendClient implementation on top of supabase-py.

    Row-level security on the Supabase side restricts every query to the
    signed-in user; this adapter only forwards calls and normalizes errors.
    """

    def __init__(self, client: Client):
        """
        Initialize the adapter.

        Args:
            client: A configured supabase Client
        """
        self.client = client

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "SupabaseBackend":
        """Create a client from settings and sign in if credentials are set.

        Args:
            settings: Settings to use (defaults to the global settings)

        Returns:
            SupabaseBackend instance

        Raises:
            AuthError: If URL/key are missing or the configured sign-in fails
        """
        settings = settings or get_settings()
        if not settings.has_backend_credentials():
            raise AuthError(ERROR_BACKEND_NOT_CONFIGURED)

        backend = cls(create_client(settings.supabase_url, settings.supabase_anon_key))
        if settings.supabase_email and settings.supabase_password:
            backend.sign_in(settings.supabase_email, settings.supabase_password)
        return backend

    def sign_in(self, email: str, password: str) -> str:
        """Sign in with email and password.

        Args:
            email: Account email
            password: Account password

        Returns:
            Id of the signed-in user

        Raises:
            AuthError: If the credentials are rejected
        """
        try:
            response = self.client.auth.sign_in_with_password({"email": email, "password": password})
        except Exception as e:
            logger.warning(f"Sign-in failed for {email}: {e}")
            raise AuthError(_error_message(e)) from e

        if response is None or response.user is None:
            raise AuthError(f"No user returned for {email}")
        logger.info(f"User authenticated: {response.user.email}")
        return str(response.user.id)

    def sign_out(self) -> None:
        """End the current session."""
        self.client.auth.sign_out()

    def current_user_id(self) -> Optional[str]:
        """Look up the authenticated user.

        Returns:
            User id, or None when there is no session. An expired or
            rejected session is reported as None as well.
        """
        try:
            response = self.client.auth.get_user()
        except Exception as e:
            logger.warning(f"User lookup failed: {e}")
            return None

        if response is None or response.user is None:
            return None
        return str(response.user.id)

    def insert(self, table: str, row: Mapping[str, Any]) -> Dict[str, Any]:
        try:
            response = self.client.table(table).insert(dict(row)).execute()
        except (APIError, httpx.HTTPError) as e:
            logger.error(f"Supabase insert error: {_error_message(e)}")
            raise StoreError(_error_message(e)) from e

        if not response.data:
            raise StoreError(f"Insert into {table} returned no row")
        return response.data[0]

    def select(
        self,
        table: str,
        filters: Mapping[str, Any],
        order_by: str,
        descending: bool = True
    ) -> List[Dict[str, Any]]:
        query = self.client.table(table).select("*")
        for column, value in filters.items():
            query = query.eq(column, value)
        query = query.order(order_by, desc=descending)

        try:
            response = query.execute()
        except (APIError, httpx.HTTPError) as e:
            logger.error(f"Supabase select error: {_error_message(e)}")
            raise StoreError(_error_message(e)) from e
        return list(response.data or [])

    def delete(self, table: str, filters: Mapping[str, Any]) -> None:
        query = self.client.table(table).delete()
        for column, value in filters.items():
            query = query.eq(column, value)

        try:
            query.execute()
        except (APIError, httpx.HTTPError) as e:
            logger.error(f"Supabase delete error: {_error_message(e)}")
            raise StoreError(_error_message(e)) from e
